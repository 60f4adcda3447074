"""Top-level mdtemplate commands (auto-discovered)."""
