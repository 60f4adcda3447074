"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse
from pathlib import Path


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag pointing at a YAML settings file."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file (default: built-in settings)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts."""
    add_json_flag(parser)
    add_config_flag(parser)


__all__ = ["add_json_flag", "add_config_flag", "add_standard_flags"]
