"""Preprocessor configuration.

Settings live in an optional YAML file, either under a top-level
``mdtemplate:`` key or as top-level keys::

    mdtemplate:
      suffix: .go.md
      markdown_extensions: [smarty, tables]
      debug: true
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigurationError

CONFIG_SECTION = "mdtemplate"
DEFAULT_SUFFIX = ".go.md"


def _default_extensions() -> List[str]:
    return ["smarty"]


@dataclass(frozen=True)
class PreprocessorConfig:
    """Settings shared by the acquisition, conversion and registration stages."""

    # Token stripped from file base names to derive template names
    suffix: str = DEFAULT_SUFFIX
    # Python-Markdown extensions; "smarty" produces the curly-quote entities
    markdown_extensions: List[str] = field(default_factory=_default_extensions)
    # Log every generated envelope at DEBUG level
    debug: bool = False
    # Use jinja2.StrictUndefined in namespaces built from this config
    strict_undefined: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PreprocessorConfig":
        """Build a config from a mapping, rejecting unknown keys and bad types."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        if "suffix" in data:
            if not isinstance(data["suffix"], str):
                raise ConfigurationError("'suffix' must be a string")
            values["suffix"] = data["suffix"]
        if "markdown_extensions" in data:
            exts = data["markdown_extensions"]
            if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
                raise ConfigurationError("'markdown_extensions' must be a list of strings")
            values["markdown_extensions"] = list(exts)
        for flag in ("debug", "strict_undefined"):
            if flag in data:
                if not isinstance(data[flag], bool):
                    raise ConfigurationError(f"'{flag}' must be a boolean")
                values[flag] = data[flag]
        return cls(**values)


def load_config(path: Optional[Path] = None) -> PreprocessorConfig:
    """Load configuration from ``path``.

    A missing path (or ``None``) yields the defaults. Unreadable or malformed
    YAML raises ``ConfigurationError``.
    """
    if path is None:
        return PreprocessorConfig()

    path = Path(path)
    if not path.exists():
        return PreprocessorConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load config {path}: {e}") from e

    if data is None:
        return PreprocessorConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must be a mapping")

    section = data.get(CONFIG_SECTION, data)
    if section is None:
        return PreprocessorConfig()
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{CONFIG_SECTION}' must be a mapping")
    return PreprocessorConfig.from_dict(section)


__all__ = ["CONFIG_SECTION", "DEFAULT_SUFFIX", "PreprocessorConfig", "load_config"]
