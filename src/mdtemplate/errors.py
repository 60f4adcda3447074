"""Exception classes for the mdtemplate pipeline.

Every failure is raised to the immediate caller; nothing is retried. Errors
from acquisition share the ``SourceError`` base so callers can tell a failed
acquisition apart from conversion and parse failures.
"""
from __future__ import annotations

from typing import Optional


class MdTemplateError(Exception):
    """Base class for all mdtemplate errors."""
    pass


class ConfigurationError(MdTemplateError):
    """Raised when a required collaborator or setting is missing or invalid."""
    pass


class SourceError(MdTemplateError):
    """Raised when source acquisition failed."""
    pass


class PatternError(SourceError):
    """Raised when a glob pattern is syntactically invalid."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"mdtemplate: bad pattern {pattern!r}: {reason}")
        self.pattern = pattern


class NoMatchError(SourceError):
    """Raised when a glob pattern matches no files."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"mdtemplate: pattern matches no files: {pattern!r}")
        self.pattern = pattern


class NoFilesError(SourceError):
    """Raised when an explicit file list is empty."""

    def __init__(self) -> None:
        super().__init__("mdtemplate: no files named in call to parse")


class ReadError(SourceError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"mdtemplate: cannot read {path}: {reason}")
        self.path = path


class MarkupConversionError(MdTemplateError):
    """Raised when the Markdown converter rejects its input.

    Fatal for the batch: the unit is not registered and later units are not
    processed.
    """

    def __init__(self, name: str, reason: str, markup: str) -> None:
        super().__init__(
            f"\nfailed to convert Markdown to HTML for {name!r}: {reason}\n\n"
            f"Markdown:\n{markup}\n"
        )
        self.name = name
        self.markup = markup


class TemplateSyntaxError(MdTemplateError):
    """Raised when generated template source fails to parse.

    The message carries the engine diagnostic followed by the full generated
    source, since that source is never hand-written.
    """

    def __init__(self, name: str, message: str, source: str, lineno: Optional[int] = None) -> None:
        super().__init__(f"{message}\n Template:\n{source}")
        self.name = name
        self.engine_message = message
        self.source = source
        self.lineno = lineno


__all__ = [
    "MdTemplateError",
    "ConfigurationError",
    "SourceError",
    "PatternError",
    "NoMatchError",
    "NoFilesError",
    "ReadError",
    "MarkupConversionError",
    "TemplateSyntaxError",
]
