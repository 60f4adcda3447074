"""Markdown to HTML conversion.

Any callable ``convert(source: bytes) -> str`` can act as the converter. The
default wraps Python-Markdown with the ``smarty`` extension, which renders
straight double quotes as ``&ldquo;``/``&rdquo;`` entities.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

import markdown

from .errors import MarkupConversionError

logger = logging.getLogger(__name__)

ConvertFunc = Callable[[bytes], str]

DEFAULT_EXTENSIONS = ("smarty",)


class MarkdownConverter:
    """Callable Markdown converter backed by Python-Markdown."""

    def __init__(self, extensions: Optional[Iterable[str]] = None) -> None:
        self.extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)
        self._md = markdown.Markdown(extensions=self.extensions, output_format="html")

    def __call__(self, source: bytes) -> str:
        text = source.decode("utf-8")
        try:
            return self._md.convert(text)
        finally:
            self._md.reset()

    def __repr__(self) -> str:
        return f"MarkdownConverter(extensions={self.extensions!r})"


def run_converter(convert: ConvertFunc, name: str, raw: bytes) -> str:
    """Run ``convert`` on ``raw``, turning any failure into MarkupConversionError."""
    try:
        html = convert(raw)
    except Exception as e:
        markup = raw.decode("utf-8", errors="replace")
        raise MarkupConversionError(name, str(e) or e.__class__.__name__, markup) from e
    if not isinstance(html, str):
        markup = raw.decode("utf-8", errors="replace")
        raise MarkupConversionError(
            name, f"converter returned {type(html).__name__}, expected str", markup
        )
    logger.debug("Converted %r to %d characters of HTML", name, len(html))
    return html


__all__ = ["ConvertFunc", "DEFAULT_EXTENSIONS", "MarkdownConverter", "run_converter"]
