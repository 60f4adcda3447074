"""Markup-to-directive conversion.

Runs a unit through the Markdown converter, then repairs the template call
directives the typographer mangled. The repair stage (``repair``) works on
plain HTML text and does not depend on which Markdown converter produced it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .markup import ConvertFunc, MarkdownConverter, run_converter
from .sources import Unit
from .transformers import (
    QuoteEntityCleaner,
    TemplateCallRewriter,
    TransformContext,
    TransformerPipeline,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertedFragment:
    """Repaired HTML for one unit."""

    name: str
    html: str


class DirectiveConverter:
    """Convert units to engine-ready HTML fragments."""

    def __init__(self, convert: Optional[ConvertFunc] = None) -> None:
        self.convert = convert if convert is not None else MarkdownConverter()
        self.pipeline = TransformerPipeline([
            TemplateCallRewriter(),
            QuoteEntityCleaner(),
        ])

    def repair(self, html: str, context: Optional[TransformContext] = None) -> str:
        """Rewrite curly-quoted template calls, then clean up stray entities."""
        return self.pipeline.execute(html, context or TransformContext())

    def convert_unit(self, unit: Unit) -> ConvertedFragment:
        """Convert one unit.

        Raises:
            MarkupConversionError: the Markdown converter failed
        """
        html = run_converter(self.convert, unit.name, unit.raw)
        context = TransformContext(unit_name=unit.name)
        html = self.repair(html, context)
        logger.debug(
            "Repaired %r: %d template call(s), %d stray quote entities",
            unit.name,
            context.template_calls_rewritten,
            context.entities_replaced,
        )
        return ConvertedFragment(name=unit.name, html=html)


__all__ = ["ConvertedFragment", "DirectiveConverter"]
