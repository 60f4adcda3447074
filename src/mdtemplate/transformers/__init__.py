"""HTML repair transformers for converted Markdown."""
from __future__ import annotations

from .base import ContentTransformer, TransformContext, TransformerPipeline
from .directives import QuoteEntityCleaner, TemplateCallRewriter

__all__ = [
    "ContentTransformer",
    "TransformContext",
    "TransformerPipeline",
    "QuoteEntityCleaner",
    "TemplateCallRewriter",
]
