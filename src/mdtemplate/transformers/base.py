"""Base class for content transformers applied to converted HTML.

The converter runs a pipeline of transformers over the HTML the Markdown
converter produced. Each transformer handles one category of repair.

Transformation Order:
1. TEMPLATE CALLS  - {{ template &ldquo;name&rdquo; param }} -> {{ template "name" param }}
2. QUOTE ENTITIES  - any remaining &ldquo; / &rdquo; -> "
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class TransformContext:
    """Context provided to transformers while repairing one unit.

    Carries the unit name for diagnostics and counters for reporting.
    """

    unit_name: str = ""

    # Tracking for reports
    template_calls_rewritten: int = 0
    entities_replaced: int = 0

    def record_template_call(self) -> None:
        """Record that a template call directive was rewritten."""
        self.template_calls_rewritten += 1

    def record_entities(self, count: int) -> None:
        """Record stray quote entities replaced by the cleanup pass."""
        self.entities_replaced += count


class ContentTransformer(ABC):
    """Abstract base class for content transformers.

    Transformers are stateless and receive context through transform().
    """

    @abstractmethod
    def transform(self, content: str, context: TransformContext) -> str:
        """Transform content using this transformer's rules.

        Args:
            content: Input content to transform
            context: TransformContext for the current unit

        Returns:
            Transformed content
        """
        ...

    def get_name(self) -> str:
        """Get transformer name for logging/debugging."""
        return self.__class__.__name__


class TransformerPipeline:
    """Execute a sequence of transformers on content.

    Example:
        pipeline = TransformerPipeline([
            TemplateCallRewriter(),
            QuoteEntityCleaner(),
        ])
        result = pipeline.execute(html, context)
    """

    def __init__(self, transformers: List[ContentTransformer]) -> None:
        self.transformers = transformers

    def execute(self, content: str, context: TransformContext) -> str:
        """Execute all transformers in sequence."""
        result = content
        for transformer in self.transformers:
            logger.debug("Running %s on %r", transformer.get_name(), context.unit_name)
            result = transformer.transform(result, context)
        return result
