"""Directive repair transformers.

The Markdown typographer turns the straight quotes of an authored
``{{ template "name" .Param }}`` into ``&ldquo;``/``&rdquo;`` entities. These
transformers put the engine's call syntax back.

Input/output contract (independent of the Markdown converter):
- in:  ``{{ template &ldquo;NAME&rdquo; PARAM }}`` anywhere on a single line
- out: ``{{ template "NAME" PARAM }}`` with NAME and PARAM verbatim
"""
from __future__ import annotations

import re

from .base import ContentTransformer, TransformContext

LEFT_QUOTE_ENTITY = "&ldquo;"
RIGHT_QUOTE_ENTITY = "&rdquo;"


class TemplateCallRewriter(ContentTransformer):
    """Rewrite curly-quoted template calls to the engine's call syntax."""

    # '.' never crosses a newline, so every match stays on one line
    TEMPLATE_CALL_PATTERN = re.compile(
        r"\{\{\s*template\s*&ldquo;(?P<name>.*?)&rdquo;\s*(?P<parameter>.*?)\s*\}\}",
        re.MULTILINE,
    )

    def transform(self, content: str, context: TransformContext) -> str:
        def replacer(match: re.Match[str]) -> str:
            context.record_template_call()
            name = match.group("name")
            parameter = match.group("parameter")
            if parameter:
                return f'{{{{ template "{name}" {parameter} }}}}'
            return f'{{{{ template "{name}" }}}}'

        return self.TEMPLATE_CALL_PATTERN.sub(replacer, content)


class QuoteEntityCleaner(ContentTransformer):
    """Replace any remaining curly-quote entities with straight quotes."""

    def transform(self, content: str, context: TransformContext) -> str:
        count = content.count(LEFT_QUOTE_ENTITY) + content.count(RIGHT_QUOTE_ENTITY)
        if not count:
            return content
        context.record_entities(count)
        content = content.replace(LEFT_QUOTE_ENTITY, '"')
        return content.replace(RIGHT_QUOTE_ENTITY, '"')
