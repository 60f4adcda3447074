"""Tests for the template call rewrite and quote-entity cleanup stages."""

from __future__ import annotations

import logging

from mdtemplate.converter import DirectiveConverter
from mdtemplate.transformers import (
    QuoteEntityCleaner,
    TemplateCallRewriter,
    TransformContext,
    TransformerPipeline,
)


def repair(html: str) -> str:
    return DirectiveConverter(convert=lambda raw: raw.decode("utf-8")).repair(html)


def test_rewrites_curly_quoted_call_with_parameter() -> None:
    html = "<p>{{ template &ldquo;child&rdquo; .Param }}</p>"
    assert repair(html) == '<p>{{ template "child" .Param }}</p>'


def test_rewrites_call_without_parameter() -> None:
    html = "<p>{{template &ldquo;footer&rdquo;}}</p>"
    assert repair(html) == '<p>{{ template "footer" }}</p>'


def test_rewrite_is_independent_of_surrounding_html() -> None:
    html = '<div class="x"><em>a</em> {{ template &ldquo;greet&rdquo; . }} <b>b</b></div>'
    assert '{{ template "greet" . }}' in repair(html)
    assert repair(html).startswith('<div class="x"><em>a</em> ')


def test_each_line_rewritten_independently() -> None:
    html = (
        "<p>{{ template &ldquo;a&rdquo; .A }}</p>\n"
        "<p>{{ template &ldquo;b&rdquo; .B }}</p>"
    )
    assert repair(html) == (
        '<p>{{ template "a" .A }}</p>\n'
        '<p>{{ template "b" .B }}</p>'
    )


def test_two_calls_on_one_line() -> None:
    html = "{{ template &ldquo;a&rdquo; . }}{{ template &ldquo;b&rdquo; .X }}"
    assert repair(html) == '{{ template "a" . }}{{ template "b" .X }}'


def test_call_split_across_lines_is_not_rewritten_but_quotes_are_cleaned() -> None:
    html = "{{ template &ldquo;a\n&rdquo; . }}"
    context = TransformContext()
    out = TemplateCallRewriter().transform(html, context)
    assert out == html
    assert context.template_calls_rewritten == 0
    assert repair(html) == '{{ template "a\n" . }}'


def test_text_without_directives_only_gets_quotes_straightened() -> None:
    html = "<p>She said &ldquo;hi&rdquo; twice.</p>"
    assert repair(html) == '<p>She said "hi" twice.</p>'


def test_text_without_entities_passes_through() -> None:
    html = "<h1>Plain</h1>\n<p>Nothing to see.</p>"
    assert repair(html) == html


def test_cleanup_is_idempotent() -> None:
    cleaner = QuoteEntityCleaner()
    once = cleaner.transform("&ldquo;x&rdquo; and &ldquo;y&rdquo;", TransformContext())
    twice = cleaner.transform(once, TransformContext())
    assert once == twice == '"x" and "y"'


def test_context_counts_rewrites_and_entities() -> None:
    context = TransformContext(unit_name="page")
    pipeline = TransformerPipeline([TemplateCallRewriter(), QuoteEntityCleaner()])
    pipeline.execute("{{ template &ldquo;a&rdquo; . }} &ldquo;q&rdquo;", context)
    assert context.template_calls_rewritten == 1
    assert context.entities_replaced == 2


def test_pipeline_logs_each_stage_by_name(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="mdtemplate.transformers.base")
    pipeline = TransformerPipeline([TemplateCallRewriter(), QuoteEntityCleaner()])
    pipeline.execute("x", TransformContext(unit_name="page"))
    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Running TemplateCallRewriter on 'page'",
        "Running QuoteEntityCleaner on 'page'",
    ]
