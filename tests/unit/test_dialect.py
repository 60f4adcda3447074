"""Tests for translating brace actions into Jinja2 source."""

from __future__ import annotations

import jinja2
import pytest

from mdtemplate.dialect import translate, translate_expression


def body(source: str) -> str:
    return translate(source).body.source


@pytest.mark.parametrize(
    "expr,expected",
    [
        (".", "dot"),
        (".Title", "dot.Title"),
        (".Site.Nav", "dot.Site.Nav"),
        ("nil", "none"),
        ("3.5", "3.5"),
        ('"a.b"', '"a.b"'),
        ("`raw`", "'raw'"),
        ('eq .A "x"', 'eq dot.A "x"'),
    ],
)
def test_translate_expression(expr: str, expected: str) -> None:
    assert translate_expression(expr) == expected


def test_define_is_split_out_of_body() -> None:
    result = translate('{{ define "page" }}\n<h1>{{ .Title }}</h1>{{ end }}')
    assert result.body.source == ""
    assert not result.body.has_content
    assert list(result.definitions) == ["page"]
    assert result.definitions["page"].source == "\n<h1>{{ dot.Title }}</h1>"


def test_template_call_becomes_scoped_include() -> None:
    assert body('{{ template "nav" .Site }}') == (
        '{% with dot = dot.Site %}{% include "nav" %}{% endwith %}'
    )
    assert body('{{ template "nav" }}') == (
        '{% with dot = none %}{% include "nav" %}{% endwith %}'
    )


def test_if_else_if_else() -> None:
    source = "{{ if .A }}yes{{ else if .B }}maybe{{ else }}no{{ end }}"
    assert body(source) == "{% if dot.A %}yes{% elif dot.B %}maybe{% else %}no{% endif %}"


def test_range_with_else() -> None:
    source = "{{ range .Items }}<li>{{ . }}</li>{{ else }}none{{ end }}"
    assert body(source) == "{% for dot in dot.Items %}<li>{{ dot }}</li>{% else %}none{% endfor %}"


def test_with_rebinds_dot() -> None:
    assert body("{{ with .User }}{{ .Name }}{{ end }}") == (
        "{% if dot.User %}{% with dot = dot.User %}{{ dot.Name }}{% endwith %}{% endif %}"
    )


def test_with_else_keeps_outer_dot() -> None:
    assert body("{{ with .U }}a{{ else }}b{{ end }}") == (
        "{% if dot.U %}{% with dot = dot.U %}a{% endwith %}{% else %}b{% endif %}"
    )


def test_block_defines_and_calls() -> None:
    result = translate('{{ block "side" .Nav }}default{{ end }}')
    assert result.body.source == '{% with dot = dot.Nav %}{% include "side" %}{% endwith %}'
    assert result.definitions["side"].source == "default"


def test_comment_does_not_count_as_content() -> None:
    result = translate("a{{/* note */}}b")
    assert result.body.source == "a{# note #}b"
    assert not translate("  {{/* only */}}\n").body.has_content


def test_trim_markers() -> None:
    assert body("a  {{- .X -}}  b") == "a{{ dot.X }}b"


def test_literal_jinja_markup_is_escaped() -> None:
    assert body("x {% y") == "{% raw %}x {% y{% endraw %}"


def test_value_action_named_like_keyword_prefix() -> None:
    assert body("{{ templateName }}") == "{{ templateName }}"


@pytest.mark.parametrize(
    "source,message",
    [
        ("{{ if .A }}x", "unclosed if"),
        ("{{ end }}", "unexpected end"),
        ("{{ else }}", "unexpected else"),
        ('{{ define "a" }}{{ define "b" }}{{ end }}{{ end }}', "unexpected define"),
        ("x {{ .A", "unclosed action"),
        ("{{ }}", "missing value"),
        ("{{ if }}{{ end }}", "missing value for if"),
        ('{{ define a }}{{ end }}', "malformed define"),
        ('{{ define "a" }}x{{ end }}{{ define "a" }}y{{ end }}', "multiple definition"),
        ("{{ if .A }}{{ else }}{{ else }}{{ end }}", "unexpected else"),
    ],
)
def test_structural_errors(source: str, message: str) -> None:
    with pytest.raises(jinja2.TemplateSyntaxError) as exc:
        translate(source, name="t")
    assert message in exc.value.message


def test_error_reports_line_number() -> None:
    with pytest.raises(jinja2.TemplateSyntaxError) as exc:
        translate("one\ntwo\n{{ end }}")
    assert exc.value.lineno == 3


def test_empty_redefinition_in_same_source_keeps_content() -> None:
    result = translate('{{ define "a" }}x{{ end }}{{ define "a" }}{{ end }}')
    assert result.definitions["a"].source == "x"
