"""Tests for the Jinja2-backed template namespace."""

from __future__ import annotations

import jinja2
import pytest

from mdtemplate.namespace import TemplateNamespace, create_environment


def test_parse_define_into_root() -> None:
    ns = TemplateNamespace("page")
    returned = ns.parse('{{ define "page" }}\n<h1>{{ .Title }}</h1>{{ end }}')
    assert returned is ns
    assert ns.defined_names() == ["page"]
    assert ns.source_of() == "\n<h1>{{ dot.Title }}</h1>"


def test_child_shares_definitions_with_root() -> None:
    ns = TemplateNamespace("page")
    ns.new("nav").parse('{{ define "nav" }}<nav></nav>{{ end }}')
    assert "nav" in ns
    assert ns.lookup("nav").name == "nav"
    assert ns.lookup("missing") is None
    assert ns.name == "page"


def test_new_does_not_define_anything() -> None:
    ns = TemplateNamespace("page")
    ns.new("later")
    assert ns.lookup("later") is None
    assert ns.defined_names() == []


def test_redefinition_replaces_content() -> None:
    ns = TemplateNamespace("page")
    ns.parse('{{ define "page" }}first{{ end }}')
    ns.parse('{{ define "page" }}second{{ end }}')
    assert ns.source_of("page") == "second"


def test_top_level_text_defines_handle() -> None:
    ns = TemplateNamespace("greeting")
    ns.parse("Hello {{ .Name }}")
    assert ns.source_of() == "Hello {{ dot.Name }}"


def test_blank_top_level_keeps_existing_definition() -> None:
    ns = TemplateNamespace("t")
    ns.parse("X")
    ns.parse('  {{ define "other" }}o{{ end }}\n')
    assert ns.source_of("t") == "X"
    assert ns.source_of("other") == "o"


def test_top_level_text_conflicts_with_same_named_define() -> None:
    ns = TemplateNamespace("t")
    with pytest.raises(jinja2.TemplateSyntaxError, match="multiple definition"):
        ns.parse('body{{ define "t" }}also{{ end }}')


def test_failed_parse_commits_nothing() -> None:
    ns = TemplateNamespace("page")
    ns.parse('{{ define "page" }}kept{{ end }}')
    with pytest.raises(jinja2.TemplateSyntaxError):
        ns.parse('{{ define "b" }}ok{{ end }}{{ define "page" }}{{ .X + }}{{ end }}')
    assert "b" not in ns
    assert ns.source_of("page") == "kept"


def test_rendering_through_template_call() -> None:
    ns = TemplateNamespace("page")
    ns.parse('{{ define "page" }}<main>{{ template "user" .User }}</main>{{ end }}')
    ns.new("user").parse('{{ define "user" }}<b>{{ .Name }}</b>{{ end }}')
    out = ns.template.render(dot={"User": {"Name": "Ada"}})
    assert out == "<main><b>Ada</b></main>"


def test_values_are_autoescaped() -> None:
    ns = TemplateNamespace("t").parse("{{ .V }}")
    assert ns.template.render(dot={"V": "<x>"}) == "&lt;x&gt;"


def test_redefinition_visible_to_callers_without_cache() -> None:
    ns = TemplateNamespace("page")
    ns.parse('{{ define "page" }}[{{ template "part" }}]{{ end }}')
    ns.new("part").parse('{{ define "part" }}one{{ end }}')
    assert ns.template.render() == "[one]"
    ns.new("part").parse('{{ define "part" }}two{{ end }}')
    assert ns.template.render() == "[two]"


def test_strict_environment() -> None:
    ns = TemplateNamespace("t", create_environment(strict_undefined=True)).parse("{{ .Missing }}")
    with pytest.raises(jinja2.UndefinedError):
        ns.template.render(dot={})


def test_empty_define_in_later_call_replaces_content() -> None:
    ns = TemplateNamespace("page")
    ns.new("nav").parse('{{ define "nav" }}<nav></nav>{{ end }}')
    ns.new("nav").parse('{{ define "nav" }}\n{{ end }}')
    assert ns.source_of("nav") == "\n"
