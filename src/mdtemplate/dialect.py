"""Action-syntax dialect on top of Jinja2.

Generated sources use brace actions in the style of Go templates::

    {{ define "page" }}
    <h1>{{ .Title }}</h1>
    {{ template "footer" .Site }}{{ end }}

``translate`` splits such a source into its top-level body and its named
definitions, and rewrites every action into native Jinja2:

=========================  ==================================================
action                     Jinja2
=========================  ==================================================
``.``  ``.A.B``            ``dot``  ``dot.A.B``
``nil``                    ``none``
``{{ expr }}``             ``{{ expr }}``
``{{ template "x" e }}``   ``{% with dot = e %}{% include "x" %}{% endwith %}``
``{{ if e }}``             ``{% if e %}`` (``else``, ``else if`` supported)
``{{ range e }}``          ``{% for dot in e %}`` (``else`` runs when empty)
``{{ with e }}``           ``{% if e %}{% with dot = e %}``
``{{ define "x" }}``       separate definition ``x``
``{{ block "x" e }}``      definition ``x`` plus a call to it
``{{/* c */}}``            ``{# c #}``
=========================  ==================================================

``{{- `` and `` -}}`` trim adjacent whitespace. Literal text that Jinja2 would
read as markup is wrapped in ``{% raw %}``. Structural mistakes raise
``jinja2.TemplateSyntaxError`` so callers see one error type for both this
stage and Jinja2's own parser.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from jinja2 import TemplateSyntaxError

ACTION_PATTERN = re.compile(
    r"\{\{(?P<ltrim>-\s)?\s*(?P<body>.*?)\s*(?P<rtrim>\s-)?\}\}",
    re.DOTALL,
)

_EXPR_TOKEN = re.compile(
    r'"(?:[^"\\]|\\.)*"'
    r"|`[^`]*`"
    r"|(?<![\w)\]])\.(?:[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)?(?![\w.])"
    r"|\bnil\b"
)

_DEFINE = re.compile(r'^define\s+"(?P<name>[^"]*)"$')
_BLOCK = re.compile(r'^block\s+"(?P<name>[^"]*)"(?:\s+(?P<expr>.+))?$', re.DOTALL)
_TEMPLATE = re.compile(r'^template\s+"(?P<name>[^"]*)"(?:\s+(?P<expr>.+))?$', re.DOTALL)
_NAMED = re.compile(r"^(define|template|block)\b")
_KEYWORD = re.compile(r"^(?P<keyword>if|range|with|else|end)\b\s*(?P<rest>.*)$", re.DOTALL)

_JINJA_MARKUP = ("{%", "{#", "{{")


def translate_expression(expr: str) -> str:
    """Rewrite dot paths and ``nil`` in a pipeline expression."""

    def replacer(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith('"'):
            return token
        if token.startswith("`"):
            return repr(token[1:-1])
        if token == "nil":
            return "none"
        return "dot" + (token if len(token) > 1 else "")

    return _EXPR_TOKEN.sub(replacer, expr.strip())


def _template_call(name: str, expr: Optional[str]) -> str:
    value = translate_expression(expr) if expr else "none"
    return f'{{% with dot = {value} %}}{{% include "{name}" %}}{{% endwith %}}'


@dataclass
class Buffer:
    """Translated Jinja2 source for one definition."""

    parts: List[str] = field(default_factory=list)
    # False while the buffer holds only whitespace and comments
    has_content: bool = False

    def text(self, text: str) -> None:
        if not text:
            return
        if any(marker in text for marker in _JINJA_MARKUP):
            self.parts.append("{% raw %}" + text + "{% endraw %}")
        else:
            self.parts.append(text)
        if text.strip():
            self.has_content = True

    def markup(self, jinja: str, content: bool = True) -> None:
        self.parts.append(jinja)
        if content:
            self.has_content = True

    @property
    def source(self) -> str:
        return "".join(self.parts)


@dataclass
class _Frame:
    keyword: str
    lineno: int
    name: Optional[str] = None
    buffer: Optional[Buffer] = None
    in_else: bool = False


@dataclass
class Translation:
    """Result of translating one source."""

    body: Buffer
    definitions: Dict[str, Buffer]


class _Translator:
    def __init__(self, source: str, name: Optional[str]) -> None:
        self.source = source
        self.name = name
        self.body = Buffer()
        self.definitions: Dict[str, Buffer] = {}
        self.stack: List[_Frame] = []

    def error(self, message: str, lineno: int) -> TemplateSyntaxError:
        return TemplateSyntaxError(message, lineno, name=self.name)

    @property
    def out(self) -> Buffer:
        for frame in reversed(self.stack):
            if frame.buffer is not None:
                return frame.buffer
        return self.body

    def run(self) -> Translation:
        pos = 0
        trim_next = False
        for match in ACTION_PATTERN.finditer(self.source):
            lineno = self.source.count("\n", 0, match.start()) + 1
            text = self.source[pos:match.start()]
            if trim_next:
                text = text.lstrip()
            if match.group("ltrim"):
                text = text.rstrip()
            self._text(text, lineno)
            self._action(match.group("body"), lineno)
            trim_next = bool(match.group("rtrim"))
            pos = match.end()

        tail = self.source[pos:]
        if trim_next:
            tail = tail.lstrip()
        self._text(tail, self.source.count("\n", 0, pos) + 1)

        if self.stack:
            frame = self.stack[-1]
            raise self.error(f"unexpected EOF: unclosed {frame.keyword}", frame.lineno)
        return Translation(body=self.body, definitions=self.definitions)

    def _text(self, text: str, lineno: int) -> None:
        if "{{" in text:
            raise self.error("unclosed action", lineno + text[: text.index("{{")].count("\n"))
        self.out.text(text)

    def _action(self, body: str, lineno: int) -> None:
        if body.startswith("/*"):
            if not body.endswith("*/"):
                raise self.error("unclosed comment", lineno)
            comment = body[2:-2].replace("#}", "# }")
            self.out.markup("{#" + comment + "#}", content=False)
            return
        if not body:
            raise self.error("missing value for command", lineno)

        match = _DEFINE.match(body)
        if match:
            self._define(match.group("name"), lineno)
            return
        match = _BLOCK.match(body)
        if match:
            name = match.group("name")
            self.out.markup(_template_call(name, match.group("expr")))
            self._open_definition("block", name, lineno)
            return
        match = _TEMPLATE.match(body)
        if match:
            self.out.markup(_template_call(match.group("name"), match.group("expr")))
            return
        match = _NAMED.match(body)
        if match:
            raise self.error(f"malformed {match.group(1)} action: {body}", lineno)

        match = _KEYWORD.match(body)
        if match:
            self._keyword(match.group("keyword"), match.group("rest").strip(), lineno)
            return

        self.out.markup("{{ " + translate_expression(body) + " }}")

    def _define(self, name: str, lineno: int) -> None:
        if self.stack:
            raise self.error(f"unexpected define in {self.stack[-1].keyword}", lineno)
        self._open_definition("define", name, lineno)

    def _open_definition(self, keyword: str, name: str, lineno: int) -> None:
        if not name:
            raise self.error(f"empty name in {keyword}", lineno)
        self.stack.append(_Frame(keyword=keyword, lineno=lineno, name=name, buffer=Buffer()))

    def _close_definition(self, frame: _Frame, lineno: int) -> None:
        existing = self.definitions.get(frame.name)
        if existing is not None and existing.has_content and frame.buffer.has_content:
            raise self.error(f"multiple definition of template {frame.name!r}", lineno)
        if existing is None or frame.buffer.has_content:
            self.definitions[frame.name] = frame.buffer

    def _keyword(self, keyword: str, rest: str, lineno: int) -> None:
        out = self.out
        if keyword in ("if", "range", "with"):
            if not rest:
                raise self.error(f"missing value for {keyword}", lineno)
            expr = translate_expression(rest)
            if keyword == "if":
                out.markup(f"{{% if {expr} %}}")
            elif keyword == "range":
                out.markup(f"{{% for dot in {expr} %}}")
            else:
                out.markup(f"{{% if {expr} %}}{{% with dot = {expr} %}}")
            self.stack.append(_Frame(keyword=keyword, lineno=lineno))
            return

        if not self.stack:
            raise self.error(f"unexpected {keyword}", lineno)
        frame = self.stack[-1]

        if keyword == "else":
            if frame.keyword not in ("if", "range", "with") or frame.in_else:
                raise self.error(f"unexpected else in {frame.keyword}", lineno)
            if rest.startswith("if ") and frame.keyword == "if":
                out.markup(f"{{% elif {translate_expression(rest[3:])} %}}")
                return
            if rest:
                raise self.error(f"unexpected {rest!r} after else", lineno)
            if frame.keyword == "with":
                out.markup("{% endwith %}{% else %}")
            else:
                out.markup("{% else %}")
            frame.in_else = True
            return

        # end
        if rest:
            raise self.error(f"unexpected {rest!r} after end", lineno)
        self.stack.pop()
        if frame.keyword == "if":
            out.markup("{% endif %}")
        elif frame.keyword == "range":
            out.markup("{% endfor %}")
        elif frame.keyword == "with":
            out.markup("{% endif %}" if frame.in_else else "{% endwith %}{% endif %}")
        else:
            self._close_definition(frame, lineno)


def translate(source: str, name: Optional[str] = None) -> Translation:
    """Split ``source`` into a body and definitions of Jinja2 source.

    Raises:
        jinja2.TemplateSyntaxError: unbalanced blocks, malformed actions
    """
    return _Translator(source, name).run()


__all__ = ["Buffer", "Translation", "translate", "translate_expression"]
