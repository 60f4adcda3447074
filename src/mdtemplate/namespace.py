"""Caller-owned collection of named, linked templates.

A ``TemplateNamespace`` is a handle on one name inside a shared definition
table. Handles created with ``new`` share the table with the handle that made
them, so templates parsed through any of them can include one another::

    ns = TemplateNamespace("page")
    ns.parse('{{ define "page" }}<main>{{ template "nav" . }}</main>{{ end }}')
    ns.new("nav").parse('{{ define "nav" }}<nav></nav>{{ end }}')
    ns.lookup("nav").template.render(dot={})

Definitions are stored as Jinja2 source and compiled on demand through a
``FunctionLoader``; the environment's cache is disabled so a redefinition is
visible immediately.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from jinja2 import Environment, FunctionLoader, StrictUndefined, Template, TemplateSyntaxError, Undefined

from .dialect import translate


def create_environment(strict_undefined: bool = False) -> Environment:
    """Create the default environment used by new namespaces."""
    return Environment(
        autoescape=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined if strict_undefined else Undefined,
    )


class _DefinitionTable:
    """Definitions shared by every handle of one namespace."""

    def __init__(self, environment: Environment) -> None:
        self.sources: Dict[str, str] = {}
        self.environment = environment.overlay(
            loader=FunctionLoader(self.sources.get),
            cache_size=0,
        )


class TemplateNamespace:
    """Handle on the template ``name`` within a shared namespace."""

    def __init__(self, name: str, environment: Optional[Environment] = None) -> None:
        self._name = name
        self._table = _DefinitionTable(environment or create_environment())

    @classmethod
    def _attach(cls, name: str, table: _DefinitionTable) -> "TemplateNamespace":
        handle = cls.__new__(cls)
        handle._name = name
        handle._table = table
        return handle

    @property
    def name(self) -> str:
        return self._name

    @property
    def environment(self) -> Environment:
        return self._table.environment

    def new(self, name: str) -> "TemplateNamespace":
        """Return a handle for ``name`` sharing this namespace's definitions."""
        return self._attach(name, self._table)

    def lookup(self, name: str) -> Optional["TemplateNamespace"]:
        """Return a handle for ``name`` if it is defined, else None."""
        if name not in self._table.sources:
            return None
        return self._attach(name, self._table)

    def defined_names(self) -> List[str]:
        return sorted(self._table.sources)

    def source_of(self, name: Optional[str] = None) -> Optional[str]:
        """Return the committed Jinja2 source for ``name`` (default: this handle)."""
        return self._table.sources.get(self._name if name is None else name)

    @property
    def template(self) -> Template:
        """Compiled template for this handle's name."""
        return self._table.environment.get_template(self._name)

    def parse(self, source: str) -> "TemplateNamespace":
        """Parse ``source`` into this namespace.

        Each ``define`` block defines or replaces its name. Text outside the
        blocks becomes this handle's own definition unless it is blank and a
        definition for this name already exists. Nothing is committed unless
        every piece compiles.

        Within one source an empty ``define`` never clobbers a non-empty one
        for the same name. Across calls the later definition always wins, so
        parsing an empty ``define`` replaces whatever was there before.

        Raises:
            jinja2.TemplateSyntaxError: the source is malformed
        """
        translation = translate(source, name=self._name)

        pending: Dict[str, str] = {}
        for def_name, buffer in translation.definitions.items():
            pending[def_name] = buffer.source

        body = translation.body
        if body.has_content:
            if self._name in pending and translation.definitions[self._name].has_content:
                raise TemplateSyntaxError(
                    f"multiple definition of template {self._name!r}", 1, name=self._name
                )
            pending[self._name] = body.source
        elif self._name not in pending and self._name not in self._table.sources:
            pending[self._name] = body.source

        for def_name, jinja_source in pending.items():
            self._table.environment.compile(jinja_source, name=def_name)

        self._table.sources.update(pending)
        return self

    def __contains__(self, name: object) -> bool:
        return name in self._table.sources

    def __repr__(self) -> str:
        return f"TemplateNamespace({self._name!r}, defined={self.defined_names()!r})"


__all__ = ["TemplateNamespace", "create_environment"]
