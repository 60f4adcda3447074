"""Template registration.

Wraps converted fragments in a definition envelope and parses them into a
namespace. The first fragment roots a new namespace when none is given; every
later fragment is attached to that same namespace, so one handle reaches all
of them.

Envelope format (exact)::

    {{ define "<name>" }}
    <html>{{ end }}
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import jinja2

from .converter import ConvertedFragment
from .errors import TemplateSyntaxError
from .namespace import TemplateNamespace

logger = logging.getLogger(__name__)


class Placement(Enum):
    """Where a fragment lands in its namespace."""

    ROOT = "root"    # replaces the namespace's own definition
    CHILD = "child"  # defined as a named child of the namespace


def build_envelope(name: str, html: str) -> str:
    """Wrap ``html`` in a ``define`` block named ``name``."""
    return f'{{{{ define "{name}" }}}}' + "\n" + html + "{{ end }}"


def decide_placement(namespace: TemplateNamespace, name: str) -> Placement:
    """A fragment named like the namespace itself becomes its root."""
    if name == namespace.name:
        return Placement.ROOT
    return Placement.CHILD


def register(
    namespace: Optional[TemplateNamespace],
    fragment: ConvertedFragment,
    *,
    debug: bool = False,
    environment: Optional[jinja2.Environment] = None,
) -> TemplateNamespace:
    """Parse ``fragment`` into ``namespace`` and return the namespace handle.

    Passing ``None`` creates a namespace rooted at the fragment's name, built
    on ``environment`` when one is given.
    Registering an existing child name again replaces its definition.

    Raises:
        TemplateSyntaxError: the generated source did not parse; the
            namespace is left unchanged
    """
    envelope = build_envelope(fragment.name, fragment.html)
    if debug:
        logger.debug("Generated template source for %r:\n%s", fragment.name, envelope)

    if namespace is None:
        namespace = TemplateNamespace(fragment.name, environment)

    placement = decide_placement(namespace, fragment.name)
    target = namespace if placement is Placement.ROOT else namespace.new(fragment.name)
    logger.debug("Registering %r as %s of %r", fragment.name, placement.value, namespace.name)

    try:
        target.parse(envelope)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateSyntaxError(fragment.name, str(e), envelope, lineno=e.lineno) from e

    return namespace


__all__ = ["Placement", "build_envelope", "decide_placement", "register"]
