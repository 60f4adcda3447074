"""
mdtemplate check command.

SUMMARY: Parse all templates matching a glob and report the namespace
"""

from __future__ import annotations

import argparse

from mdtemplate.cli import OutputFormatter, add_standard_flags
from mdtemplate.config import load_config
from mdtemplate.errors import MdTemplateError
from mdtemplate.namespace import TemplateNamespace, create_environment
from mdtemplate.parsing import parse_files
from mdtemplate.sources import derive_name, expand_glob

SUMMARY = "Parse all templates matching a glob and report the namespace"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "pattern",
        help="Glob pattern of Markdown templates (e.g. 'pages/*.go.md')",
    )
    parser.add_argument(
        "--root",
        help="Namespace root name (default: the first matching file's template name)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Parse the matching files into a fresh namespace."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_config(args.config)
        matches = expand_glob(args.pattern)
        root = args.root or derive_name(matches[0], config.suffix)
        namespace = TemplateNamespace(root, create_environment(config.strict_undefined))
        namespace = parse_files(namespace, matches, config=config)
    except MdTemplateError as e:
        formatter.error(e, error_code=e.__class__.__name__)
        return 1

    names = namespace.defined_names()
    formatter.success(
        {"root": namespace.name, "templates": names},
        f"Parsed {len(names)} template(s) into {namespace.name!r}: {', '.join(names)}",
    )
    return 0
