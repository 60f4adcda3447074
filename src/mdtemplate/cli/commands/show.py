"""
mdtemplate show command.

SUMMARY: Print the generated template source for one Markdown file
"""

from __future__ import annotations

import argparse

from mdtemplate.cli import OutputFormatter, add_standard_flags
from mdtemplate.config import load_config
from mdtemplate.converter import DirectiveConverter
from mdtemplate.errors import MdTemplateError
from mdtemplate.markup import MarkdownConverter
from mdtemplate.namespace import create_environment
from mdtemplate.registrar import build_envelope, register
from mdtemplate.sources import iter_units

SUMMARY = "Print the generated template source for one Markdown file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("file", help="Markdown template file")
    parser.add_argument(
        "--name",
        help="Template name (default: derived from the file name)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Convert one file and print its envelope; fail if it does not parse."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_config(args.config)
        directives = DirectiveConverter(MarkdownConverter(config.markdown_extensions))
        unit = next(iter_units([args.file], force_name=args.name, suffix=config.suffix))
        fragment = directives.convert_unit(unit)
        envelope = build_envelope(fragment.name, fragment.html)
        register(
            None,
            fragment,
            debug=config.debug,
            environment=create_environment(config.strict_undefined),
        )
    except MdTemplateError as e:
        formatter.error(e, error_code=e.__class__.__name__)
        return 1

    formatter.success({"name": fragment.name, "source": envelope}, envelope)
    return 0
