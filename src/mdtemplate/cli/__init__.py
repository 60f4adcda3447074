"""
mdtemplate CLI package.

Commands are auto-discovered from the ``commands/`` subfolder; each module
provides ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._output import OutputFormatter
from ._args import add_config_flag, add_json_flag, add_standard_flags

__all__ = [
    "OutputFormatter",
    "add_config_flag",
    "add_json_flag",
    "add_standard_flags",
]
