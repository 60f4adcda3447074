"""
mdtemplate - Markdown pages as linked template namespaces

Converts Markdown to HTML, repairs the template call directives the Markdown
typographer mangled, and registers each page as a named definition in a
shared, caller-owned template namespace.
"""

from .config import PreprocessorConfig, load_config
from .errors import (
    ConfigurationError,
    MarkupConversionError,
    MdTemplateError,
    NoFilesError,
    NoMatchError,
    PatternError,
    ReadError,
    SourceError,
    TemplateSyntaxError,
)
from .namespace import TemplateNamespace, create_environment
from .parsing import parse, parse_files, parse_glob, parse_string

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "PreprocessorConfig",
    "load_config",
    "TemplateNamespace",
    "create_environment",
    "parse",
    "parse_files",
    "parse_glob",
    "parse_string",
    "MdTemplateError",
    "ConfigurationError",
    "SourceError",
    "PatternError",
    "NoMatchError",
    "NoFilesError",
    "ReadError",
    "MarkupConversionError",
    "TemplateSyntaxError",
]
