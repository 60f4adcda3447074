"""Entry points: parse Markdown templates into a namespace.

Pipeline per unit: acquisition -> conversion -> registration. Units are
processed in order and the first error stops the batch; units registered
before the failure stay registered.

Example:
    ns = TemplateNamespace("layout")
    ns = parse_glob(ns, "templates/*.go.md")
    ns = parse_string(ns, "banner", 'Welcome {{ template "user" .User }}')
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .config import PreprocessorConfig
from .converter import DirectiveConverter
from .errors import ConfigurationError
from .markup import ConvertFunc, MarkdownConverter
from .namespace import TemplateNamespace
from .registrar import register
from .sources import ReadFunc, Unit, expand_glob, iter_units, read_file_os, unit_from_string

logger = logging.getLogger(__name__)


def _build_converter(
    namespace: Optional[TemplateNamespace],
    converter: Optional[ConvertFunc],
    config: PreprocessorConfig,
) -> DirectiveConverter:
    if namespace is None:
        raise ConfigurationError("TemplateNamespace was None")
    if converter is not None and not callable(converter):
        raise ConfigurationError(f"Markdown converter is not callable: {converter!r}")
    if converter is None:
        converter = MarkdownConverter(config.markdown_extensions)
    return DirectiveConverter(converter)


def _register_all(
    namespace: TemplateNamespace,
    units: Iterable[Unit],
    directives: DirectiveConverter,
    config: PreprocessorConfig,
) -> TemplateNamespace:
    count = 0
    for unit in units:
        fragment = directives.convert_unit(unit)
        namespace = register(namespace, fragment, debug=config.debug)
        count += 1
    logger.debug("Registered %d template(s) into %r", count, namespace.name)
    return namespace


def parse_glob(
    namespace: Optional[TemplateNamespace],
    pattern: str,
    *,
    converter: Optional[ConvertFunc] = None,
    read: ReadFunc = read_file_os,
    config: Optional[PreprocessorConfig] = None,
) -> TemplateNamespace:
    """Parse every file matching ``pattern``; names derive from file names.

    Raises:
        ConfigurationError, PatternError, NoMatchError, ReadError,
        MarkupConversionError, TemplateSyntaxError
    """
    config = config or PreprocessorConfig()
    directives = _build_converter(namespace, converter, config)
    filenames = expand_glob(pattern)
    units = iter_units(filenames, read, suffix=config.suffix)
    return _register_all(namespace, units, directives, config)


def parse(
    namespace: Optional[TemplateNamespace],
    template_name: str,
    path: Union[str, Path],
    *,
    converter: Optional[ConvertFunc] = None,
    read: ReadFunc = read_file_os,
    config: Optional[PreprocessorConfig] = None,
) -> TemplateNamespace:
    """Parse one file under the explicit name ``template_name``.

    Raises:
        ConfigurationError, ReadError, MarkupConversionError,
        TemplateSyntaxError
    """
    config = config or PreprocessorConfig()
    directives = _build_converter(namespace, converter, config)
    units = iter_units([path], read, force_name=template_name, suffix=config.suffix)
    return _register_all(namespace, units, directives, config)


def parse_files(
    namespace: Optional[TemplateNamespace],
    paths: Iterable[Union[str, Path]],
    *,
    converter: Optional[ConvertFunc] = None,
    read: ReadFunc = read_file_os,
    config: Optional[PreprocessorConfig] = None,
) -> TemplateNamespace:
    """Parse an explicit list of files; names derive from file names.

    Raises:
        ConfigurationError, NoFilesError, ReadError, MarkupConversionError,
        TemplateSyntaxError
    """
    config = config or PreprocessorConfig()
    directives = _build_converter(namespace, converter, config)
    units = iter_units(list(paths), read, suffix=config.suffix)
    return _register_all(namespace, units, directives, config)


def parse_string(
    namespace: Optional[TemplateNamespace],
    template_name: str,
    markup: str,
    *,
    converter: Optional[ConvertFunc] = None,
    config: Optional[PreprocessorConfig] = None,
) -> TemplateNamespace:
    """Parse in-memory Markdown under ``template_name``.

    Raises:
        ConfigurationError, MarkupConversionError, TemplateSyntaxError
    """
    config = config or PreprocessorConfig()
    directives = _build_converter(namespace, converter, config)
    unit = unit_from_string(template_name, markup)
    return _register_all(namespace, [unit], directives, config)


__all__ = ["parse_glob", "parse", "parse_files", "parse_string"]
