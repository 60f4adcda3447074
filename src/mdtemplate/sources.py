"""Source acquisition: turn patterns, file lists or strings into units.

A unit is one logical template source. Its name is the file's base name with
the configured suffix removed (``pages/home.go.md`` becomes ``home``).
"""
from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_SUFFIX
from .errors import NoFilesError, NoMatchError, PatternError, ReadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# read(path) -> (base name, raw bytes); raises OSError on failure
ReadFunc = Callable[[str], Tuple[str, bytes]]


@dataclass(frozen=True)
class Unit:
    """One template source awaiting conversion."""

    name: str
    raw: bytes
    path: Optional[Path] = None


def derive_name(filename: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Return the template name for ``filename``.

    Example:
        >>> derive_name("site/pages/about.go.md")
        'about'
    """
    base = os.path.basename(filename)
    if suffix:
        base = base.replace(suffix, "")
    return base


def read_file_os(path: str) -> Tuple[str, bytes]:
    """Read ``path`` from the local filesystem."""
    with open(path, "rb") as f:
        return os.path.basename(path), f.read()


def _check_pattern(pattern: str) -> None:
    """Reject patterns whose character classes are never closed."""
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            # A leading ']' is a literal member of the class
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise PatternError(pattern, "unterminated character class")
            i = j
        i += 1


def expand_glob(pattern: str) -> List[str]:
    """Expand ``pattern`` into a sorted list of matching file paths.

    Raises:
        PatternError: the pattern is malformed
        NoMatchError: the pattern matches nothing
    """
    _check_pattern(pattern)
    filenames = sorted(p for p in glob.glob(pattern) if os.path.isfile(p))
    if not filenames:
        raise NoMatchError(pattern)
    logger.debug("Pattern %r matched %d file(s)", pattern, len(filenames))
    return filenames


def iter_units(
    filenames: Sequence[PathLike],
    read: ReadFunc = read_file_os,
    *,
    force_name: Optional[str] = None,
    suffix: str = DEFAULT_SUFFIX,
) -> Iterator[Unit]:
    """Yield one unit per file, in order.

    The empty-list check happens before the first unit is produced. A read
    failure stops iteration at that file; units already yielded stay valid.

    Raises:
        NoFilesError: ``filenames`` is empty
        ReadError: a file could not be read
    """
    if not filenames:
        raise NoFilesError()
    return _read_units([str(f) for f in filenames], read, force_name, suffix)


def _read_units(
    filenames: List[str],
    read: ReadFunc,
    force_name: Optional[str],
    suffix: str,
) -> Iterator[Unit]:
    for filename in filenames:
        try:
            base, raw = read(filename)
        except OSError as e:
            raise ReadError(filename, e.strerror or str(e)) from e
        name = force_name or derive_name(base, suffix)
        logger.debug("Read %s as template %r (%d bytes)", filename, name, len(raw))
        yield Unit(name=name, raw=raw, path=Path(filename))


def unit_from_string(name: str, markup: str) -> Unit:
    """Wrap in-memory Markdown as a unit named ``name``."""
    return Unit(name=name, raw=markup.encode("utf-8"))


__all__ = [
    "ReadFunc",
    "Unit",
    "derive_name",
    "read_file_os",
    "expand_glob",
    "iter_units",
    "unit_from_string",
]
