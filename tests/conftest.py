import sys
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'mdtemplate'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture
def identity_converter() -> Callable[[bytes], str]:
    """Converter that treats its input as already-rendered HTML."""

    def convert(raw: bytes) -> str:
        return raw.decode("utf-8")

    return convert


@pytest.fixture
def memory_reader() -> Callable[[Dict[str, bytes]], Callable[[str], Tuple[str, bytes]]]:
    """Build a read function over an in-memory {path: bytes} mapping."""

    def factory(files: Dict[str, bytes]) -> Callable[[str], Tuple[str, bytes]]:
        def read(path: str) -> Tuple[str, bytes]:
            if path not in files:
                raise FileNotFoundError(2, "No such file or directory", path)
            return Path(path).name, files[path]

        return read

    return factory


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A directory of Markdown templates that reference one another."""
    (tmp_path / "layout.go.md").write_text(
        '# Site\n\n{{ template "nav" . }}\n',
        encoding="utf-8",
    )
    (tmp_path / "nav.go.md").write_text(
        "* [Home](/)\n* [About](/about)\n",
        encoding="utf-8",
    )
    (tmp_path / "notes.txt").write_text("not a template", encoding="utf-8")
    return tmp_path
