"""Shared fixtures for the citation fixtures test suite."""

import shutil
import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "format"

# Minimal stand-in for the AnyStyle library: records its calls and echoes
# every reference back as a title.
FAKE_ANYSTYLE = '''
CALLS = []


class Bibliography:
    def __init__(self, refs):
        self.refs = refs

    def __str__(self):
        entries = ["@misc{ref%d,\\n  title = {%s}\\n}" % (i, ref) for i, ref in enumerate(self.refs)]
        return "\\n".join(entries) + "\\n"


def parse(references, format="json"):
    CALLS.append((list(references), format))
    if format == "bibtex":
        return Bibliography(references)
    return [{"title": ref, "type": format} for ref in references]
'''


@pytest.fixture
def project_root(tmp_path):
    """A project root holding a copy of the format fixture inputs."""
    root = tmp_path / "project"
    shutil.copytree(FIXTURES_DIR, root / "tests" / "fixtures" / "format")
    return root


@pytest.fixture
def write_library():
    """Write an ``anystyle`` package with the given source below a lib directory."""
    def _write(lib_dir: Path, source: str = FAKE_ANYSTYLE) -> Path:
        package = lib_dir / "anystyle"
        package.mkdir(parents=True, exist_ok=True)
        (package / "__init__.py").write_text(source, encoding="utf-8")
        return lib_dir

    yield _write
    sys.modules.pop("anystyle", None)


@pytest.fixture
def anystyle_lib(project_root, write_library):
    """The fake library installed at the default location of ``project_root``."""
    return write_library(project_root / "tmp" / "anystyle" / "lib")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep settings from the developer's shell out of the tests."""
    monkeypatch.delenv("CITATION_FIXTURES_PARSER_LIB", raising=False)
    monkeypatch.delenv("CITATION_FIXTURES_CORE_LIMIT", raising=False)
