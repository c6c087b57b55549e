from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from pwnstyles.config import settings


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """
    Keep PWNSTYLES_* variables from the developer's shell out of the tests.
    """
    monkeypatch.delenv("PWNSTYLES_ENV", raising=False)
    monkeypatch.delenv("PWNSTYLES_LOG_LEVEL", raising=False)
    settings.get_settings.cache_clear()
    yield
    settings.get_settings.cache_clear()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """
    Build a small bundled tree with nested, hidden and empty directories.
    """
    root = tmp_path / "bundle"
    (root / "sub").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / ".hidden-dir").mkdir()
    (root / "a.txt").write_text("alpha\n", encoding="utf-8")
    (root / "sub" / "b.txt").write_text("bravo\n", encoding="utf-8")
    (root / "sub" / "c.txt").write_text("charlie\n", encoding="utf-8")
    (root / ".dotfile").write_text("hidden\n", encoding="utf-8")
    (root / ".hidden-dir" / "inner.bin").write_bytes(b"\x00\x01\xfe\xff")
    return root


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def write_project_config(project_root: Path):
    def _write(body: str) -> Path:
        path = project_root / "pwnstyles.toml"
        path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
        return path

    return _write
