from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def examples_dir() -> Path:
    return REPO_ROOT / "examples"


@pytest.fixture
def write_source(tmp_path):
    """Write a .jpp file under tmp_path/sources and return its path."""

    def _write(name: str, source: str) -> Path:
        source_dir = tmp_path / "sources"
        source_dir.mkdir(exist_ok=True)
        path = source_dir / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
