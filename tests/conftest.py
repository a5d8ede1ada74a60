"""Pytest configuration and fixtures for test suite."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "synthetic"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the synthetic RIS fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def sample_ris(fixtures_dir: Path) -> Path:
    """Two-record RIS file (one article, one conference paper)."""
    return fixtures_dir / "sample.ris"


@pytest.fixture
def write_ris(tmp_path: Path):
    """Factory writing RIS lines to a file under ``tmp_path``."""

    def _write(lines: list[str], name: str = "refs.ris") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
