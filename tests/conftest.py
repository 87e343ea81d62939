# tests/conftest.py

"""Shared pytest fixtures for all catalog_dash tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_results_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point exports at a per-test temp directory."""
    original = Settings.RESULTS_DIR
    Settings.RESULTS_DIR = tmp_path / "results"
    yield Settings.RESULTS_DIR
    Settings.RESULTS_DIR = original
