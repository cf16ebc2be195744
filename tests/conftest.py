"""
Pytest configuration and fixtures for structdoc tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_config():
    """Return a default StructureConfig for testing."""
    from structdoc import StructureConfig

    return StructureConfig()


@pytest.fixture
def thesis_path(fixtures_dir: Path) -> Path:
    """Plain-text thesis with numbered chapters and keyword sections."""
    return fixtures_dir / "sample_thesis.txt"


@pytest.fixture
def report_path(fixtures_dir: Path) -> Path:
    """HTML report as produced by a word-processor converter."""
    return fixtures_dir / "sample_report.html"


@pytest.fixture
def styles_path(fixtures_dir: Path) -> Path:
    """YAML file defining an extra "mla" style."""
    return fixtures_dir / "custom_styles.yaml"
