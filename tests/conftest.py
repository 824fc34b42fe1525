"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from screenlines.config import ScreenLinesSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "fountain" / "test_data"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against default settings.

    SCREENLINES_ variables from the developer's shell would otherwise leak
    into the parser through the global settings.
    """
    for name in list(os.environ):
        if name.startswith("SCREENLINES_"):
            monkeypatch.delenv(name)

    reset_settings()
    set_settings(ScreenLinesSettings(_env_file=None))

    yield

    reset_settings()


@pytest.fixture
def fixtures_dir():
    """Directory holding the sample Fountain documents."""
    return FIXTURES_DIR


@pytest.fixture
def brick_and_steel(fixtures_dir):
    """A short screenplay touching every line type the classifier produces."""
    return (fixtures_dir / "brick_and_steel.fountain").read_text(encoding="utf-8")


@pytest.fixture
def ranged_elements(fixtures_dir):
    """A document with single-line and multiline notes and a boneyard block."""
    return (fixtures_dir / "ranged_elements.fountain").read_text(encoding="utf-8")
