"""Shared pytest fixtures for temporal-json tests."""

from pathlib import Path

import pytest


@pytest.fixture
def fixture_configs() -> Path:
    """Directory holding the YAML schema configs used by schema tests."""
    return Path(__file__).resolve().parent / "fixtures" / "configs"
