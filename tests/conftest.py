"""Shared fixtures for all tests."""

import pytest

from shadowsheet.config import get_settings
from shadowsheet.content import loader


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from SHADOWSHEET_* variables and cached settings."""
    for name in (
        "SHADOWSHEET_CONTENT_DIR",
        "SHADOWSHEET_VALIDATE_ON_PATH_CHANGE",
        "SHADOWSHEET_VALIDATE_ON_ANCESTRY_CHANGE",
        "SHADOWSHEET_PRESERVE_INVALID_CHOICES",
        "SHADOWSHEET_LOG_LEVEL",
        "SHADOWSHEET_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_path_cache():
    """Reset the loaded path cache before each test for proper isolation."""
    loader.reset_path_cache()
    yield
    loader.reset_path_cache()
