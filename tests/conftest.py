"""Pytest fixtures shared across graphkit tests."""

import pytest

from graphkit.config.settings import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
