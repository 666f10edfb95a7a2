"""Pytest configuration and shared fixtures."""

import pytest

from timeslider.config import reset_config


@pytest.fixture(autouse=True)
def reset_config_for_all_tests():
    """Reset module-level slider defaults before and after each test.

    The default config is a module-level singleton that persists across
    tests. This fixture ensures each test starts with the built-in defaults.
    """
    reset_config()
    yield
    reset_config()
