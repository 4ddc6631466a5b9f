"""Shared fixtures for the test suite."""
import pytest

from roster_audit.utilities import config


@pytest.fixture
def settings():
    return config.load_settings()
