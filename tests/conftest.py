"""Shared fixtures for the BrewBoard test suite"""

from datetime import date, datetime

import pytest

from brewboard.services.storage import LocalStore

# A Monday
TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 12, 0)


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "local_storage.json")


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW
