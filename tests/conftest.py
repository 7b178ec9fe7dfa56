from datetime import date, timedelta

import pytest


TODAY = date(2025, 1, 6)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def day(today):
    """day(n) -> ISO date string n days from today."""
    def _day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()
    return _day
