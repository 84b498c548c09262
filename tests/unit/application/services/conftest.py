"""
Shared fixtures for application service tests.
"""

import pytest
from datetime import datetime, timedelta, UTC
from unittest.mock import AsyncMock

from domain.models.currency import BuySellQuote, CrossQuote, ExchangeRate


class FakeClock:
    """Manually advanced clock for throttle tests"""
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 11, 5, 10, 30, 0, tzinfo=UTC))


@pytest.fixture
def sample_rates():
    return [
        ExchangeRate(840, 980, BuySellQuote(buy=41.0, sell=41.5)),
        ExchangeRate(978, 980, CrossQuote(cross=42.1234)),
    ]


@pytest.fixture
def mock_provider(sample_rates):
    provider = AsyncMock()
    provider.name = 'monobank'
    provider.fetch_rates.return_value = sample_rates
    return provider
