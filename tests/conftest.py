"""
Shared fixtures for the price API tests.

No test talks to the network: the upstream is replaced by FakeRepository.
"""

from datetime import datetime, timezone

import pytest

from dayahead_api.exceptions import UpstreamFetchError
from dayahead_api.repositories import BaseRepository
from dayahead_api.services import RegionPriceService
from dayahead_api.utils import QueryCache

# 2024-03-10 05:30 in the market timezone
NOW = datetime(2024, 3, 10, 5, 30, tzinfo=timezone.utc)
TODAY = NOW.date()


def make_payload(prices, unit="EUR / MWh", start_unix=1709942400):
    """Build an upstream-shaped body for an hourly price list."""
    return {
        "license_info": "CC BY 4.0 (creativecommons.org/licenses/by/4.0) from Bundesnetzagentur | SMARD.de",
        "unix_seconds": [start_unix + 3600 * i for i in range(len(prices))],
        "price": list(prices),
        "unit": unit,
        "deprecated": False,
    }


class FakeRepository(BaseRepository):
    """In-memory upstream: answers per region, optionally failing a number of times."""

    def __init__(self, default_prices=None):
        self.default_prices = default_prices if default_prices is not None else list(range(24))
        self.payloads = {}
        self.failures = {}
        self.calls = []

    def set_prices(self, region_code, prices, start_date=None, end_date=None):
        self.payloads[(region_code, start_date, end_date)] = make_payload(prices)

    def fail(self, region_code, times=None):
        """Fail the next ``times`` calls for a region, or every call when None."""
        self.failures[region_code] = times

    def find_prices(self, region_code, start_date=None, end_date=None):
        self.calls.append((region_code, start_date, end_date))

        if region_code in self.failures:
            remaining = self.failures[region_code]
            if remaining is None or remaining > 0:
                if remaining is not None:
                    self.failures[region_code] = remaining - 1
                raise UpstreamFetchError()

        key = (region_code, start_date, end_date)
        if key in self.payloads:
            return self.payloads[key]
        if (region_code, None, None) in self.payloads:
            return self.payloads[(region_code, None, None)]
        return make_payload(self.default_prices)

    def calls_for(self, region_code):
        return [call for call in self.calls if call[0] == region_code]


@pytest.fixture
def fake_repository():
    return FakeRepository()


@pytest.fixture
def query_cache():
    return QueryCache(ttl_seconds=300)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def service(fake_repository, query_cache, recording_sleep):
    return RegionPriceService(
        repository=fake_repository,
        cache=query_cache,
        now=lambda: NOW,
        sleep=recording_sleep
    )
