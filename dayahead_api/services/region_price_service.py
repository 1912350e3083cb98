"""
Service for region price data operations.

Backs both dashboard views:
    - Region list: latest price of every registered region, filtered and sorted
    - Region detail: single-day series, hourly averages and daily statistics

Upstream calls are blocking ``requests`` calls and run in the default
executor so the event loop stays free while regions are fetched in parallel.
"""

import asyncio
from datetime import date, datetime, timedelta
from typing import Awaitable, Callable, List, Optional

from .base_service import BaseService
from .aggregation import select_latest, hourly_prices, aggregate_hourly, aggregate_daily
from .validation import parse_date, validate_date, validate_range, ensure_valid
from ..config import app_config, DashboardConfig, REGIONS, find_region
from ..exceptions import InvalidParameterError, RegionNotFoundError, UpstreamFetchError
from ..models import (
    RegionDescriptor, RawPriceSeries, RegionPrice, HourlyPrice, RegionDetails,
    HourlyAverage, DailyStats
)
from ..repositories import UpstreamPriceRepository
from ..utils import QueryCache

SORT_OPTIONS = ("name-asc", "name-desc", "price-asc", "price-desc")


class RegionPriceService(BaseService):
    """Service for region list and region detail data."""

    def __init__(self, repository: UpstreamPriceRepository = None,
                 cache: Optional[QueryCache] = None,
                 config: DashboardConfig = None,
                 now: Callable[[], datetime] = None,
                 sleep: Callable[[float], Awaitable[None]] = None):
        """
        Initialize service with repository dependency injection.

        Args:
            repository: Upstream price repository
            cache: Query cache for detail fetches, None disables caching
            config: Dashboard settings (retries, fallback hour)
            now: Clock returning an aware datetime in the market timezone
            sleep: Coroutine used to wait between list retries
        """
        super().__init__(repository or UpstreamPriceRepository())
        self.cache = cache
        self.config = config or app_config.dashboard
        self._now = now or (lambda: datetime.now(app_config.market_timezone))
        self._sleep = sleep or asyncio.sleep

    def today(self) -> date:
        return self._now().date()

    def validate_input(self, **kwargs) -> bool:
        """Validate region code, dates and sort option."""
        region_code = kwargs.get('region_code')
        day = kwargs.get('day')
        start_date = kwargs.get('start_date')
        end_date = kwargs.get('end_date')
        sort = kwargs.get('sort')

        if region_code is not None and find_region(region_code) is None:
            raise RegionNotFoundError(f"Region not found: {region_code}")

        if day is not None:
            ensure_valid(validate_date(day, self.today()))

        if start_date is not None and end_date is not None:
            ensure_valid(validate_range(start_date, end_date, self.today()))

        if sort is not None and sort not in SORT_OPTIONS:
            raise InvalidParameterError(
                f"Sort must be one of: {', '.join(SORT_OPTIONS)}")

        return True

    # ------------------------------------------------------------------ #
    # Upstream access
    # ------------------------------------------------------------------ #

    async def fetch_series(self, region_code: str, start_date: Optional[str] = None,
                           end_date: Optional[str] = None,
                           use_cache: bool = True) -> RawPriceSeries:
        """Fetch a raw series, serving fresh cached results when enabled."""
        key = (region_code, start_date, end_date)
        if use_cache and self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                self.logger.debug("Cache hit for %s", key)
                return cached
            self.cache.mark_pending(key)

        loop = asyncio.get_running_loop()
        try:
            payload = await loop.run_in_executor(
                None, self.repository.find_prices, region_code, start_date, end_date)
            series = RawPriceSeries.from_upstream(region_code, payload)
        except asyncio.CancelledError:
            if use_cache and self.cache is not None:
                self.cache.discard(key)
            raise
        except Exception as e:
            if use_cache and self.cache is not None:
                self.cache.mark_error(key, e)
            raise

        if use_cache and self.cache is not None:
            self.cache.put(key, series)
        return series

    async def fetch_region_price(self, region: RegionDescriptor) -> RegionPrice:
        """Fetch the default series of a region and pick its latest price."""
        series = await self.fetch_series(region.code, use_cache=False)
        return RegionPrice(
            code=region.code,
            name=region.name,
            price=select_latest(series.price, self._now().hour, self.config.fallback_hour),
            unit=series.unit
        )

    def retry_delay(self, retry: int) -> float:
        """Seconds to wait before the ``retry``-th retry (1-based)."""
        delay = self.config.retry_delay_seconds * 2 ** (retry - 1)
        return min(delay, self.config.retry_max_delay_seconds)

    async def fetch_all_region_prices(self) -> List[RegionPrice]:
        """
        Fetch the latest price of every registered region.

        All regions are requested at once and the result is only returned
        when every request succeeded. A failure fails the whole batch once all
        of its requests have settled. The batch is retried ``list_retries``
        times, with exponential backoff, before the error propagates.
        """
        attempts = self.config.list_retries + 1
        last_error = None

        for attempt in range(1, attempts + 1):
            # settle every request of this attempt before a retry is issued
            results = await asyncio.gather(
                *(self.fetch_region_price(region) for region in REGIONS),
                return_exceptions=True)
            failures = [r for r in results if isinstance(r, BaseException)]
            if not failures:
                return list(results)

            unexpected = [e for e in failures if not isinstance(e, UpstreamFetchError)]
            if unexpected:
                raise unexpected[0]

            last_error = failures[0]
            if attempt < attempts:
                delay = self.retry_delay(attempt)
                self.logger.warning(
                    "⚠️  Region list fetch failed (attempt %d/%d), retrying in %.1fs",
                    attempt, attempts, delay)
                await self._sleep(delay)

        self.logger.error("❌ Region list fetch failed after %d attempts", attempts)
        raise last_error

    # ------------------------------------------------------------------ #
    # Region list
    # ------------------------------------------------------------------ #

    @staticmethod
    def filter_region_prices(entries: List[RegionPrice], search: Optional[str] = None,
                             min_price: Optional[float] = None,
                             max_price: Optional[float] = None) -> List[RegionPrice]:
        """Keep entries matching the search term and lying within the price bounds."""
        term = (search or "").lower()

        def matches(entry: RegionPrice) -> bool:
            if term and term not in entry.code.lower() and term not in entry.name.lower():
                return False
            if min_price is not None and (entry.price is None or entry.price < min_price):
                return False
            if max_price is not None and (entry.price is None or entry.price > max_price):
                return False
            return True

        return [entry for entry in entries if matches(entry)]

    @staticmethod
    def sort_region_prices(entries: List[RegionPrice], sort: str = "name-asc") -> List[RegionPrice]:
        """Sort by name or price; entries without a price always come last."""
        if sort == "name-asc":
            return sorted(entries, key=lambda e: e.name.casefold())
        if sort == "name-desc":
            return sorted(entries, key=lambda e: e.name.casefold(), reverse=True)

        priced = [e for e in entries if e.price is not None]
        unpriced = [e for e in entries if e.price is None]
        return sorted(priced, key=lambda e: e.price, reverse=(sort == "price-desc")) + unpriced

    async def get_region_prices(self, search: Optional[str] = None,
                                min_price: Optional[float] = None,
                                max_price: Optional[float] = None,
                                sort: str = "name-asc") -> List[RegionPrice]:
        """Get the region list with its latest prices."""
        try:
            self.validate_input(sort=sort)
            entries = await self.fetch_all_region_prices()
            entries = self.filter_region_prices(entries, search, min_price, max_price)
            return self.sort_region_prices(entries, sort)

        except Exception as e:
            self.handle_exception(e, "Error retrieving region prices")

    # ------------------------------------------------------------------ #
    # Region detail
    # ------------------------------------------------------------------ #

    def _resolve_day(self, day: Optional[str]) -> str:
        return day or self.today().strftime("%Y-%m-%d")

    def _resolve_range(self, start_date: Optional[str], end_date: Optional[str]):
        """Default to the last ``default_range_days`` days up to today."""
        today = self.today()
        if end_date is None:
            end_date = today.strftime("%Y-%m-%d")
        if start_date is None:
            start_date = (today - timedelta(days=self.config.default_range_days)).strftime("%Y-%m-%d")
        return start_date, end_date

    async def get_region_details(self, region_code: str, day: Optional[str] = None) -> RegionDetails:
        """Get the series of one day (today by default) with its metadata."""
        try:
            day = self._resolve_day(day)
            self.validate_input(region_code=region_code, day=day)
            region = find_region(region_code)

            series = await self.fetch_series(region_code, day, day)
            return RegionDetails(
                code=region.code,
                name=region.name,
                start_date=day,
                end_date=day,
                unix_seconds=series.unix_seconds,
                price=series.price,
                unit=series.unit,
                license_info=series.license_info,
                deprecated=series.deprecated,
                latest_price=select_latest(
                    series.price, self._now().hour, self.config.fallback_hour)
            )

        except Exception as e:
            self.handle_exception(e, "Error retrieving region details")

    async def get_hourly_prices(self, region_code: str, day: Optional[str] = None) -> List[HourlyPrice]:
        """Get the hourly price chart of a single day."""
        try:
            day = self._resolve_day(day)
            self.validate_input(region_code=region_code, day=day)

            series = await self.fetch_series(region_code, day, day)
            return [HourlyPrice(**point) for point in hourly_prices(series.price)]

        except Exception as e:
            self.handle_exception(e, "Error retrieving hourly prices")

    async def get_hourly_averages(self, region_code: str, start_date: Optional[str] = None,
                                  end_date: Optional[str] = None) -> List[HourlyAverage]:
        """Get average prices per hour of day across a date range."""
        try:
            start_date, end_date = self._resolve_range(start_date, end_date)
            self.validate_input(region_code=region_code, start_date=start_date, end_date=end_date)

            series = await self.fetch_series(region_code, start_date, end_date)
            if not series.price:
                return []

            averages = aggregate_hourly(series.price, self.config.hours_per_day)
            return [HourlyAverage(**average) for average in averages]

        except Exception as e:
            self.handle_exception(e, "Error retrieving hourly averages")

    async def get_daily_stats(self, region_code: str, start_date: Optional[str] = None,
                              end_date: Optional[str] = None) -> List[DailyStats]:
        """Get min, max and average price per day of a date range."""
        try:
            start_date, end_date = self._resolve_range(start_date, end_date)
            self.validate_input(region_code=region_code, start_date=start_date, end_date=end_date)

            series = await self.fetch_series(region_code, start_date, end_date)
            stats = aggregate_daily(
                series.price,
                parse_date(start_date, "start date"),
                parse_date(end_date, "end date"),
                self.config.hours_per_day
            )
            return [DailyStats(**day_stats) for day_stats in stats]

        except Exception as e:
            self.handle_exception(e, "Error retrieving daily statistics")
