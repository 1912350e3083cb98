"""
Controller for region list and region detail endpoints.

This controller serves the chart-ready views of the dashboard:
- Region registry and latest price per region
- Single-day hourly prices of a region
- Hourly averages and daily min/max/average across a date range

Endpoints:
    - GET /regions: Registered bidding zones
    - GET /region-prices: Latest price per region, filtered and sorted
    - GET /regions/{region_code}: Region detail for one day
    - GET /regions/{region_code}/hourly-prices: Single-day chart data
    - GET /regions/{region_code}/hourly-averages: Average per hour of day
    - GET /regions/{region_code}/daily-stats: Min/max/average per day
"""

from fastapi import Query, Path, Depends
from typing import Optional, List

from .base_controller import BaseController
from ..config import REGIONS
from ..dependencies import get_region_price_service
from ..exceptions import PriceApiError
from ..models import (
    RegionDescriptor, RegionPricesResponse, RegionDetails, HourlyPrice,
    HourlyAverage, DailyStats, ErrorResponse
)
from ..services import RegionPriceService

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


class RegionController(BaseController):
    """Controller for region list and detail endpoints."""

    def _setup_routes(self):
        """Setup routes for region operations."""

        @self.router.get(
            "/regions",
            response_model=List[RegionDescriptor],
            tags=["Regions"],
            summary="List the registered bidding zones"
        )
        async def get_regions():
            """Return the static region registry."""
            return REGIONS

        @self.router.get(
            "/region-prices",
            response_model=RegionPricesResponse,
            responses=ERROR_RESPONSES,
            tags=["Regions"],
            summary="Get the latest price of every region",
            description="""
            Fetch every registered region in parallel and return its price for the
            current hour of day (12:00 when the current hour is not published).

            **Filtering Options:**
            - **search**: case-insensitive match on code or name
            - **min_price / max_price**: inclusive price bounds
            - **sort**: `name-asc`, `name-desc`, `price-asc`, `price-desc`

            The list is all-or-nothing: if any region fails, the whole batch is
            retried (twice by default) before the endpoint answers 500.
            """
        )
        async def get_region_prices(
            search: Optional[str] = Query(
                None, description="Search by region code or name"),
            min_price: Optional[float] = Query(
                None, description="Minimum price (inclusive)"),
            max_price: Optional[float] = Query(
                None, description="Maximum price (inclusive)"),
            sort: str = Query(
                "name-asc",
                description="Sort order: name-asc, name-desc, price-asc or price-desc"
            ),
            service: RegionPriceService = Depends(get_region_price_service)
        ):
            """Get the region list with latest prices."""
            try:
                regions = await service.get_region_prices(
                    search=search,
                    min_price=min_price,
                    max_price=max_price,
                    sort=sort
                )
                return RegionPricesResponse(regions=regions, count=len(regions))
            except PriceApiError:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving region prices")

        @self.router.get(
            "/regions/{region_code}",
            response_model=RegionDetails,
            responses=ERROR_RESPONSES,
            tags=["Regions"],
            summary="Get the price series of a region for one day"
        )
        async def get_region_details(
            region_code: str = Path(..., description="Bidding zone code, case-sensitive"),
            date: Optional[str] = Query(
                None, description="Day in YYYY-MM-DD format (default: today)"),
            service: RegionPriceService = Depends(get_region_price_service)
        ):
            """Get region details for a single day."""
            try:
                return await service.get_region_details(region_code, date)
            except PriceApiError:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving region details")

        @self.router.get(
            "/regions/{region_code}/hourly-prices",
            response_model=List[HourlyPrice],
            responses=ERROR_RESPONSES,
            tags=["Regions"],
            summary="Get hourly prices of a single day",
            description="""
            Chart data for one day: `[{"hour": "0:00", "price": ...}, ...]`.
            The day must be today or earlier. An empty list means no data is
            published for that day.
            """
        )
        async def get_hourly_prices(
            region_code: str = Path(..., description="Bidding zone code, case-sensitive"),
            date: Optional[str] = Query(
                None, description="Day in YYYY-MM-DD format (default: today)"),
            service: RegionPriceService = Depends(get_region_price_service)
        ):
            """Get the single-day hourly price chart."""
            try:
                return await service.get_hourly_prices(region_code, date)
            except PriceApiError:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving hourly prices")

        @self.router.get(
            "/regions/{region_code}/hourly-averages",
            response_model=List[HourlyAverage],
            responses=ERROR_RESPONSES,
            tags=["Regions"],
            summary="Get average prices per hour of day across a date range",
            description="""
            Average of every hour of the day (0:00 to 23:00) across the range,
            rounded to two decimals. Both dates must be today or earlier and
            `start <= end`. Defaults to the last 10 days.
            """
        )
        async def get_hourly_averages(
            region_code: str = Path(..., description="Bidding zone code, case-sensitive"),
            start: Optional[str] = Query(
                None, description="Start date in YYYY-MM-DD format"),
            end: Optional[str] = Query(
                None, description="End date in YYYY-MM-DD format"),
            service: RegionPriceService = Depends(get_region_price_service)
        ):
            """Get hourly averages for a date range."""
            try:
                return await service.get_hourly_averages(region_code, start, end)
            except PriceApiError:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving hourly averages")

        @self.router.get(
            "/regions/{region_code}/daily-stats",
            response_model=List[DailyStats],
            responses=ERROR_RESPONSES,
            tags=["Regions"],
            summary="Get min, max and average price per day across a date range",
            description="""
            One entry per day with at least one published price, in date order.
            Days without data are left out. Defaults to the last 10 days.
            """
        )
        async def get_daily_stats(
            region_code: str = Path(..., description="Bidding zone code, case-sensitive"),
            start: Optional[str] = Query(
                None, description="Start date in YYYY-MM-DD format"),
            end: Optional[str] = Query(
                None, description="End date in YYYY-MM-DD format"),
            service: RegionPriceService = Depends(get_region_price_service)
        ):
            """Get daily statistics for a date range."""
            try:
                return await service.get_daily_stats(region_code, start, end)
            except PriceApiError:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving daily statistics")
