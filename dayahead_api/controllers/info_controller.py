"""
Controller for API information, health and cache endpoints.
"""

from fastapi import Query, Depends
from typing import Optional

from .base_controller import BaseController
from ..config import app_config
from ..dependencies import get_query_cache
from ..models import APIInfo, HealthResponse, CacheEvictionResponse
from ..utils import QueryCache


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info, health and cache management."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info():
            """API root endpoint with basic information."""
            return APIInfo(
                message="Day-Ahead Electricity Price API",
                version=app_config.api.version,
                endpoints={
                    "proxy_price": "/proxy-price - Relay a query to the upstream price API",
                    "regions": "/regions - Registered bidding zones",
                    "region_prices": "/region-prices - Latest price per region",
                    "region_details": "/regions/{code} - Region series for one day",
                    "hourly_prices": "/regions/{code}/hourly-prices - Single-day chart",
                    "hourly_averages": "/regions/{code}/hourly-averages - Average per hour of day",
                    "daily_stats": "/regions/{code}/daily-stats - Min/max/average per day",
                    "cache": "/cache - Evict cached upstream results",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="dayahead-price-api"
            )

        @self.router.delete("/cache", response_model=CacheEvictionResponse, tags=["System Information"])
        async def evict_cache(
            region: Optional[str] = Query(
                None, description="Only evict entries of this region code"),
            cache: Optional[QueryCache] = Depends(get_query_cache)
        ):
            """Evict cached upstream results, for one region or all of them."""
            if cache is None:
                return CacheEvictionResponse(evicted=0, remaining=0)
            evicted = cache.invalidate(region)
            self.logger.info("Evicted %d cache entries (region=%s)", evicted, region or "all")
            return CacheEvictionResponse(evicted=evicted, remaining=len(cache))
