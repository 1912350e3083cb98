"""
Shared instances handed to the controllers through ``Depends``.

The upstream session and the query cache live for the whole process, so
every request reuses the same connection pool and cache.
"""

from functools import lru_cache
from typing import Optional

from .config import app_config
from .repositories import UpstreamPriceRepository
from .services import RegionPriceService
from .utils import QueryCache


@lru_cache(maxsize=1)
def get_upstream_repository() -> UpstreamPriceRepository:
    """Dependency injection for UpstreamPriceRepository."""
    return UpstreamPriceRepository()


@lru_cache(maxsize=1)
def get_query_cache() -> Optional[QueryCache]:
    """Dependency injection for the process-wide QueryCache."""
    if not app_config.cache.enabled:
        return None
    return QueryCache(ttl_seconds=app_config.cache.ttl_seconds)


def get_region_price_service() -> RegionPriceService:
    """Dependency injection for RegionPriceService."""
    return RegionPriceService(
        repository=get_upstream_repository(),
        cache=get_query_cache()
    )
