"""
Configuration package for application settings and the region registry.
"""

from .settings import (
    ApplicationConfig,
    APIConfig,
    UpstreamConfig,
    CacheConfig,
    DashboardConfig,
    LoggingConfig,
    app_config
)
from .regions import REGIONS, find_region

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "UpstreamConfig",
    "CacheConfig",
    "DashboardConfig",
    "LoggingConfig",
    "app_config",
    "REGIONS",
    "find_region"
]
