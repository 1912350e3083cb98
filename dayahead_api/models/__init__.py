"""
Models package for API data structures.
Imports all models for easy access.
"""

# Price models
from .price_models import (
    RegionDescriptor,
    RawPriceSeries,
    RegionPrice,
    HourlyPrice,
    RegionDetails
)

# Statistics models
from .stats_models import HourlyAverage, DailyStats, RangeValidation

# Response models
from .response_models import (
    APIInfo,
    HealthResponse,
    ErrorResponse,
    CacheEvictionResponse,
    RegionPricesResponse
)

__all__ = [
    # Price models
    "RegionDescriptor",
    "RawPriceSeries",
    "RegionPrice",
    "HourlyPrice",
    "RegionDetails",

    # Statistics models
    "HourlyAverage",
    "DailyStats",
    "RangeValidation",

    # Response models
    "APIInfo",
    "HealthResponse",
    "ErrorResponse",
    "CacheEvictionResponse",
    "RegionPricesResponse"
]
