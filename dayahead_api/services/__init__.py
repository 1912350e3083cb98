"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Price aggregation pipeline
from .aggregation import (
    round2,
    select_latest,
    hourly_prices,
    aggregate_hourly,
    aggregate_daily
)

# Date range checks
from .validation import validate_date, validate_range, ensure_valid

# Individual services
from .region_price_service import RegionPriceService, SORT_OPTIONS
from .subscription_service import DetailSubscription

__all__ = [
    # Base service
    "BaseService",

    # Aggregation pipeline
    "round2",
    "select_latest",
    "hourly_prices",
    "aggregate_hourly",
    "aggregate_daily",

    # Validation
    "validate_date",
    "validate_range",
    "ensure_valid",

    # Individual services
    "RegionPriceService",
    "SORT_OPTIONS",
    "DetailSubscription"
]
