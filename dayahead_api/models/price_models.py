"""
Domain models for day-ahead price data.
"""

import numbers

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class RegionDescriptor(BaseModel):
    """A bidding zone known to the dashboard."""
    model_config = ConfigDict(frozen=True)

    code: str  # e.g. "DE-LU", case-sensitive
    name: str  # display label


class RawPriceSeries(BaseModel):
    """Hourly price series as published by the upstream for a date range."""
    region_code: str
    unix_seconds: List[int] = []
    # one entry per hour from range start, null where the upstream has no value
    price: List[Optional[float]] = []
    unit: str = ""
    license_info: str = ""
    deprecated: bool = False

    @field_validator("price", mode="before")
    @classmethod
    def non_numeric_to_none(cls, value):
        # keep the hour slot, drop what the upstream sent in place of a number
        if not isinstance(value, (list, tuple)):
            return []
        return [
            float(p) if isinstance(p, numbers.Real) and not isinstance(p, bool) else None
            for p in value
        ]

    @classmethod
    def from_upstream(cls, region_code: str, payload: dict) -> "RawPriceSeries":
        """Build a series from the upstream JSON body."""
        return cls(
            region_code=region_code,
            unix_seconds=payload.get("unix_seconds") or [],
            price=payload.get("price") or [],
            unit=payload.get("unit") or "",
            license_info=payload.get("license_info") or "",
            deprecated=bool(payload.get("deprecated", False))
        )


class RegionPrice(BaseModel):
    """Latest price of a region, one row of the region list."""
    code: str
    name: str
    price: Optional[float] = None  # None when neither current hour nor noon is published
    unit: str = ""


class HourlyPrice(BaseModel):
    """One point of the single-day price chart."""
    hour: str  # "H:00"
    price: Optional[float] = None


class RegionDetails(BaseModel):
    """Price series of one region with its upstream metadata."""
    code: str
    name: str
    start_date: str
    end_date: str
    unix_seconds: List[int]
    price: List[Optional[float]]
    unit: str
    license_info: str
    deprecated: bool
    latest_price: Optional[float] = Field(
        None, description="Price for the current hour, noon when unavailable")
