"""
Statistics models for price analysis.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class HourlyAverage(BaseModel):
    """Average price of one hour of the day across a date range."""
    model_config = ConfigDict(populate_by_name=True)

    hour: str  # "H:00"
    avg_price: Optional[float] = Field(None, alias="avgPrice")

    @field_validator("avg_price")
    @classmethod
    def nan_to_none(cls, value):
        # a bucket holding a non-numeric sample averages to NaN, which JSON can't carry
        if value is not None and math.isnan(value):
            return None
        return value


class DailyStats(BaseModel):
    """Model for daily statistics."""
    date: str  # YYYY-MM-DD
    max: float
    min: float
    avg: float


class RangeValidation(BaseModel):
    """Outcome of a date range check."""
    ok: bool
    reason: Optional[str] = None
