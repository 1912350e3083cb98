"""
Price aggregation pipeline.

Pure functions turning a raw hourly price series into the chart views of the
dashboard:

    - select_latest: price of the current hour, noon as fallback
    - aggregate_hourly: average per hour of day across a date range
    - aggregate_daily: min/max/average per calendar day of a date range

The series is assumed densely packed at ``hours_per_day`` entries per day,
starting at midnight of the range start. Position ``i`` belongs to hour
``i % hours_per_day`` of day ``i // hours_per_day``. The length is not
checked; a short series simply yields fewer (or empty) results.

Day boundaries are plain calendar dates. The index arithmetic always uses
24 slots per day, so on DST transition days the 23 or 25 published hours are
not realigned.
"""

import math
import numbers
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

HOURS_PER_DAY = 24
FALLBACK_HOUR = 12

DateLike = Union[date, str]


def round2(value: float) -> float:
    """Round to two decimals, halves away from zero. NaN and inf pass through."""
    if math.isnan(value) or math.isinf(value):
        return value
    scaled = math.floor(abs(value) * 100 + 0.5)
    return math.copysign(scaled, value) / 100 + 0.0


def _to_float_array(prices: Sequence[Any]) -> np.ndarray:
    # anything that is not a real number (None, strings, bools) becomes NaN
    return np.array(
        [float(p) if isinstance(p, numbers.Real) and not isinstance(p, bool) else np.nan
         for p in prices],
        dtype=float
    )


def _to_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def select_latest(prices: Sequence[Optional[float]], hour_of_day: int,
                  fallback_hour: int = FALLBACK_HOUR) -> Optional[float]:
    """
    Pick the price of ``hour_of_day``, or of ``fallback_hour`` when missing.

    Returns:
        The price, or None when neither position holds a value
    """
    for index in (hour_of_day, fallback_hour):
        if 0 <= index < len(prices) and prices[index] is not None:
            return prices[index]
    return None


def hourly_prices(prices: Sequence[Optional[float]]) -> List[Dict[str, Any]]:
    """Label each entry of a single-day series with its hour ("H:00")."""
    return [{"hour": f"{index}:00", "price": price} for index, price in enumerate(prices)]


def aggregate_hourly(prices: Sequence[Any],
                     hours_per_day: int = HOURS_PER_DAY) -> List[Dict[str, Any]]:
    """
    Average the series per hour of day.

    Every entry is added to bucket ``i % hours_per_day``. Entries are not
    filtered, so a non-numeric value turns its bucket average into NaN.
    Empty buckets report 0.

    Returns:
        list: ``hours_per_day`` dicts ``{"hour": "H:00", "avg_price": float}``
        in hour order
    """
    values = _to_float_array(prices)
    buckets = np.arange(len(values)) % hours_per_day

    sums = np.bincount(buckets, weights=values, minlength=hours_per_day)
    counts = np.bincount(buckets, minlength=hours_per_day)

    return [
        {
            "hour": f"{hour}:00",
            "avg_price": round2(float(sums[hour] / counts[hour])) if counts[hour] > 0 else 0
        }
        for hour in range(hours_per_day)
    ]


def aggregate_daily(prices: Sequence[Any], start_date: DateLike, end_date: DateLike,
                    hours_per_day: int = HOURS_PER_DAY) -> List[Dict[str, Any]]:
    """
    Compute max, min and mean price for each calendar day of a range.

    Each day takes the ``hours_per_day`` slots at its offset from
    ``start_date``. Non-numeric and NaN entries are dropped; a day left with
    no values is omitted from the result.

    Args:
        prices: Hourly series starting at midnight of ``start_date``
        start_date: First day (date or YYYY-MM-DD)
        end_date: Last day, inclusive

    Returns:
        list: ``{"date", "max", "min", "avg"}`` dicts in ascending date order
    """
    start = _to_date(start_date)
    end = _to_date(end_date)
    values = _to_float_array(prices)

    stats = []
    for day in pd.date_range(start, end, freq="D"):
        day_index = (day.date() - start).days
        window = values[day_index * hours_per_day:(day_index + 1) * hours_per_day]
        valid = window[~np.isnan(window)]
        if valid.size == 0:
            continue

        stats.append({
            "date": day.strftime("%Y-%m-%d"),
            "max": float(valid.max()),
            "min": float(valid.min()),
            "avg": float(valid.mean()),
        })

    return stats
