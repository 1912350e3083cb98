"""
Unit tests for the price aggregation pipeline.
"""

import math
from datetime import date

import pytest

from dayahead_api.services.aggregation import (
    round2,
    select_latest,
    hourly_prices,
    aggregate_hourly,
    aggregate_daily,
)


class TestRound2:
    """Tests for two-decimal rounding."""

    def test_rounds_halves_away_from_zero(self):
        assert round2(0.375) == 0.38
        assert round2(-0.375) == -0.38
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_keeps_short_values(self):
        assert round2(10.0) == 10.0
        assert round2(3.1) == 3.1

    def test_nan_passes_through(self):
        assert math.isnan(round2(float("nan")))

    def test_no_negative_zero(self):
        assert str(round2(-0.001)) == "0.0"


class TestSelectLatest:
    """Tests for the latest price selector."""

    def test_picks_current_hour(self):
        prices = [10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23]
        assert select_latest(prices, 5) == 15

    def test_falls_back_to_noon_when_hour_missing(self):
        prices = list(range(100, 124))
        prices[20] = None
        assert select_latest(prices, 20) == 112

    def test_falls_back_to_noon_on_short_series(self):
        prices = list(range(13))
        assert select_latest(prices, 18) == 12

    def test_returns_none_when_nothing_available(self):
        assert select_latest([1, 2, 3], 5) is None
        assert select_latest([], 0) is None

    def test_zero_price_is_a_value(self):
        prices = [0.0] * 24
        assert select_latest(prices, 3) == 0.0


class TestHourlyPrices:

    def test_labels_hours(self):
        assert hourly_prices([50.5, None]) == [
            {"hour": "0:00", "price": 50.5},
            {"hour": "1:00", "price": None},
        ]


class TestAggregateHourly:
    """Tests for the per-hour-of-day averages."""

    def test_returns_24_entries_in_hour_order(self):
        result = aggregate_hourly(list(range(72)))
        assert len(result) == 24
        assert [entry["hour"] for entry in result] == [f"{h}:00" for h in range(24)]

    def test_averages_same_hour_across_days(self):
        # three days: hour h holds h, h + 24 and h + 48
        result = aggregate_hourly(list(range(72)))
        for hour, entry in enumerate(result):
            assert entry["avg_price"] == pytest.approx(hour + 24)

    def test_rounds_to_two_decimals(self):
        prices = [1.0] * 24 + [2.333] * 24 + [0.0] * 24
        result = aggregate_hourly(prices)
        assert result[0]["avg_price"] == 1.11

    def test_all_zero_input_gives_zero_averages(self):
        result = aggregate_hourly([0.0] * 48)
        assert len(result) == 24
        assert all(entry["avg_price"] == 0 for entry in result)

    def test_empty_input_gives_zero_filled_buckets(self):
        result = aggregate_hourly([])
        assert len(result) == 24
        assert all(entry["avg_price"] == 0 for entry in result)

    def test_partial_day_leaves_later_buckets_at_zero(self):
        result = aggregate_hourly([5.0] * 30)
        assert result[5]["avg_price"] == 5.0
        assert result[6]["avg_price"] == 5.0
        assert result[23]["avg_price"] == 5.0
        assert aggregate_hourly([5.0] * 6)[6]["avg_price"] == 0

    def test_non_numeric_entry_propagates_nan(self):
        prices = [10.0] * 48
        prices[27] = None
        result = aggregate_hourly(prices)
        assert math.isnan(result[3]["avg_price"])
        assert result[4]["avg_price"] == 10.0


class TestAggregateDaily:
    """Tests for the per-day min/max/average."""

    @pytest.fixture
    def three_days(self):
        return [float(i) for i in range(72)]

    def test_one_entry_per_day_in_date_order(self, three_days):
        result = aggregate_daily(three_days, date(2024, 3, 1), date(2024, 3, 3))
        assert [entry["date"] for entry in result] == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_min_max_avg_per_day(self, three_days):
        result = aggregate_daily(three_days, "2024-03-01", "2024-03-03")
        assert result[1]["min"] == 24.0
        assert result[1]["max"] == 47.0
        assert result[1]["avg"] == pytest.approx(35.5)

    def test_day_without_valid_values_is_omitted(self, three_days):
        three_days[24:48] = [float("nan")] * 24
        result = aggregate_daily(three_days, "2024-03-01", "2024-03-03")
        assert [entry["date"] for entry in result] == ["2024-03-01", "2024-03-03"]

    def test_non_numeric_entries_are_ignored(self):
        prices = [None, "n/a", 4.0, 8.0] + [6.0] * 20
        result = aggregate_daily(prices, "2024-03-01", "2024-03-01")
        assert result == [{"date": "2024-03-01", "max": 8.0, "min": 4.0, "avg": 6.0}]

    def test_short_series_truncates_result(self):
        result = aggregate_daily([1.0] * 24, "2024-03-01", "2024-03-05")
        assert len(result) == 1

    def test_reversed_range_is_empty(self):
        assert aggregate_daily([1.0] * 24, "2024-03-02", "2024-03-01") == []

    def test_walks_across_dst_change(self):
        # the date axis is calendar days, 24 slots each
        prices = [1.0] * 24 + [2.0] * 24 + [3.0] * 24
        result = aggregate_daily(prices, "2024-03-30", "2024-04-01")
        assert [entry["date"] for entry in result] == ["2024-03-30", "2024-03-31", "2024-04-01"]
        assert [entry["avg"] for entry in result] == [1.0, 2.0, 3.0]
