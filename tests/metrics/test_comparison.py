"""Tests for year-over-year comparison helpers"""

import math

import pytest

from rsi_app.data.models import Candle, ClosePoint, PercentPoint
from rsi_app.errors import MalformedDataError
from rsi_app.metrics.comparison import (
    drop_missing_closes,
    extract_closes,
    split_by_year,
    to_percentage_change,
)

JAN_1_2023 = 1672531200
JAN_1_2024 = 1704067200


class TestDropMissingCloses:
    """Test reduction of candles to close points"""

    def test_skips_nan_closes(self):
        candles = [
            Candle(timestamp=1, open=1, high=1, low=1, close=10.0, volume=0),
            Candle(timestamp=2, open=1, high=1, low=1, close=math.nan, volume=0),
            Candle(timestamp=3, open=1, high=1, low=1, close=12.0, volume=0),
        ]
        assert drop_missing_closes(candles) == [ClosePoint(1, 10.0), ClosePoint(3, 12.0)]


class TestExtractCloses:
    """Test close extraction from chart envelopes"""

    def test_drops_null_closes(self, chart_factory):
        raw = chart_factory([100.0, 101.0, 102.0])
        raw["chart"]["result"][0]["indicators"]["quote"][0]["close"][1] = None

        points = extract_closes(raw)
        assert [p.close for p in points] == [100.0, 102.0]

    def test_tolerates_short_ohlc_arrays(self, chart_factory):
        """Only timestamps and closes must line up"""
        raw = chart_factory([100.0, 101.0])
        raw["chart"]["result"][0]["indicators"]["quote"][0]["volume"] = []

        assert len(extract_closes(raw)) == 2

    def test_empty_result(self):
        assert extract_closes({"chart": {"result": []}}) == []


class TestPercentageChange:
    """Test rebasing to the first close"""

    def test_rebases_to_first_close(self):
        points = [ClosePoint(1, 100.0), ClosePoint(2, 110.0), ClosePoint(3, 95.0)]
        result = to_percentage_change(points)

        assert result[0] == PercentPoint(1, 100.0, 0.0)
        assert result[1].percentage == pytest.approx(10.0)
        assert result[2].percentage == pytest.approx(-5.0)

    def test_empty(self):
        assert to_percentage_change([]) == []

    def test_zero_first_close(self):
        with pytest.raises(MalformedDataError, match="zero first close"):
            to_percentage_change([ClosePoint(1, 0.0), ClosePoint(2, 1.0)])


class TestSplitByYear:
    """Test grouping by calendar year"""

    def test_groups_newest_first(self):
        points = [
            ClosePoint(JAN_1_2023, 1.0),
            ClosePoint(JAN_1_2023 + 86400, 2.0),
            ClosePoint(JAN_1_2024, 3.0),
        ]
        grouped = split_by_year(points)

        assert list(grouped) == [2024, 2023]
        assert [p.close for p in grouped[2023]] == [1.0, 2.0]
        assert [p.close for p in grouped[2024]] == [3.0]

    def test_year_boundary_is_utc(self):
        grouped = split_by_year([ClosePoint(JAN_1_2024 - 1, 1.0)])
        assert list(grouped) == [2023]

    def test_empty(self):
        assert split_by_year([]) == {}
