"""Close-only series helpers for year-over-year comparison charts"""

import math
from collections.abc import Iterable, Sequence
from typing import Any

from ..data.models import Candle, ClosePoint, PercentPoint
from ..data.normalizer import normalize_provider_chart
from ..errors import MalformedDataError
from ..utils.time import year_of


def drop_missing_closes(candles: Iterable[Candle]) -> list[ClosePoint]:
    """
    Reduce candles to close points, skipping bars with a missing close

    Args:
        candles: Candles in chronological order

    Returns:
        Close points for every candle whose close is a number
    """
    return [
        ClosePoint(timestamp=c.timestamp, close=c.close)
        for c in candles
        if not math.isnan(c.close)
    ]


def extract_closes(raw: Any) -> list[ClosePoint]:
    """
    Close points from a provider chart envelope

    Only the timestamp and close arrays need to line up, so the envelope is
    normalized permissively and null closes are dropped afterwards.
    """
    return drop_missing_closes(normalize_provider_chart(raw, length_policy="permissive"))


def to_percentage_change(points: Sequence[ClosePoint]) -> list[PercentPoint]:
    """
    Rebase closes to percentage change from the first close

    percentage = (close - first_close) / first_close * 100

    Args:
        points: Close points in chronological order

    Returns:
        Percent points, [] for empty input

    Raises:
        MalformedDataError: If the first close is zero
    """
    if not points:
        return []

    first_close = points[0].close
    if first_close == 0:
        raise MalformedDataError(
            "Cannot rebase series with a zero first close",
            context={"timestamp": points[0].timestamp},
        )

    return [
        PercentPoint(
            timestamp=p.timestamp,
            close=p.close,
            percentage=(p.close - first_close) / first_close * 100.0,
        )
        for p in points
    ]


def split_by_year(points: Iterable[ClosePoint]) -> dict[int, list[ClosePoint]]:
    """
    Group close points by UTC calendar year, preserving order within a year

    Returns:
        Mapping of year to points, with years in descending order
    """
    grouped: dict[int, list[ClosePoint]] = {}
    for point in points:
        grouped.setdefault(year_of(point.timestamp), []).append(point)

    return {year: grouped[year] for year in sorted(grouped, reverse=True)}
