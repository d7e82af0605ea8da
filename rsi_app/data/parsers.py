"""
Provider-specific parsers for converting raw payloads to normalized objects.

This module resolves the two quote-array payload shapes into the
`ProviderPayload` tagged union, and parses NSE gold-bond history rows
into close-only points.
"""

import math
from typing import Any, Optional, Union

import orjson

from ..utils.time import parse_nse_date
from .models import ChartEnvelope, ClosePoint, GenericPayload, ProviderPayload, QuoteArrays

QUOTE_FIELDS = ("open", "high", "low", "close", "volume")


class ParseError(Exception):
    """Raised when parsing fails due to invalid data format."""
    pass


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Parse raw JSON text into Python objects.

    Args:
        raw_data: Raw JSON text from a provider or a pasted document

    Returns:
        Parsed object

    Raises:
        ParseError: If JSON parsing fails
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}")


def classify_payload(payload: Any) -> ProviderPayload:
    """
    Resolve a parsed payload into one of the recognized shapes.

    A top-level ``chart`` key selects the provider chart envelope; any other
    mapping is read as the generic shape.

    Raises:
        ParseError: If the payload is not a mapping or lacks required keys
    """
    if not isinstance(payload, dict):
        raise ParseError("Payload must be a dictionary")

    if "chart" in payload:
        return parse_chart_envelope(payload["chart"])

    return GenericPayload(arrays=extract_quote_arrays(payload))


def parse_chart_envelope(chart: Any) -> ChartEnvelope:
    """Parse the ``chart`` object of a provider envelope."""
    if chart is None:
        return ChartEnvelope(arrays=None)
    if not isinstance(chart, dict):
        raise ParseError("'chart' field must be a dictionary")

    results = chart.get("result")
    if not results:
        # Unknown ticker or empty range
        return ChartEnvelope(arrays=None)
    if not isinstance(results, list):
        raise ParseError("'chart.result' field must be a list")

    result = results[0]
    if not isinstance(result, dict):
        raise ParseError("'chart.result[0]' must be a dictionary")

    symbol = _meta_symbol(result)

    # Ranges without trades come back with metadata but no timestamp array
    if "timestamp" not in result:
        return ChartEnvelope(arrays=None, symbol=symbol)

    return ChartEnvelope(arrays=extract_quote_arrays(result), symbol=symbol)


def _meta_symbol(result: dict[str, Any]) -> Optional[str]:
    meta = result.get("meta")
    if isinstance(meta, dict):
        return meta.get("symbol")
    return None


def extract_quote_arrays(container: dict[str, Any]) -> QuoteArrays:
    """
    Extract the timestamp array and ``indicators.quote[0]`` arrays.

    Quote fields absent from the quote object are returned as empty lists so
    that the normalizer's length policy decides how to treat them.

    Raises:
        ParseError: If ``timestamp`` or ``indicators.quote[0]`` is missing
    """
    if "timestamp" not in container:
        raise ParseError("Missing 'timestamp' field in payload")

    timestamps = container["timestamp"]
    if not isinstance(timestamps, list):
        raise ParseError("'timestamp' field must be a list")

    indicators = container.get("indicators")
    if not isinstance(indicators, dict):
        raise ParseError("Missing 'indicators' field in payload")

    quotes = indicators.get("quote")
    if not isinstance(quotes, list) or len(quotes) == 0:
        raise ParseError("'indicators.quote' field must be a non-empty list")

    quote = quotes[0]
    if not isinstance(quote, dict):
        raise ParseError("'indicators.quote[0]' must be a dictionary")

    arrays = {}
    for name in QUOTE_FIELDS:
        values = quote.get(name) or []
        if not isinstance(values, list):
            raise ParseError(f"'{name}' quote field must be a list")
        arrays[name] = values

    return QuoteArrays(timestamp=timestamps, **arrays)


def parse_timestamp(value: Any, index: int) -> int:
    """Convert an epoch-second timestamp entry to int; fractional seconds are rejected."""
    if value is None or isinstance(value, bool):
        raise ParseError(f"Invalid timestamp at index {index}: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ParseError(f"Invalid timestamp at index {index}: {value!r} is not whole seconds")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"Invalid timestamp at index {index}: {e}")


def parse_quote_value(value: Any, field: str, index: int) -> float:
    """Convert a quote entry to float; null entries become NaN."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        raise ParseError(f"Invalid {field} value at index {index}: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"Invalid {field} value at index {index}: {e}")


def parse_nse_bond_rows(rows: Any) -> list[ClosePoint]:
    """
    Parse NSE historical trade rows into close points.

    Expected row format:
    {"mtimestamp": "27-Dec-2022", "chClosingPrice": 5409.0, ...}

    Rows with a missing or unrecognized date, or a non-numeric close, are
    skipped. The result is sorted by timestamp ascending.

    Raises:
        ParseError: If ``rows`` is not a list
    """
    if not isinstance(rows, list):
        raise ParseError("NSE payload must be a list of rows")

    points = []
    for row in rows:
        if not isinstance(row, dict):
            continue

        close = row.get("chClosingPrice")
        if isinstance(close, bool) or not isinstance(close, (int, float)):
            continue

        ts = parse_nse_date(row.get("mtimestamp"))
        if ts is None:
            continue

        points.append(ClosePoint(timestamp=ts, close=float(close)))

    points.sort(key=lambda p: p.timestamp)
    return points
