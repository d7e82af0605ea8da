"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, Any, List


@pytest.fixture
def generic_payload() -> Dict[str, Any]:
    """Generic quote-array payload with three one-minute bars."""
    return {
        "timestamp": [1704067200, 1704067260, 1704067320],
        "indicators": {
            "quote": [
                {
                    "low": [150.25, 150.30, 150.28],
                    "volume": [1000000, 1200000, 950000],
                    "high": [150.35, 150.40, 150.38],
                    "close": [150.30, 150.35, 150.32],
                    "open": [150.28, 150.32, 150.30],
                }
            ]
        },
    }


@pytest.fixture
def chart_payload(generic_payload) -> Dict[str, Any]:
    """Provider chart envelope wrapping the generic payload."""
    result = dict(generic_payload)
    result["meta"] = {"symbol": "HDFCBANK.NS", "currency": "INR"}
    return {"chart": {"result": [result], "error": None}}


@pytest.fixture
def wilder_closes() -> List[float]:
    """Fifteen closes: exactly period + 1 for the default period of 14."""
    return [44, 44.25, 44.5, 43.75, 44.5, 44.75, 45, 45.25, 45.5, 45.75,
            46, 46.25, 46.5, 46.75, 47]


def make_generic_payload(closes: List[float], start: int = 1704067200, step: int = 86400) -> Dict[str, Any]:
    """Build a generic payload whose OHLC values are derived from closes."""
    n = len(closes)
    return {
        "timestamp": [start + i * step for i in range(n)],
        "indicators": {
            "quote": [
                {
                    "open": list(closes),
                    "high": [c + 1 for c in closes],
                    "low": [c - 1 for c in closes],
                    "close": list(closes),
                    "volume": [1000] * n,
                }
            ]
        },
    }


def make_chart_payload(closes: List[float], start: int = 1704067200, step: int = 86400,
                       symbol: str = "HDFCBANK.NS") -> Dict[str, Any]:
    """Build a provider chart envelope from closes."""
    result = make_generic_payload(closes, start, step)
    result["meta"] = {"symbol": symbol}
    return {"chart": {"result": [result], "error": None}}


@pytest.fixture
def payload_factory():
    """Factory for generic payloads built from closes."""
    return make_generic_payload


@pytest.fixture
def chart_factory():
    """Factory for chart envelopes built from closes."""
    return make_chart_payload
