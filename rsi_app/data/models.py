"""
Canonical data models for normalized market data.

This module defines immutable data structures for candle sequences after
normalization from raw provider payloads, plus the tagged union that the
ingestion boundary resolves payload shapes into.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Candle:
    """Normalized OHLCV bar keyed by epoch-second timestamp."""
    timestamp: int          # Seconds since epoch
    open: float             # Opening price
    high: float             # High price
    low: float              # Low price
    close: float            # Closing price
    volume: float           # Traded volume
    rsi: Optional[float] = None  # Absent during the warm-up window

    def with_rsi(self, rsi: Optional[float]) -> "Candle":
        """Return a copy annotated with an RSI value."""
        return replace(self, rsi=rsi)

    @property
    def has_missing_values(self) -> bool:
        """True if any price or volume field is NaN."""
        return any(math.isnan(v) for v in (self.open, self.high, self.low, self.close, self.volume))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for rendering layers; `rsi` is omitted when absent."""
        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
        if self.rsi is not None:
            data["rsi"] = self.rsi
        return data


@dataclass(frozen=True)
class ClosePoint:
    """Close-only observation used by comparison charts and bond series."""
    timestamp: int
    close: float


@dataclass(frozen=True)
class PercentPoint:
    """Close observation rebased to percentage change from the first close."""
    timestamp: int
    close: float
    percentage: float


class LengthPolicy(Enum):
    """How to treat quote arrays that do not match the timestamp array."""
    STRICT = "strict"           # Fail fast with ArrayLengthMismatchError
    PERMISSIVE = "permissive"   # Pad missing positions with NaN


@dataclass(frozen=True)
class QuoteArrays:
    """Parallel timestamp and OHLCV arrays extracted from a payload."""
    timestamp: list
    open: list
    high: list
    low: list
    close: list
    volume: list

    def field_lengths(self) -> dict[str, int]:
        """Length of every quote array, keyed by field name."""
        return {
            "open": len(self.open),
            "high": len(self.high),
            "low": len(self.low),
            "close": len(self.close),
            "volume": len(self.volume),
        }


@dataclass(frozen=True)
class GenericPayload:
    """Quote arrays at the top level of the payload."""
    arrays: QuoteArrays


@dataclass(frozen=True)
class ChartEnvelope:
    """Provider chart envelope; `arrays` is None when `chart.result` is empty."""
    arrays: Optional[QuoteArrays]
    symbol: Optional[str] = None


ProviderPayload = Union[GenericPayload, ChartEnvelope]
