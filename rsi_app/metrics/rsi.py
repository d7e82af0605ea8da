"""RSI (Relative Strength Index) calculation with Wilder's smoothing"""

from collections.abc import Sequence
from enum import Enum
from typing import Optional

from ..data.models import Candle
from ..errors import InsufficientDataError


def rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    """
    Convert smoothed average gain/loss into an RSI value

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    A zero average loss gives RSI = 100.
    """
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def calculate_rsi(closes: Sequence[float], period: int = 14) -> list[float]:
    """
    Calculate Wilder's smoothed RSI over a closing-price sequence

    The first `period` deltas seed simple average gain/loss. Every later
    delta updates the averages with Wilder's smoothing and emits one value:

        avg = (avg * (period - 1) + x) / period

    Args:
        closes: Closing prices in chronological order
        period: Lookback period (default 14)

    Returns:
        len(closes) - period - 1 RSI values, or [] if len(closes) < period + 1
    """
    if period < 1:
        raise ValueError(f"RSI period must be a positive integer, got {period}")

    if len(closes) < period + 1:
        return []

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    values = []
    for i in range(period + 1, len(closes)):
        change = closes[i] - closes[i - 1]
        gain = max(change, 0.0)
        loss = max(-change, 0.0)
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        values.append(rsi_from_averages(avg_gain, avg_loss))

    return values


def annotate_rsi(candles: Sequence[Candle], period: int = 14) -> list[Candle]:
    """
    Attach RSI values to candles starting at offset `period`

    candles[period + j] receives rsi[j]; the warm-up candles keep rsi=None.

    Args:
        candles: Candles in chronological order
        period: Lookback period (default 14)

    Returns:
        New list of candles; the input is not modified
    """
    values = calculate_rsi([c.close for c in candles], period)

    annotated = list(candles)
    for j, value in enumerate(values):
        annotated[period + j] = annotated[period + j].with_rsi(value)

    return annotated


class RSICalculator:
    """Stateless RSI calculator bound to a lookback period"""

    def __init__(self, period: int = 14):
        if period < 1:
            raise ValueError(f"RSI period must be a positive integer, got {period}")
        self.period = period

    @property
    def min_history(self) -> int:
        """Number of closes needed before any RSI value exists"""
        return self.period + 2

    def calculate(self, closes: Sequence[float]) -> list[float]:
        """Calculate the RSI sequence for raw closes"""
        return calculate_rsi(closes, self.period)

    def calculate_with_candles(self, candles: Sequence[Candle]) -> list[float]:
        """Calculate the RSI sequence from candle closes"""
        return calculate_rsi([c.close for c in candles], self.period)

    def annotate(self, candles: Sequence[Candle]) -> list[Candle]:
        """Return candles annotated with RSI values"""
        return annotate_rsi(candles, self.period)

    def latest(self, candles: Sequence[Candle], strict: bool = False) -> Optional[float]:
        """
        Most recent RSI value

        Args:
            candles: Candles in chronological order
            strict: Raise instead of returning None when history is short

        Returns:
            Latest RSI or None if insufficient data
        """
        values = self.calculate_with_candles(candles)
        if values:
            return values[-1]

        if strict:
            raise InsufficientDataError(
                f"RSI({self.period}) needs {self.min_history} closes, got {len(candles)}",
                required_count=self.min_history,
                available_count=len(candles),
            )
        return None


class RSIZone(Enum):
    """Reference band an RSI value falls in"""
    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"
    OVERSOLD = "oversold"


def classify_rsi_zone(value: float, overbought: float = 70.0, oversold: float = 30.0) -> RSIZone:
    """
    Classify an RSI value against the overbought/oversold bands

    Values on a band line count as inside that band.
    """
    if value >= overbought:
        return RSIZone.OVERBOUGHT
    if value <= oversold:
        return RSIZone.OVERSOLD
    return RSIZone.NEUTRAL
