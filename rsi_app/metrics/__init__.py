"""Indicator calculations over normalized candle sequences"""

from .comparison import drop_missing_closes, extract_closes, split_by_year, to_percentage_change
from .rsi import RSICalculator, RSIZone, annotate_rsi, calculate_rsi, classify_rsi_zone

__all__ = [
    "RSICalculator",
    "RSIZone",
    "calculate_rsi",
    "annotate_rsi",
    "classify_rsi_zone",
    "drop_missing_closes",
    "extract_closes",
    "split_by_year",
    "to_percentage_change",
]
