"""
Error classification system for market data normalization.

This module provides a structured exception hierarchy for the data quality
issues encountered while normalizing provider payloads and computing RSI.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    ArrayLengthMismatchError,
    InsufficientDataError,
)

__all__ = [
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "ArrayLengthMismatchError",
    "InsufficientDataError",
]
