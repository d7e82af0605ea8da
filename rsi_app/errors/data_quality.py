"""
Data quality error classifications for market data processing.

These exceptions categorize the problems that can occur when provider
payloads are turned into candle sequences and indicator values.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class ArrayLengthMismatchError(MalformedDataError):
    """A quote array does not line up with the timestamp array."""

    def __init__(self, message: str, field: Optional[str] = None,
                 expected_length: Optional[int] = None,
                 actual_length: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.expected_length = expected_length
        self.actual_length = actual_length


class InsufficientDataError(DataQualityError):
    """Not enough historical data for calculations."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
