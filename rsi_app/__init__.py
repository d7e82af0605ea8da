"""
RSI App - Candle Normalization and RSI Engine

Converts raw market data payloads (generic quote arrays and provider chart
envelopes) into canonical candle sequences and annotates them with Wilder's
smoothed Relative Strength Index.
"""

__version__ = "0.1.0"
__author__ = "RSI App Team"
