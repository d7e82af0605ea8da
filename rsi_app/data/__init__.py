"""
Data ingestion and normalization module.

Handles classification of raw provider payloads and their normalization into
canonical candle sequences.
"""
