"""
Utility functions module.

Common helpers shared across the normalizer and comparison code.

Time Semantics:
- Provider timestamps are epoch seconds and are never re-sorted by the core
- Calendar grouping and date parsing are done in UTC
"""
