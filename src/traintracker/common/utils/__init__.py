"""
Utilities Module - Shared Helper Functions
===========================================

Provides shared utilities used across multiple layers:
- Date/time utilities
"""

from traintracker.common.utils.date_utils import (
    backdated,
    next_boundary,
    to_iso_z,
    to_unix_ms,
    utc_now,
)

__all__ = [
    "backdated",
    "next_boundary",
    "to_iso_z",
    "to_unix_ms",
    "utc_now",
]
