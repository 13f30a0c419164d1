"""Utility functions for time handling."""

from .timestamps import (
    EARLIEST,
    coerce_datetime,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    "EARLIEST",
    "utc_now",
    "ensure_utc",
    "coerce_datetime",
    "parse_iso_datetime",
    "format_timestamp",
]
