"""Text normalization layer.

This module provides:
- Display cleaning: strip_html, clean_text, clean_company_name, normalize_location
- Entity decoding: decode_entities
- Matching keys: normalize_company_name, normalize_title
"""

from .text import (
    clean_company_name,
    clean_text,
    decode_entities,
    normalize_company_name,
    normalize_location,
    normalize_title,
    strip_html,
)

__all__ = [
    "decode_entities",
    "strip_html",
    "clean_text",
    "clean_company_name",
    "normalize_company_name",
    "normalize_title",
    "normalize_location",
]
