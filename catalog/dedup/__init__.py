"""Near-duplicate detection across sources.

This module provides:
- DedupEngine: Seed-based clustering and survivor selection
- merge_records: Pure merge policy for folding a duplicate into its survivor
- DedupKey, DuplicateGroup, DedupStats, DedupResult: Result models
"""

from .engine import DedupEngine
from .merge import merge_records
from .models import DedupKey, DedupResult, DedupStats, DuplicateGroup

__all__ = [
    "DedupEngine",
    "merge_records",
    "DedupKey",
    "DuplicateGroup",
    "DedupStats",
    "DedupResult",
]
