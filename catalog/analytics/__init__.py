"""Catalog statistics and ordering.

This module provides:
- compute_stats / CatalogStats: Aggregate counters for a catalog snapshot
- SalaryRangeCounts: Yearly salary buckets
- sort_catalog: Newest-first ordering with undated records last
"""

from .stats import (
    BUCKET_LABELS,
    CatalogStats,
    SalaryRangeCounts,
    compute_stats,
    jobs_per_day,
    salary_bucket,
    sort_catalog,
    yearly_salary,
)

__all__ = [
    "compute_stats",
    "CatalogStats",
    "SalaryRangeCounts",
    "BUCKET_LABELS",
    "salary_bucket",
    "yearly_salary",
    "jobs_per_day",
    "sort_catalog",
]
