"""Aggregate statistics over a deduplicated catalog."""

from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from catalog.config.models import AnalyticsConfig
from catalog.domain.models import JobRecord
from catalog.utils.timestamps import ensure_utc, utc_now

# Upper bounds (exclusive) of the yearly salary buckets
BUCKET_BOUNDS = (
    ("under_50k", 50_000),
    ("50k_100k", 100_000),
    ("100k_150k", 150_000),
    ("150k_200k", 200_000),
)

BUCKET_LABELS = {
    "under_50k": "<50k",
    "50k_100k": "50k-100k",
    "100k_150k": "100k-150k",
    "150k_200k": "150k-200k",
    "over_200k": ">=200k",
    "unknown": "unknown",
}


class SalaryRangeCounts(BaseModel):
    """Record counts per yearly salary bucket (based on salary_min)."""

    under_50k: int = 0
    k50_100k: int = Field(0, alias="50k_100k")
    k100_150k: int = Field(0, alias="100k_150k")
    k150_200k: int = Field(0, alias="150k_200k")
    over_200k: int = 0
    unknown: int = 0

    model_config = {"populate_by_name": True}

    def as_labels(self) -> Dict[str, int]:
        """Counts keyed by display label (``<50k``, ``50k-100k``, ...)."""
        dumped = self.model_dump(by_alias=True)
        return {BUCKET_LABELS[name]: dumped[name] for name in BUCKET_LABELS}

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())


class CatalogStats(BaseModel):
    """Aggregate counters for a catalog snapshot."""

    total_jobs: int = Field(0, description="Number of records in the catalog")
    by_platform: Dict[str, int] = Field(default_factory=dict)
    by_tech_stack: Dict[str, int] = Field(default_factory=dict)
    by_contract_type: Dict[str, int] = Field(default_factory=dict)
    by_remote_type: Dict[str, int] = Field(default_factory=dict)
    by_salary_range: SalaryRangeCounts = Field(default_factory=SalaryRangeCounts)
    jobs_last_n_days: List[int] = Field(
        default_factory=list, description="Posted counts per UTC day, oldest first"
    )
    last_updated: datetime = Field(default_factory=utc_now)

    def top_tech(self, limit: int = 10) -> List[tuple]:
        """Most frequent tech tags, ties broken alphabetically."""
        return sorted(self.by_tech_stack.items(), key=lambda item: (-item[1], item[0]))[:limit]


def yearly_salary(record: JobRecord, hours_per_year: int = 2080) -> Optional[float]:
    """Normalize a record's salary_min to a yearly figure.

    Hourly figures are multiplied by ``hours_per_year``; everything else is
    taken as-is. Returns None when salary_min is unknown.
    """
    if record.salary_min is None:
        return None
    if record.salary_type == "hourly":
        return record.salary_min * hours_per_year
    return record.salary_min


def salary_bucket(yearly: Optional[float]) -> str:
    """Name of the bucket a yearly salary falls into."""
    if yearly is None:
        return "unknown"
    for name, upper in BUCKET_BOUNDS:
        if yearly < upper:
            return name
    return "over_200k"


def jobs_per_day(
    records: Iterable[JobRecord], days: int, now: Optional[datetime] = None
) -> List[int]:
    """Count records posted on each of the last ``days`` UTC calendar days.

    Args:
        records: Records to count (records without posted_at are ignored)
        days: Number of days, ending with today
        now: Reference time (defaults to utc_now())

    Returns:
        List of ``days`` counts, oldest day first
    """
    today = ensure_utc(now or utc_now()).date()
    posted = Counter(
        ensure_utc(record.posted_at).date() for record in records if record.posted_at
    )
    return [posted[today - timedelta(days=offset)] for offset in range(days - 1, -1, -1)]


def compute_stats(
    records: Iterable[JobRecord],
    config: Optional[AnalyticsConfig] = None,
    now: Optional[datetime] = None,
) -> CatalogStats:
    """Compute aggregate counters for a catalog.

    Args:
        records: Catalog records (normally the deduplicated survivors)
        config: Analytics settings (defaults to AnalyticsConfig())
        now: Reference time for the trend and last_updated (defaults to utc_now())

    Returns:
        CatalogStats snapshot
    """
    config = config or AnalyticsConfig()
    now = ensure_utc(now or utc_now())
    records = list(records)

    by_platform: Counter = Counter()
    by_tech: Counter = Counter()
    by_contract: Counter = Counter()
    by_remote: Counter = Counter()
    buckets: Counter = Counter()

    for record in records:
        by_platform[record.platform] += 1
        by_tech.update(record.tech_stack)
        if record.contract_type:
            by_contract[record.contract_type] += 1
        if record.remote_type:
            by_remote[record.remote_type] += 1
        buckets[salary_bucket(yearly_salary(record, config.hours_per_year))] += 1

    return CatalogStats(
        total_jobs=len(records),
        by_platform=dict(by_platform),
        by_tech_stack=dict(by_tech),
        by_contract_type=dict(by_contract),
        by_remote_type=dict(by_remote),
        by_salary_range=SalaryRangeCounts.model_validate(dict(buckets)),
        jobs_last_n_days=jobs_per_day(records, config.trend_days, now),
        last_updated=now,
    )


def sort_catalog(records: Iterable[JobRecord]) -> List[JobRecord]:
    """Sort records by posted_at, newest first, records without a date last.

    The sort is stable: records with equal posted_at keep their relative order.
    """
    records = list(records)
    dated = [record for record in records if record.posted_at is not None]
    undated = [record for record in records if record.posted_at is None]
    return sorted(dated, key=lambda record: record.posted_at, reverse=True) + undated
