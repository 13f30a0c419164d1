"""Data models for the enrichment layer."""

from dataclasses import dataclass, field
from typing import List

from catalog.domain.models import JobRecord


@dataclass
class EnrichmentSummary:
    """Counters for one enrichment batch.

    Attributes:
        total: Records received
        enriched: Records enriched without error
        failed: Records passed through unchanged after an error
        with_salary: Output records carrying a salary bound
        with_tech_stack: Output records carrying at least one tech tag
        failed_ids: Ids of the failed records
    """

    total: int = 0
    enriched: int = 0
    failed: int = 0
    with_salary: int = 0
    with_tech_stack: int = 0
    failed_ids: List[str] = field(default_factory=list)


@dataclass
class EnrichmentResult:
    """Output of RecordEnricher.enrich_batch: records in input order plus counters."""

    records: List[JobRecord] = field(default_factory=list)
    summary: EnrichmentSummary = field(default_factory=EnrichmentSummary)
