"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from catalog.analytics.stats import CatalogStats
from catalog.dedup.models import DuplicateGroup
from catalog.domain.models import JobRecord


@dataclass
class StageTiming:
    """
    Wall-clock duration of one pipeline stage.

    Attributes:
        stage: Stage name (enrich, dedup, sort, stats)
        duration_seconds: Time spent in the stage
    """

    stage: str
    duration_seconds: float = 0.0


@dataclass
class PipelineRunResult:
    """
    Output of one catalog build.

    Attributes:
        run_id: Identifier bound to every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        catalog: Enriched, deduplicated records sorted newest first
        duplicates: Duplicate report (kept + removed per cluster)
        stats: Aggregate counters over the catalog
        total_input: Records received
        total_unique: Records in the catalog
        total_duplicates: Records removed as duplicates
        enrichment_failures: Records passed through after an enrichment error
        with_salary: Enriched records carrying a salary bound
        with_tech_stack: Enriched records carrying at least one tech tag
        stage_timings: Per-stage durations, in execution order
        total_duration_seconds: Time for the entire run
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    catalog: List[JobRecord] = field(default_factory=list)
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    stats: Optional[CatalogStats] = None
    total_input: int = 0
    total_unique: int = 0
    total_duplicates: int = 0
    enrichment_failures: int = 0
    with_salary: int = 0
    with_tech_stack: int = 0
    stage_timings: List[StageTiming] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    def __post_init__(self):
        """Compute duration if not set."""
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def had_errors(self) -> bool:
        return self.enrichment_failures > 0
