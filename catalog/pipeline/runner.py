"""Pipeline orchestration for building the job catalog."""

import time
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import uuid4

from catalog.analytics.stats import compute_stats, sort_catalog
from catalog.config.models import CatalogConfig
from catalog.dedup.engine import DedupEngine
from catalog.domain.models import JobRecord
from catalog.enrichment.service import RecordEnricher
from catalog.extraction.extractor import SignalExtractor
from catalog.logging import get_logger
from catalog.logging.context import log_context
from catalog.utils.timestamps import ensure_utc, utc_now

from .models import PipelineRunResult, StageTiming

logger = get_logger(__name__, component="pipeline")


class CatalogPipeline:
    """
    Turns a batch of per-source records into one canonical catalog.

    Stages run synchronously in order: enrich -> dedup (optionally merging
    duplicates into their survivor) -> sort -> stats. The pipeline performs
    no I/O; callers supply the records and consume the result.
    """

    def __init__(
        self,
        config: Optional[CatalogConfig] = None,
        enricher: Optional[RecordEnricher] = None,
        dedup_engine: Optional[DedupEngine] = None,
    ):
        """
        Initialize the catalog pipeline.

        Args:
            config: Catalog configuration (defaults to CatalogConfig())
            enricher: Record enricher (defaults to one built from config)
            dedup_engine: Dedup engine (defaults to one built from config)
        """
        self.config = config or CatalogConfig()
        self.enricher = enricher or RecordEnricher(
            extractor=SignalExtractor(), config=self.config.enrichment
        )
        self.dedup_engine = dedup_engine or DedupEngine(config=self.config.dedup)

    def run(
        self, records: Iterable[JobRecord], now: Optional[datetime] = None
    ) -> PipelineRunResult:
        """
        Build the catalog from one batch of records.

        Args:
            records: Records from all sources, in fetch order
            now: Reference time for statistics (defaults to utc_now())

        Returns:
            PipelineRunResult with the catalog, duplicate report and stats
        """
        run_started_at = utc_now()
        run_id = uuid4().hex
        now = ensure_utc(now) if now else run_started_at
        records = list(records)
        timings: List[StageTiming] = []

        with log_context(run_id=run_id):
            logger.info(
                "Pipeline run started",
                extra={
                    "event": "pipeline.run.started",
                    "record_count": len(records),
                    "merge_duplicates": self.config.dedup.merge_duplicates,
                },
            )

            with self._timed("enrich", timings):
                enrichment = self.enricher.enrich_batch(records)

            with self._timed("dedup", timings):
                dedup = self.dedup_engine.deduplicate(enrichment.records)

            with self._timed("sort", timings):
                catalog = sort_catalog(dedup.unique)

            with self._timed("stats", timings):
                stats = compute_stats(catalog, self.config.analytics, now=now)

            result = PipelineRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                catalog=catalog,
                duplicates=dedup.duplicates,
                stats=stats,
                total_input=dedup.stats.total_input,
                total_unique=dedup.stats.total_unique,
                total_duplicates=dedup.stats.total_duplicates,
                enrichment_failures=enrichment.summary.failed,
                with_salary=enrichment.summary.with_salary,
                with_tech_stack=enrichment.summary.with_tech_stack,
                stage_timings=timings,
            )

            logger.info(
                "Pipeline run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "total_input": result.total_input,
                    "total_unique": result.total_unique,
                    "total_duplicates": result.total_duplicates,
                    "enrichment_failures": result.enrichment_failures,
                    "with_salary": result.with_salary,
                    "with_tech_stack": result.with_tech_stack,
                    "duration_seconds": round(result.total_duration_seconds, 3),
                },
            )

        return result

    @staticmethod
    @contextmanager
    def _timed(stage: str, timings: List[StageTiming]):
        started = time.perf_counter()
        try:
            yield
        finally:
            timings.append(StageTiming(stage=stage, duration_seconds=time.perf_counter() - started))
