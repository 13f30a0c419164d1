"""Unit tests for the pipeline runner.

Tests the CatalogPipeline orchestration including:
- Enrich -> dedup -> sort -> stats over the sample fixture
- Duplicate report and survivor selection
- Optional merging of duplicates into the survivor
- Error isolation (one failing record doesn't stop the batch)
- Run metadata (run_id, stage timings, log events)
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from catalog.config.models import CatalogConfig, DedupConfig
from catalog.dedup.engine import DedupEngine
from catalog.enrichment.service import RecordEnricher
from catalog.extraction.extractor import SignalExtractor
from catalog.pipeline import CatalogPipeline, PipelineRunResult
from tests.helpers import load_fixture_records, make_record

FIXTURES_DIR = Path(__file__).parent / "fixtures"
NOW = datetime(2025, 11, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_records():
    """Records from the sample fixture, in file order."""
    return load_fixture_records(FIXTURES_DIR / "sample_records.yaml")


@pytest.fixture
def pipeline():
    """Pipeline with default configuration."""
    return CatalogPipeline()


class TestCatalogPipelineRun:
    """Tests for a full pipeline run over the sample fixture."""

    def test_counts(self, pipeline, sample_records):
        """Test input/unique/duplicate counters."""
        result = pipeline.run(sample_records, now=NOW)

        assert isinstance(result, PipelineRunResult)
        assert result.total_input == 5
        assert result.total_unique == 4
        assert result.total_duplicates == 1
        assert result.enrichment_failures == 0
        assert not result.had_errors

    def test_duplicate_report(self, pipeline, sample_records):
        """Test that the higher-priority source survives the cross-post."""
        result = pipeline.run(sample_records, now=NOW)

        assert len(result.duplicates) == 1
        group = result.duplicates[0]
        assert group.kept.id == "hn:1001"
        assert group.removed_ids == ["wwr:wwr-77"]

    def test_catalog_sorted_newest_first(self, pipeline, sample_records):
        """Test catalog order with the undated record last."""
        result = pipeline.run(sample_records, now=NOW)

        assert [record.id for record in result.catalog] == [
            "hn:1001",
            "hn:1002",
            "jobicy:555",
            "wwr:wwr-78",
        ]

    def test_catalog_records_are_enriched(self, pipeline, sample_records):
        """Test that extracted signals reach the catalog."""
        result = pipeline.run(sample_records, now=NOW)
        by_id = {record.id: record for record in result.catalog}

        backend = by_id["hn:1001"]
        assert "<" not in backend.description
        assert "Python & PostgreSQL" in backend.description
        assert (backend.salary_min, backend.salary_max) == (150000, 180000)
        assert backend.salary_currency == "USD"
        assert {"python", "postgresql", "kubernetes", "aws"} <= backend.tech_stack
        assert backend.experience_level == "senior"
        assert backend.contract_type == "full-time"

        frontend = by_id["hn:1002"]
        assert (frontend.salary_min, frontend.salary_max) == (60000, 80000)
        assert frontend.salary_currency == "EUR"
        assert frontend.contract_type == "contract"
        assert frontend.location == "Berlin, Germany"

        analyst = by_id["wwr:wwr-78"]
        assert analyst.salary_type == "hourly"
        assert analyst.salary_min == 25
        assert analyst.experience_level == "junior"
        assert analyst.contract_type == "part-time"

        ml = by_id["jobicy:555"]
        assert ml.salary_min == 200000
        assert ml.salary_max is None
        assert ml.experience_level == "lead"
        assert ml.location == "San Francisco, CA"
        assert ml.tags == frozenset({"visa-sponsorship"})

    def test_raw_payload_untouched(self, pipeline, sample_records):
        """Test that enrichment never rewrites the source payload."""
        result = pipeline.run(sample_records, now=NOW)
        backend = next(record for record in result.catalog if record.id == "hn:1001")

        assert backend.raw["description"].startswith("<p>We are hiring")

    def test_stats(self, pipeline, sample_records):
        """Test aggregate counters over the catalog."""
        result = pipeline.run(sample_records, now=NOW)
        stats = result.stats

        assert stats.total_jobs == 4
        assert stats.by_platform == {"hn": 2, "wwr": 1, "jobicy": 1}
        assert stats.by_remote_type == {"remote": 1, "hybrid": 1}
        assert stats.jobs_last_n_days == [0, 0, 1, 1, 1, 0, 0]
        assert stats.last_updated == NOW

        buckets = stats.by_salary_range
        assert buckets.k150_200k == 1
        assert buckets.k50_100k == 2
        assert buckets.over_200k == 1
        assert buckets.unknown == 0

    def test_run_metadata(self, pipeline, sample_records):
        """Test run_id, stage timings and durations."""
        result = pipeline.run(sample_records, now=NOW)

        assert len(result.run_id) == 32
        assert [t.stage for t in result.stage_timings] == ["enrich", "dedup", "sort", "stats"]
        assert all(t.duration_seconds >= 0 for t in result.stage_timings)
        assert result.run_finished_at >= result.run_started_at
        assert result.total_duration_seconds >= 0

    def test_each_run_gets_new_run_id(self, pipeline, sample_records):
        """Test that run ids are unique per run."""
        first = pipeline.run(sample_records, now=NOW)
        second = pipeline.run(sample_records, now=NOW)

        assert first.run_id != second.run_id

    def test_empty_batch(self, pipeline):
        """Test that an empty batch yields an empty catalog."""
        result = pipeline.run([], now=NOW)

        assert result.catalog == []
        assert result.duplicates == []
        assert result.stats.total_jobs == 0
        assert result.stats.jobs_last_n_days == [0] * 7

    def test_accepts_iterator(self, pipeline, sample_records):
        """Test that a one-shot iterator is consumed only once."""
        result = pipeline.run(iter(sample_records), now=NOW)

        assert result.total_input == 5
        assert result.total_unique == 4

    def test_log_events(self, pipeline, sample_records, caplog):
        """Test that start, merge and completion events are logged."""
        with caplog.at_level(logging.INFO, logger="catalog"):
            pipeline.run(sample_records, now=NOW)

        events = {getattr(r, "event", None): r for r in caplog.records}
        assert events["pipeline.run.started"].record_count == 5
        assert events["pipeline.run.completed"].total_unique == 4
        assert events["pipeline.run.completed"].component == "pipeline"
        assert events["dedup.cluster.merged"].kept_id == "hn:1001"
        assert events["dedup.cluster.merged"].removed_ids == ["wwr:wwr-77"]


class TestCatalogPipelineConfiguration:
    """Tests for configuration-driven behavior."""

    def test_merge_duplicates(self):
        """Test that merging folds the removed record's fields into the survivor."""
        config = CatalogConfig(dedup=DedupConfig(merge_duplicates=True))
        records = [
            make_record(platform="hn", external_id="1", description="Go role."),
            make_record(
                platform="wwr",
                external_id="2",
                description="Go role, fully remote. Visa sponsorship available.",
                tags=["visa-sponsorship"],
            ),
        ]

        result = CatalogPipeline(config=config).run(records, now=NOW)

        assert result.total_unique == 1
        survivor = result.catalog[0]
        assert survivor.id == "hn:1"
        assert survivor.tags == frozenset({"visa-sponsorship"})
        assert survivor.description.startswith("Go role, fully remote")
        assert result.duplicates[0].kept is survivor

    def test_without_merge_survivor_is_unchanged(self):
        """Test that by default the survivor keeps only its own fields."""
        records = [
            make_record(platform="hn", external_id="1", description="Go role."),
            make_record(platform="wwr", external_id="2", tags=["visa-sponsorship"]),
        ]

        result = CatalogPipeline().run(records, now=NOW)

        assert result.catalog[0].id == "hn:1"
        assert result.catalog[0].tags == frozenset()

    def test_source_priority_decides_survivor(self, sample_records):
        """Test that reordering source_priority changes the survivor."""
        config = CatalogConfig(dedup=DedupConfig(source_priority={"wwr": 10, "hn": 1}))

        result = CatalogPipeline(config=config).run(sample_records, now=NOW)

        assert result.duplicates[0].kept.id == "wwr:wwr-77"
        assert result.duplicates[0].removed_ids == ["hn:1001"]
        # The surviving record was posted on 11-04
        assert result.stats.jobs_last_n_days == [0, 0, 1, 1, 0, 1, 0]

    def test_injected_components_are_used(self, sample_records):
        """Test that explicitly passed components replace the defaults."""
        enricher = RecordEnricher()
        engine = DedupEngine(config=DedupConfig(company_threshold=1.0, title_threshold=1.0))

        pipeline = CatalogPipeline(enricher=enricher, dedup_engine=engine)

        assert pipeline.enricher is enricher
        assert pipeline.dedup_engine is engine
        # "acme" == "acme" and titles are identical, so the cross-post still matches
        assert pipeline.run(sample_records, now=NOW).total_duplicates == 1


class TestCatalogPipelineErrorIsolation:
    """Tests that per-record failures don't abort the run."""

    def test_enrichment_failure_passes_record_through(self, pipeline, sample_records):
        """Test that a record failing enrichment still reaches the catalog."""
        original = SignalExtractor.extract_salary

        def flaky_extract_salary(self, text):
            if "Frontend" in text:
                raise RuntimeError("extractor crashed")
            return original(self, text)

        with patch.object(SignalExtractor, "extract_salary", flaky_extract_salary):
            result = pipeline.run(sample_records, now=NOW)

        assert result.enrichment_failures == 1
        assert result.had_errors
        assert result.total_unique == 4

        frontend = next(record for record in result.catalog if record.id == "hn:1002")
        assert frontend.salary_min is None
        assert frontend.tech_stack == frozenset()
        assert frontend.location == "Berlin,   Germany"

        backend = next(record for record in result.catalog if record.id == "hn:1001")
        assert backend.salary_min == 150000

    def test_failure_is_logged(self, sample_records, caplog):
        """Test that every failed record is reported by id."""
        extractor = Mock(spec=SignalExtractor)
        extractor.extract_salary.side_effect = RuntimeError("extractor crashed")
        pipeline = CatalogPipeline(enricher=RecordEnricher(extractor=extractor))

        with caplog.at_level(logging.ERROR, logger="catalog"):
            result = pipeline.run(sample_records, now=NOW)

        assert result.enrichment_failures == 5
        failed = [r for r in caplog.records if getattr(r, "event", None) == "enrichment.record.failed"]
        assert len(failed) == 5
        for record in sample_records:
            assert any(record.id in r.getMessage() for r in failed)
