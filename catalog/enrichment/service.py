"""Record enrichment service.

This module implements the enrichment logic that:
1. Cleans display text (title, company, description, location)
2. Extracts salary, tech stack, experience level and contract type
3. Fills only the fields a source left empty
4. Isolates failures so one bad record never aborts a batch
"""

import logging
from typing import Any, Dict, Iterable, Optional

from catalog.config.models import EnrichmentConfig
from catalog.domain.models import JobRecord
from catalog.extraction.extractor import SignalExtractor
from catalog.extraction.salary import ExtractedSalary
from catalog.logging import get_logger, log_context
from catalog.normalization.text import (
    clean_company_name,
    clean_text,
    normalize_location,
    strip_html,
)

from .models import EnrichmentResult, EnrichmentSummary

logger = get_logger(__name__, component="enrichment")


class RecordEnricher:
    """Fills missing structured fields of JobRecords from their text.

    Responsibilities:
    - Clean title, company, description and location for display
    - Fill salary only when the source provided no salary bound at all
    - Merge detected tech tags with source-provided ones
    - Fill experience level and contract type when missing
    - Log and pass through records that fail to enrich

    Enrichment is idempotent: enriching an enriched record returns an equal
    record.
    """

    def __init__(
        self,
        extractor: Optional[SignalExtractor] = None,
        config: Optional[EnrichmentConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RecordEnricher.

        Args:
            extractor: SignalExtractor to use (defaults to built-in pattern tables)
            config: Enrichment settings (defaults to EnrichmentConfig())
            logger_instance: Logger instance (defaults to module logger)
        """
        self.extractor = extractor or SignalExtractor()
        self.config = config or EnrichmentConfig()
        self.logger = logger_instance or logger

    def enrich(self, record: JobRecord) -> JobRecord:
        """Enrich a single record.

        Args:
            record: Record as produced by a source fetcher

        Returns:
            New JobRecord with cleaned text and filled fields; ``id`` and
            ``raw`` are carried over untouched

        Raises:
            Any exception from cleaning or extraction is propagated; use
            enrich_batch for failure isolation
        """
        update: Dict[str, Any] = {}

        title = clean_text(record.title)
        description = strip_html(record.description) or None
        company = clean_company_name(record.company) or None

        update["title"] = title
        update["description"] = description
        update["company"] = company

        if self.config.normalize_locations:
            update["location"] = normalize_location(record.location)

        text = f"{title}\n{description or ''}"

        # Salary: only when the source gave no bound at all, and only if the
        # extracted currency and period agree with any the source did set
        if record.salary_min is None and record.salary_max is None:
            salary = self.extractor.extract_salary(text)
            if salary is not None and self._salary_agrees(record, salary):
                update["salary_min"] = salary.min
                update["salary_max"] = salary.max
                update["salary_currency"] = record.salary_currency or salary.currency
                update["salary_type"] = record.salary_type or salary.type

        detected = self.extractor.extract_tech_stack(text)
        update["tech_stack"] = record.tech_stack | detected

        if record.experience_level is None:
            update["experience_level"] = self.extractor.detect_experience_level(text)

        if record.contract_type is None:
            update["contract_type"] = self.extractor.detect_contract_type(text)

        return record.model_copy(update=update)

    @staticmethod
    def _salary_agrees(record: JobRecord, salary: ExtractedSalary) -> bool:
        """Check an extracted salary against the currency and period the source set."""
        currency = record.salary_currency
        if currency is not None and currency.strip().upper() != salary.currency:
            return False
        if record.salary_type is not None and record.salary_type != salary.type:
            return False
        return True

    def enrich_batch(self, records: Iterable[JobRecord]) -> EnrichmentResult:
        """Enrich a batch of records.

        Every input record produces exactly one output record, in input order.
        A record whose enrichment raises is logged and passed through with its
        original fields.

        Args:
            records: Records to enrich

        Returns:
            EnrichmentResult with enriched records and summary counters
        """
        summary = EnrichmentSummary()
        output = []

        for record in records:
            summary.total += 1
            with log_context(record_id=record.id):
                try:
                    enriched = self.enrich(record)
                    summary.enriched += 1
                except Exception as e:
                    self.logger.error(
                        f"Error enriching record {record.id}: {e}",
                        exc_info=True,
                        extra={"event": "enrichment.record.failed"},
                    )
                    summary.failed += 1
                    summary.failed_ids.append(record.id)
                    # Pass the record through with its pre-existing fields
                    enriched = record

            if enriched.has_salary:
                summary.with_salary += 1
            if enriched.tech_stack:
                summary.with_tech_stack += 1
            output.append(enriched)

        self.logger.info(
            f"Enriched {summary.enriched}/{summary.total} records",
            extra={
                "event": "enrichment.batch.completed",
                "total": summary.total,
                "enriched": summary.enriched,
                "failed": summary.failed,
                "with_salary": summary.with_salary,
                "with_tech_stack": summary.with_tech_stack,
            },
        )

        return EnrichmentResult(records=output, summary=summary)
