"""Signal extraction service.

SignalExtractor evaluates the injected PatternTables against free text and
returns structured signals: tech tags, experience level, contract type and
salary. "No match" is always a normal outcome (empty set or None).
"""

import logging
from typing import FrozenSet, Optional, Tuple

from catalog.logging import get_logger

from .patterns import DEFAULT_PATTERN_TABLES, LabeledPattern, PatternTables
from .salary import ExtractedSalary

logger = get_logger(__name__, component="extraction")

# Handler failures that mean "this pattern does not apply", not a bug in the batch
HANDLER_ERRORS = (ValueError, ArithmeticError, IndexError)


class SignalExtractor:
    """Extracts structured signals from job posting text.

    The extractor holds no mutable state; one instance can be shared across a
    whole batch.
    """

    def __init__(
        self,
        tables: PatternTables = DEFAULT_PATTERN_TABLES,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SignalExtractor.

        Args:
            tables: Pattern tables to evaluate (defaults to the built-in tables)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.tables = tables
        self.logger = logger_instance or logger

    def extract_tech_stack(self, text: Optional[str]) -> FrozenSet[str]:
        """Return every tech tag whose pattern matches the text.

        Example:
            >>> SignalExtractor().extract_tech_stack("Python and JavaScript")
            frozenset({'python', 'javascript'})
        """
        if not text:
            return frozenset()

        return frozenset(tag for tag, pattern in self.tables.tech if pattern.search(text))

    def detect_experience_level(self, text: Optional[str]) -> Optional[str]:
        """Return the most senior experience level mentioned, or None.

        Precedence is lead > senior > mid > junior.
        """
        return self._first_match(self.tables.experience, text)

    def detect_contract_type(self, text: Optional[str]) -> Optional[str]:
        """Return the contract type mentioned, or None.

        Precedence is freelance > contract > part-time > full-time.
        """
        return self._first_match(self.tables.contract, text)

    def extract_salary(self, text: Optional[str]) -> Optional[ExtractedSalary]:
        """Extract a salary from free text.

        Patterns are tried in order. For each pattern only the first match is
        considered. A pattern is skipped when its handler fails on the matched
        text or when the result falls outside the plausible range; the next
        pattern is then tried.

        Args:
            text: Title and/or description text

        Returns:
            ExtractedSalary with min <= max, or None if no pattern produced
            a plausible salary

        Example:
            >>> SignalExtractor().extract_salary("$100k - $150k per year")
            ExtractedSalary(min=100000.0, max=150000.0, currency='USD', type='yearly')
        """
        if not text:
            return None

        for salary_pattern in self.tables.salary:
            match = salary_pattern.pattern.search(text)
            if match is None:
                continue

            try:
                salary = salary_pattern.handler(match)
            except HANDLER_ERRORS as e:
                self.logger.debug(
                    f"Salary pattern {salary_pattern.name} failed on {match.group(0)!r}: {e}",
                    extra={
                        "event": "extraction.salary.pattern_failed",
                        "pattern": salary_pattern.name,
                    },
                )
                continue

            if not salary.is_plausible():
                self.logger.debug(
                    f"Salary pattern {salary_pattern.name} produced implausible values",
                    extra={
                        "event": "extraction.salary.implausible",
                        "pattern": salary_pattern.name,
                        "salary_min": salary.min,
                        "salary_max": salary.max,
                    },
                )
                continue

            return salary.ordered()

        return None

    @staticmethod
    def _first_match(table: Tuple[LabeledPattern, ...], text: Optional[str]) -> Optional[str]:
        if not text:
            return None

        for label, pattern in table:
            if pattern.search(text):
                return label
        return None
