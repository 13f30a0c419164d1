"""Tests for salary extraction."""

import logging
import re

import pytest

from catalog.extraction import (
    DEFAULT_SALARY_PATTERNS,
    ExtractedSalary,
    PatternTables,
    SalaryPattern,
    SignalExtractor,
    parse_amount,
    parse_european_amount,
)
from catalog.extraction.salary import expand_thousands


@pytest.fixture
def extractor():
    """Extractor with the built-in pattern tables."""
    return SignalExtractor()


class TestExtractSalary:
    """Tests for SignalExtractor.extract_salary with the default patterns."""

    def test_usd_k_range(self, extractor):
        """Test a USD range written with k suffixes."""
        assert extractor.extract_salary("$100k - $150k per year") == ExtractedSalary(
            100000, 150000, "USD", "yearly"
        )

    def test_eur_range_with_dot_thousands(self, extractor):
        """Test a EUR range written with European separators."""
        assert extractor.extract_salary("EUR 80.000 - 120.000") == ExtractedSalary(
            80000, 120000, "EUR", "yearly"
        )

    def test_usd_hourly(self, extractor):
        """Test a single hourly rate."""
        assert extractor.extract_salary("$50/hr") == ExtractedSalary(50, None, "USD", "hourly")

    def test_usd_full_figures_with_to(self, extractor):
        """Test comma thousands and 'to' as the range separator."""
        salary = extractor.extract_salary("Pays $100,000 to $150,000 per year")

        assert (salary.min, salary.max) == (100000, 150000)
        assert salary.type == "yearly"

    def test_k_applies_to_both_bounds(self, extractor):
        """Test that a single k expands both small figures."""
        salary = extractor.extract_salary("$120K-150K base")

        assert (salary.min, salary.max) == (120000, 150000)

    def test_k_leaves_full_figures_alone(self, extractor):
        """Test that figures already >= 1000 are not multiplied."""
        salary = extractor.extract_salary("$90k - $120,000")

        assert (salary.min, salary.max) == (90000, 120000)

    def test_usd_range_per_hour(self, extractor):
        """Test that a range with an hourly suffix is typed hourly."""
        salary = extractor.extract_salary("$50-75/hour DOE")

        assert (salary.min, salary.max) == (50, 75)
        assert salary.type == "hourly"

    def test_usd_floor(self, extractor):
        """Test an open-ended '$X+' salary."""
        assert extractor.extract_salary("Pay: $200k+ per year.") == ExtractedSalary(
            200000, None, "USD", "yearly"
        )

    def test_euro_symbol_range(self, extractor):
        """Test a EUR range using the euro sign."""
        salary = extractor.extract_salary("€60k - €80k")

        assert (salary.min, salary.max, salary.currency) == (60000, 80000, "EUR")

    @pytest.mark.parametrize("text", ["£50k-£70k", "GBP 50,000 - 70,000"])
    def test_gbp_range(self, extractor, text):
        """Test GBP ranges in symbol and code form."""
        salary = extractor.extract_salary(text)

        assert (salary.min, salary.max, salary.currency) == (50000, 70000, "GBP")

    def test_inverted_bounds_are_swapped(self, extractor):
        """Test that min <= max always holds."""
        salary = extractor.extract_salary("$150k - $100k")

        assert (salary.min, salary.max) == (100000, 150000)

    def test_implausible_match_falls_through(self, extractor):
        """Test that an implausible result moves on to the next pattern."""
        text = "Series B, raised $20,000,000 - $30,000,000. Salary €60k - €80k."

        salary = extractor.extract_salary(text)

        assert salary.currency == "EUR"
        assert (salary.min, salary.max) == (60000, 80000)

    def test_implausible_only_match(self, extractor, caplog):
        """Test that an implausible figure alone yields None."""
        with caplog.at_level(logging.DEBUG, logger="catalog"):
            assert extractor.extract_salary("$20,000,000 - $30,000,000") is None

        assert any(
            getattr(r, "event", None) == "extraction.salary.implausible" for r in caplog.records
        )

    @pytest.mark.parametrize("text", [None, "", "Competitive salary", "Equity 0.5% - 1%"])
    def test_no_salary(self, extractor, text):
        """Test that text without a salary yields None."""
        assert extractor.extract_salary(text) is None

    def test_first_match_per_pattern(self, extractor):
        """Test that the first range in the text is the one reported."""
        salary = extractor.extract_salary("$100k - $120k, or $130k - $150k for seniors")

        assert (salary.min, salary.max) == (100000, 120000)


class TestCustomSalaryPatterns:
    """Tests for salary pattern failure handling."""

    @staticmethod
    def _raising(error):
        def handler(match):
            raise error

        return handler

    def test_failing_handler_is_skipped(self, caplog):
        """Test that a handler error moves on to the next pattern."""
        broken = SalaryPattern(
            "broken", re.compile(r"salary", re.IGNORECASE), self._raising(ValueError("bad"))
        )
        extractor = SignalExtractor(
            tables=PatternTables(salary=(broken,) + DEFAULT_SALARY_PATTERNS)
        )

        with caplog.at_level(logging.DEBUG, logger="catalog"):
            salary = extractor.extract_salary("Salary: $100k - $120k")

        assert (salary.min, salary.max) == (100000, 120000)
        failed = [
            r for r in caplog.records if getattr(r, "event", None) == "extraction.salary.pattern_failed"
        ]
        assert len(failed) == 1
        assert failed[0].pattern == "broken"

    def test_unexpected_handler_error_propagates(self):
        """Test that errors outside the handled set are not swallowed."""
        broken = SalaryPattern("broken", re.compile(r"salary"), self._raising(KeyError("min")))
        extractor = SignalExtractor(tables=PatternTables(salary=(broken,)))

        with pytest.raises(KeyError):
            extractor.extract_salary("salary")

    def test_custom_pattern(self):
        """Test a pattern supplied by the caller."""
        daily = SalaryPattern(
            "usd_daily",
            re.compile(r"\$(?P<rate>\d+)\s*/\s*day", re.IGNORECASE),
            lambda m: ExtractedSalary(float(m.group("rate")), None, "USD", "fixed"),
        )
        extractor = SignalExtractor(tables=PatternTables(salary=(daily,)))

        assert extractor.extract_salary("$600/day") == ExtractedSalary(600, None, "USD", "fixed")


class TestAmountParsing:
    """Tests for number parsing helpers."""

    def test_parse_amount(self):
        """Test US-style numbers."""
        assert parse_amount("150,000") == 150000
        assert parse_amount("85.5") == 85.5

    def test_parse_amount_rejects_separators_only(self):
        """Test that a bare separator is not a number."""
        with pytest.raises(ValueError):
            parse_amount(",")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("80.000", 80000),
            ("120.000.", 120000),
            ("80.000,50", 80000.5),
            ("80,000", 80000),
            ("80,5", 80.5),
            ("1.5", 1.5),
            ("1,200.50", 1200.5),
        ],
    )
    def test_parse_european_amount(self, raw, expected):
        """Test European and mixed separators."""
        assert parse_european_amount(raw) == expected

    def test_expand_thousands(self):
        """Test the k rule."""
        assert expand_thousands(120, True) == 120000
        assert expand_thousands(120000, True) == 120000
        assert expand_thousands(120, False) == 120


class TestExtractedSalary:
    """Tests for the ExtractedSalary value object."""

    def test_plausibility_bounds(self):
        """Test the accepted range."""
        assert ExtractedSalary(0, 10_000_000, "USD", "yearly").is_plausible()
        assert not ExtractedSalary(-1, None, "USD", "yearly").is_plausible()
        assert not ExtractedSalary(50000, 10_000_001, "USD", "yearly").is_plausible()

    def test_ordered(self):
        """Test swapping of inverted bounds."""
        assert ExtractedSalary(9, 3, "USD", "hourly").ordered() == ExtractedSalary(3, 9, "USD", "hourly")
        salary = ExtractedSalary(3, None, "USD", "hourly")
        assert salary.ordered() is salary
