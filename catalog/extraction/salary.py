"""Salary extraction from free text.

Salary phrasings are matched by an ordered list of SalaryPattern entries.
Each entry pairs a compiled regular expression with a handler that turns the
first match into an ExtractedSalary. The first pattern that matches and
yields a plausible result wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

MIN_PLAUSIBLE_SALARY = 0
MAX_PLAUSIBLE_SALARY = 10_000_000

_SEPARATOR = r"\s*(?:[-–—]|to)\s*"
_HOURLY_HINTS = ("hour", "hr")


@dataclass(frozen=True)
class ExtractedSalary:
    """Salary figures recovered from text.

    Attributes:
        min: Lower bound (or the single figure for "X+" phrasings)
        max: Upper bound, None when only one figure was stated
        currency: ISO currency code
        type: Salary period (hourly, yearly, fixed)
    """

    min: Optional[float]
    max: Optional[float]
    currency: str
    type: str

    def is_plausible(self) -> bool:
        """Whether every known bound lies within the accepted range."""
        for value in (self.min, self.max):
            if value is not None and not MIN_PLAUSIBLE_SALARY <= value <= MAX_PLAUSIBLE_SALARY:
                return False
        return True

    def ordered(self) -> "ExtractedSalary":
        """Return a copy with min/max swapped if they are inverted."""
        if self.min is not None and self.max is not None and self.min > self.max:
            return ExtractedSalary(self.max, self.min, self.currency, self.type)
        return self


SalaryHandler = Callable[["re.Match[str]"], ExtractedSalary]


@dataclass(frozen=True)
class SalaryPattern:
    """One salary phrasing: a name for logs, a regex, and its handler."""

    name: str
    pattern: "re.Pattern[str]"
    handler: SalaryHandler


def parse_amount(raw: str) -> float:
    """Parse a US-style number with comma thousands separators.

    Raises:
        ValueError: If no digits remain after removing separators
    """
    return float(raw.replace(",", "").strip("."))


def parse_european_amount(raw: str) -> float:
    """Parse a number written with European separators.

    "80.000" and "80.000,50" use dots for thousands and a comma for decimals.
    "80,000" (comma thousands) is also accepted so US-formatted figures quoted
    in EUR are not read as 80.0.

    Raises:
        ValueError: If the text is not a number
    """
    value = raw.strip(".,")
    if "," in value and "." in value:
        if value.rfind(",") > value.rfind("."):
            value = value.replace(".", "").replace(",", ".")
        else:
            value = value.replace(",", "")
    elif "," in value:
        if re.fullmatch(r"\d{1,3}(?:,\d{3})+", value):
            value = value.replace(",", "")
        else:
            value = value.replace(",", ".")
    elif "." in value and re.fullmatch(r"\d{1,3}(?:\.\d{3})+", value):
        value = value.replace(".", "")
    return float(value)


def expand_thousands(value: float, has_k: bool) -> float:
    """Apply a "k" suffix, unless the figure is already written out in full."""
    if has_k and value < 1000:
        return value * 1000
    return value


def _period(hint: Optional[str]) -> str:
    hint = (hint or "").lower()
    return "hourly" if any(h in hint for h in _HOURLY_HINTS) else "yearly"


def _usd_range(match: "re.Match[str]") -> ExtractedSalary:
    has_k = bool(match.group("k1") or match.group("k2"))
    return ExtractedSalary(
        min=expand_thousands(parse_amount(match.group("min")), has_k),
        max=expand_thousands(parse_amount(match.group("max")), has_k),
        currency="USD",
        type=_period(match.group("period")),
    )


def _usd_floor(match: "re.Match[str]") -> ExtractedSalary:
    return ExtractedSalary(
        min=expand_thousands(parse_amount(match.group("min")), bool(match.group("k1"))),
        max=None,
        currency="USD",
        type=_period(match.group("period")),
    )


def _eur_range(match: "re.Match[str]") -> ExtractedSalary:
    has_k = bool(match.group("k1") or match.group("k2"))
    return ExtractedSalary(
        min=expand_thousands(parse_european_amount(match.group("min")), has_k),
        max=expand_thousands(parse_european_amount(match.group("max")), has_k),
        currency="EUR",
        type="yearly",
    )


def _gbp_range(match: "re.Match[str]") -> ExtractedSalary:
    has_k = bool(match.group("k1") or match.group("k2"))
    return ExtractedSalary(
        min=expand_thousands(parse_amount(match.group("min")), has_k),
        max=expand_thousands(parse_amount(match.group("max")), has_k),
        currency="GBP",
        type="yearly",
    )


def _hourly_rate(match: "re.Match[str]") -> ExtractedSalary:
    upper = match.group("max")
    return ExtractedSalary(
        min=parse_amount(match.group("min")),
        max=parse_amount(upper) if upper else None,
        currency="USD",
        type="hourly",
    )


def _compile(regex: str) -> "re.Pattern[str]":
    return re.compile(regex, re.IGNORECASE)


DEFAULT_SALARY_PATTERNS: Tuple[SalaryPattern, ...] = (
    # $100k - $150k, $100K-150K, $100,000 to $150,000 per year
    SalaryPattern(
        "usd_range",
        _compile(
            r"\$\s*(?P<min>\d[\d,]*(?:\.\d+)?)\s*(?P<k1>k)?"
            + _SEPARATOR
            + r"\$?\s*(?P<max>\d[\d,]*(?:\.\d+)?)\s*(?P<k2>k)?\b"
            r"(?:\s*(?:per|an?|/)?\s*(?P<period>year|yr|annual(?:ly)?|hourly|hour|hr)\b)?"
        ),
        _usd_range,
    ),
    # $100k+, $150K+ per year
    SalaryPattern(
        "usd_floor",
        _compile(
            r"\$\s*(?P<min>\d[\d,]*(?:\.\d+)?)\s*(?P<k1>k)?\s*\+"
            r"(?:\s*(?:per|an?|/)?\s*(?P<period>year|yr|annual(?:ly)?|hourly|hour|hr)\b)?"
        ),
        _usd_floor,
    ),
    # EUR 80.000 - 120.000, €60k - €80k
    SalaryPattern(
        "eur_range",
        _compile(
            r"(?:\bEUR|€)\s*(?P<min>\d[\d.,]*)\s*(?P<k1>k)?"
            + _SEPARATOR
            + r"(?:EUR|€)?\s*(?P<max>\d[\d.,]*)\s*(?P<k2>k)?"
        ),
        _eur_range,
    ),
    # GBP 50,000 - 70,000, £50k-£70k
    SalaryPattern(
        "gbp_range",
        _compile(
            r"(?:\bGBP|£)\s*(?P<min>\d[\d,]*)\s*(?P<k1>k)?"
            + _SEPARATOR
            + r"(?:GBP|£)?\s*(?P<max>\d[\d,]*)\s*(?P<k2>k)?"
        ),
        _gbp_range,
    ),
    # $50/hr, $75 per hour, $50-75/hour
    SalaryPattern(
        "usd_hourly",
        _compile(
            r"\$\s*(?P<min>\d[\d,]*(?:\.\d+)?)"
            r"(?:" + _SEPARATOR + r"\$?\s*(?P<max>\d[\d,]*(?:\.\d+)?))?"
            r"\s*(?:/|\bper\s+|an\s+|a\s+)\s*(?:hr|hour)\b"
        ),
        _hourly_rate,
    ),
)
