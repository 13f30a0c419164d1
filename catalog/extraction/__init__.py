"""Signal extraction from unstructured job text.

This module provides:
- SignalExtractor: Tech stack, experience level, contract type and salary detection
- PatternTables / DEFAULT_PATTERN_TABLES: Immutable, injectable pattern tables
- ExtractedSalary / SalaryPattern: Salary extraction result and pattern entries
"""

from .extractor import SignalExtractor
from .patterns import (
    CONTRACT_PATTERNS,
    DEFAULT_PATTERN_TABLES,
    EXPERIENCE_PATTERNS,
    TECH_PATTERNS,
    PatternTables,
    compile_table,
)
from .salary import (
    DEFAULT_SALARY_PATTERNS,
    ExtractedSalary,
    SalaryPattern,
    parse_amount,
    parse_european_amount,
)

__all__ = [
    "SignalExtractor",
    "PatternTables",
    "DEFAULT_PATTERN_TABLES",
    "TECH_PATTERNS",
    "EXPERIENCE_PATTERNS",
    "CONTRACT_PATTERNS",
    "compile_table",
    "ExtractedSalary",
    "SalaryPattern",
    "DEFAULT_SALARY_PATTERNS",
    "parse_amount",
    "parse_european_amount",
]
