"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_SOURCE_PRIORITY = {"hn": 4, "wwr": 3, "jobicy": 2, "himalayas": 1}


class DedupConfig(BaseModel):
    """Duplicate detection and survivor selection settings."""

    company_threshold: float = Field(
        0.85, ge=0.0, le=1.0, description="Minimum company similarity for a duplicate"
    )
    title_threshold: float = Field(
        0.85, ge=0.0, le=1.0, description="Minimum title similarity for a duplicate"
    )
    source_priority: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_SOURCE_PRIORITY),
        description="Platform -> priority (higher wins); unknown platforms rank 0",
    )
    long_description_chars: int = Field(
        200, ge=0, description="Descriptions longer than this earn a completeness point"
    )
    rich_tech_stack_size: int = Field(
        2, ge=0, description="Tech stacks larger than this earn a completeness point"
    )
    merge_duplicates: bool = Field(
        False, description="Fold removed duplicates into their survivor with merge_records"
    )

    @field_validator("source_priority")
    @classmethod
    def normalize_platforms(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Lowercase and strip platform names so lookups match JobRecord.platform."""
        normalized = {}
        for platform, priority in v.items():
            key = platform.strip().lower()
            if not key:
                raise ValueError("source_priority keys cannot be empty")
            normalized[key] = priority
        return normalized

    def priority_for(self, platform: Optional[str]) -> int:
        """Get the priority of a platform, case-insensitively (0 when not listed)."""
        if not platform:
            return 0
        return self.source_priority.get(platform.strip().lower(), 0)

    model_config = {"extra": "forbid"}


class EnrichmentConfig(BaseModel):
    """Record enrichment settings."""

    normalize_locations: bool = Field(
        True, description="Normalize location strings (entities, whitespace, US states)"
    )

    model_config = {"extra": "forbid"}


class AnalyticsConfig(BaseModel):
    """Catalog statistics settings."""

    hours_per_year: int = Field(
        2080, ge=1, description="Hours used to convert hourly salaries to yearly"
    )
    trend_days: int = Field(
        7, ge=1, le=365, description="Number of days covered by the posting trend"
    )

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True, "extra": "forbid"}


class CatalogConfig(BaseModel):
    """Root configuration object for the job catalog."""

    dedup: DedupConfig = Field(default_factory=DedupConfig, description="Dedup settings")
    enrichment: EnrichmentConfig = Field(
        default_factory=EnrichmentConfig, description="Enrichment settings"
    )
    analytics: AnalyticsConfig = Field(
        default_factory=AnalyticsConfig, description="Statistics settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = {"extra": "forbid"}
