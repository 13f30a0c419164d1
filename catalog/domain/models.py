"""Core domain model for the job catalog.

This module defines the data structures used throughout the application:
- JobRecord: canonical, immutable representation of one job posting
- The closed vocabularies used by its classification fields

A JobRecord is created once per (platform, external_id) at ingestion. It is
never mutated afterwards: enrichment and merging build new records with
``model_copy(update=...)``. The ``raw`` source payload is copied at creation
and exposed read-only so no downstream stage can alter it.
"""

import copy
from datetime import datetime
from types import MappingProxyType
from typing import Any, FrozenSet, Literal, Mapping, Optional

from pydantic import BaseModel, Field, computed_field, field_serializer, field_validator

from catalog.utils.timestamps import coerce_datetime, utc_now

SalaryType = Literal["hourly", "yearly", "fixed"]
ContractType = Literal["full-time", "part-time", "contract", "freelance"]
ExperienceLevel = Literal["junior", "mid", "senior", "lead"]
RemoteType = Literal["remote", "hybrid", "onsite"]


class JobRecord(BaseModel):
    """Normalized job posting.

    Identity is derived: ``id`` is always ``platform:external_id``. The id is
    unique within a source; the same real-world job appearing on several
    sources is expected and handled by the dedup engine, not by identity.

    Structured fields supplied by a source fetcher are authoritative. The
    enricher only fills fields that are still null/empty.
    """

    platform: str = Field(..., description="Source tag (hn, wwr, jobicy, ...)")
    external_id: str = Field(..., description="Source-native job identifier")

    title: str = Field("", description="Job title")
    company: Optional[str] = Field(None, description="Company name")
    description: Optional[str] = Field(None, description="Free-text job description")
    url: str = Field("", description="Link to the posting")

    salary_min: Optional[float] = Field(None, description="Lower salary bound")
    salary_max: Optional[float] = Field(None, description="Upper salary bound")
    salary_currency: Optional[str] = Field(None, description="ISO currency code")
    salary_type: Optional[SalaryType] = Field(None, description="Salary period")

    contract_type: Optional[ContractType] = Field(None, description="Employment type")
    experience_level: Optional[ExperienceLevel] = Field(None, description="Seniority")

    location: Optional[str] = Field(None, description="Location string")
    remote_type: Optional[RemoteType] = Field(None, description="Remote policy")
    timezone: Optional[str] = Field(None, description="Timezone restriction")

    tech_stack: FrozenSet[str] = Field(default_factory=frozenset, description="Technology tags")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Free-form labels")

    posted_at: Optional[datetime] = Field(None, description="When the job was posted (UTC)")
    fetched_at: datetime = Field(default_factory=utc_now, description="Ingestion time (UTC)")

    raw: Mapping[str, Any] = Field(
        default_factory=dict, description="Original source payload, preserved verbatim"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        """Derived identity, ``platform:external_id``."""
        return f"{self.platform}:{self.external_id}"

    @field_validator("platform")
    @classmethod
    def normalize_platform(cls, v: str) -> str:
        """Platform tags are lowercase and non-empty."""
        stripped = v.strip().lower()
        if not stripped:
            raise ValueError("platform cannot be empty or whitespace-only")
        return stripped

    @field_validator("external_id", mode="before")
    @classmethod
    def coerce_external_id(cls, v: Any) -> str:
        """Accept numeric ids from sources and strip whitespace."""
        if v is None:
            raise ValueError("external_id is required")
        stripped = str(v).strip()
        if not stripped:
            raise ValueError("external_id cannot be empty or whitespace-only")
        return stripped

    @field_validator("title", "url", mode="before")
    @classmethod
    def default_empty_text(cls, v: Any) -> str:
        # A missing title is recoverable; it only isolates the record during dedup
        if v is None:
            return ""
        return str(v)

    @field_validator("company", "description", "location", "timezone", "salary_currency")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat whitespace-only strings as missing."""
        if v is None:
            return None
        return v if v.strip() else None

    @field_validator("tech_stack", "tags", mode="before")
    @classmethod
    def coerce_tag_set(cls, v: Any) -> Any:
        """Accept any iterable of tags; drop blanks."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(str(tag).strip() for tag in v if tag is not None and str(tag).strip())

    @field_validator("posted_at", "fetched_at", mode="before")
    @classmethod
    def ensure_utc(cls, v: Any) -> Any:
        """Coerce ISO strings and unix seconds to timezone-aware UTC datetimes."""
        if v is None:
            return None
        coerced = coerce_datetime(v)
        return coerced if coerced is not None else v

    @field_validator("raw", mode="after")
    @classmethod
    def freeze_raw(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Snapshot the payload and expose it read-only."""
        if isinstance(v, MappingProxyType):
            return v
        return MappingProxyType(copy.deepcopy(dict(v)))

    @field_serializer("tech_stack", "tags")
    def serialize_tag_set(self, v: FrozenSet[str]) -> list[str]:
        return sorted(v)

    @field_serializer("raw")
    def serialize_raw(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return copy.deepcopy(dict(v))

    @property
    def has_salary(self) -> bool:
        """Whether any salary bound is known."""
        return self.salary_min is not None or self.salary_max is not None

    model_config = {"frozen": True, "json_schema_extra": {"example": {
        "platform": "hn",
        "external_id": "41234567",
        "title": "Senior Backend Engineer",
        "company": "Example Corp",
        "description": "We are looking for a Go developer with Kubernetes experience...",
        "url": "https://news.ycombinator.com/item?id=41234567",
        "salary_min": 150000,
        "salary_max": 190000,
        "salary_currency": "USD",
        "salary_type": "yearly",
        "contract_type": "full-time",
        "experience_level": "senior",
        "location": "Remote (US)",
        "remote_type": "remote",
        "tech_stack": ["go", "kubernetes"],
        "posted_at": "2025-11-01T12:00:00Z",
    }}}
