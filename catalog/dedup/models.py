"""Data models for duplicate detection results."""

from dataclasses import dataclass, field
from typing import List

from catalog.domain.models import JobRecord


@dataclass(frozen=True)
class DedupKey:
    """Normalized matching key for one record.

    Attributes:
        company: Output of normalize_company_name
        title: Output of normalize_title
    """

    company: str
    title: str

    @property
    def is_empty(self) -> bool:
        """True when either part is missing; such records are never clustered."""
        return not self.company or not self.title

    @property
    def is_malformed(self) -> bool:
        """True when the title is missing. A missing company alone is ordinary data."""
        return not self.title


@dataclass
class DuplicateGroup:
    """Audit entry for one cluster with more than one member.

    Attributes:
        kept: The survivor that remains in the catalog
        removed: Cluster members dropped in favour of the survivor, in input order
    """

    kept: JobRecord
    removed: List[JobRecord] = field(default_factory=list)

    @property
    def size(self) -> int:
        return 1 + len(self.removed)

    @property
    def removed_ids(self) -> List[str]:
        return [record.id for record in self.removed]


@dataclass
class DedupStats:
    """Counters for one dedup run."""

    total_input: int = 0
    total_unique: int = 0
    total_duplicates: int = 0
    malformed: int = 0
    no_company: int = 0


@dataclass
class DedupResult:
    """Output of DedupEngine.deduplicate.

    Attributes:
        unique: One survivor per cluster, in order of each cluster's first member
        duplicates: Duplicate report, one entry per cluster of size > 1
        stats: Run counters
    """

    unique: List[JobRecord] = field(default_factory=list)
    duplicates: List[DuplicateGroup] = field(default_factory=list)
    stats: DedupStats = field(default_factory=DedupStats)

