"""Duplicate detection engine.

This module implements the record-linkage logic that:
1. Builds a normalized (company, title) key per record
2. Clusters records in a single pass, comparing each record to cluster seeds
3. Picks one survivor per cluster by source priority, completeness and recency
4. Reports every cluster with more than one member
"""

import logging
from datetime import datetime
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple

from catalog.config.models import DedupConfig
from catalog.domain.models import JobRecord
from catalog.logging import get_logger
from catalog.matching.similarity import similarity_score
from catalog.normalization.text import normalize_company_name, normalize_title
from catalog.utils.timestamps import EARLIEST

from .merge import merge_records
from .models import DedupKey, DedupResult, DedupStats, DuplicateGroup

logger = get_logger(__name__, component="dedup")

PriorityKey = Tuple[int, int, datetime]


class _Cluster:
    """Working state for one cluster: the seed's key and members in input order."""

    __slots__ = ("key", "members")

    def __init__(self, key: Optional[DedupKey], seed: JobRecord):
        self.key = key
        self.members: List[JobRecord] = [seed]


class DedupEngine:
    """Clusters near-duplicate job records and selects a survivor per cluster.

    Clustering is single-pass and seed-based: each record is compared only
    with the first member (seed) of every existing cluster, in cluster
    creation order, and joins the first cluster it is similar to. The result
    therefore depends on input order, and two records that are each similar
    to a third but not to the seed may land in different clusters.

    Records whose key is empty (no usable company or title) are never
    compared; each becomes its own cluster.
    """

    def __init__(
        self,
        config: Optional[DedupConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize DedupEngine.

        Args:
            config: Thresholds, source priorities and merge policy (defaults to DedupConfig())
            logger_instance: Logger instance (defaults to module logger)
        """
        self.config = config or DedupConfig()
        self.logger = logger_instance or logger

    @staticmethod
    def compute_key(record: JobRecord) -> DedupKey:
        """Build the normalized matching key of a record."""
        return DedupKey(
            company=normalize_company_name(record.company),
            title=normalize_title(record.title),
        )

    def are_similar(self, a: DedupKey, b: DedupKey) -> bool:
        """Whether two keys describe the same job.

        Both the company and the title similarity must reach their thresholds.
        Empty keys are never similar to anything.
        """
        if a.is_empty or b.is_empty:
            return False

        if similarity_score(a.company, b.company) < self.config.company_threshold:
            return False
        return similarity_score(a.title, b.title) >= self.config.title_threshold

    def completeness_bonus(self, record: JobRecord) -> int:
        """Score how much structured information a record carries.

        +2 known salary_min, +1 long description, +1 rich tech stack.
        """
        bonus = 0
        if record.salary_min is not None:
            bonus += 2
        if record.description and len(record.description) > self.config.long_description_chars:
            bonus += 1
        if len(record.tech_stack) > self.config.rich_tech_stack_size:
            bonus += 1
        return bonus

    def priority_key(self, record: JobRecord) -> PriorityKey:
        """Ordering key for survivor selection; the largest key wins.

        Compared lexicographically: source priority first, then completeness
        bonus, then posted_at (missing dates sort earliest).
        """
        return (
            self.config.priority_for(record.platform),
            self.completeness_bonus(record),
            record.posted_at or EARLIEST,
        )

    def select_survivor(self, cluster: Sequence[JobRecord]) -> JobRecord:
        """Pick the record to keep from a cluster.

        Ties are broken by cluster order: the earliest member among those with
        the highest priority key wins.

        Raises:
            ValueError: If the cluster is empty
        """
        if not cluster:
            raise ValueError("Cannot select a survivor from an empty cluster")

        return max(cluster, key=self.priority_key)

    def cluster(self, records: Iterable[JobRecord]) -> List[List[JobRecord]]:
        """Group records into clusters of near-duplicates.

        Args:
            records: Records in input order

        Returns:
            Clusters in order of their seed's position; members in input order
        """
        return [c.members for c in self._build_clusters(records)]

    def deduplicate(self, records: Iterable[JobRecord]) -> DedupResult:
        """Remove near-duplicate records.

        Algorithm:
        1. Cluster records by seed similarity
        2. Select one survivor per cluster
        3. Optionally fold removed members into the survivor (merge_duplicates)
        4. Report each cluster of size > 1

        Args:
            records: Records to deduplicate, usually already enriched

        Returns:
            DedupResult with survivors, duplicate report and counters
        """
        records = list(records)
        clusters = self._build_clusters(records)

        unique: List[JobRecord] = []
        duplicates: List[DuplicateGroup] = []
        malformed = 0
        no_company = 0

        for cluster in clusters:
            if cluster.key is None or cluster.key.is_malformed:
                malformed += 1
            elif cluster.key.is_empty:
                no_company += 1

            if len(cluster.members) == 1:
                unique.append(cluster.members[0])
                continue

            survivor = self.select_survivor(cluster.members)
            removed = [member for member in cluster.members if member is not survivor]

            if self.config.merge_duplicates:
                survivor = reduce(merge_records, removed, survivor)

            unique.append(survivor)
            duplicates.append(DuplicateGroup(kept=survivor, removed=removed))

            self.logger.info(
                f"Merged {len(removed)} duplicate(s) into {survivor.id}",
                extra={
                    "event": "dedup.cluster.merged",
                    "kept_id": survivor.id,
                    "removed_ids": [record.id for record in removed],
                    "company_key": cluster.key.company,
                    "title_key": cluster.key.title,
                },
            )

        stats = DedupStats(
            total_input=len(records),
            total_unique=len(unique),
            total_duplicates=len(records) - len(unique),
            malformed=malformed,
            no_company=no_company,
        )

        self.logger.info(
            f"Dedup finished: {stats.total_input} in, {stats.total_unique} unique, "
            f"{stats.total_duplicates} duplicates",
            extra={
                "event": "dedup.run.completed",
                "total_input": stats.total_input,
                "total_unique": stats.total_unique,
                "total_duplicates": stats.total_duplicates,
                "clusters_merged": len(duplicates),
                "malformed": malformed,
                "no_company": no_company,
            },
        )

        return DedupResult(unique=unique, duplicates=duplicates, stats=stats)

    def _build_clusters(self, records: Iterable[JobRecord]) -> List[_Cluster]:
        clusters: List[_Cluster] = []

        for record in records:
            key = self._safe_key(record)

            if key is None or key.is_malformed:
                self.logger.warning(
                    f"Record {record.id} has no usable title; kept unclustered",
                    extra={
                        "event": "dedup.record.malformed",
                        "record_id": record.id,
                    },
                )
                clusters.append(_Cluster(key, record))
                continue

            if key.is_empty:
                self.logger.debug(
                    f"Record {record.id} has no company; kept unclustered",
                    extra={
                        "event": "dedup.record.no_company",
                        "record_id": record.id,
                    },
                )
                clusters.append(_Cluster(key, record))
                continue

            for cluster in clusters:
                if cluster.key is not None and self.are_similar(key, cluster.key):
                    cluster.members.append(record)
                    break
            else:
                clusters.append(_Cluster(key, record))

        return clusters

    def _safe_key(self, record: JobRecord) -> Optional[DedupKey]:
        """Compute a record's key, isolating the record if normalization fails."""
        try:
            return self.compute_key(record)
        except Exception as e:
            self.logger.error(
                f"Error computing dedup key for {record.id}: {e}",
                exc_info=True,
            )
            return None
