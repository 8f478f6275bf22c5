"""Second-cycle reducer: aggregates prefix groups and assigns them to buckets."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from disteclat.bucket.balancer import BucketLoadBalancer
from disteclat.bucket.cache import BucketFileCache
from disteclat.bucket.registry import BucketRegistry
from disteclat.prefix.aggregate import aggregate
from disteclat.prefix.types import (
    SHORT_KEY,
    GroupKey,
    MergedRecord,
    Prefix,
    ShortItemset,
    UpstreamInvariantViolation,
)
from disteclat.reporting.reporter import ItemsetTextReporter, SetReporter
from disteclat.reporting.short import ShortItemsetEmitter
from disteclat.stage.config import StageConfig

logger = logging.getLogger(__name__)


@dataclass
class StageStats:
    """Statistics from one stage instance."""

    prefixes_read: int = 0
    groups_assigned: int = 0
    groups_pruned: int = 0
    short_itemsets: int = 0
    buckets_created: int = 0
    bucket_totals: list[int] = field(default_factory=list)


class PrefixComputerStage:
    """
    One running instance of the stage.

    Owns its bucket registry and output artifacts exclusively. Use as a
    context manager, or call close() when the input is exhausted.
    """

    def __init__(self, config: StageConfig, short_reporter: SetReporter | None = None):
        self.config = config
        self.stats = StageStats()

        config.output_dir.mkdir(parents=True, exist_ok=True)
        self.cache = BucketFileCache(config.max_open_handles, config.output_dir)
        self.cache.remove_stale()
        if short_reporter is None:
            config.short_fis_path.parent.mkdir(parents=True, exist_ok=True)
            short_reporter = ItemsetTextReporter(
                open(config.short_fis_path, "w", encoding="utf-8")  # noqa: SIM115
            )
        self._short_reporter = short_reporter
        self._emitter = ShortItemsetEmitter(short_reporter)

        self.registry = BucketRegistry(config.initial_bucket_count)
        self._initial_buckets = len(self.registry)
        self._balancer = BucketLoadBalancer(self.registry, self.cache, config.max_bucket_tids)
        self._seen: set[Prefix] = set()
        self._closed = False

    def __enter__(self) -> "PrefixComputerStage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def reduce(
        self,
        key: GroupKey,
        records: Iterable[MergedRecord] | Iterable[ShortItemset],
    ) -> int | None:
        """
        Process all records delivered for one key.

        Returns the bucket ordinal the group was assigned to, or None when the
        key was the reserved short-itemset key or the group was pruned.
        """
        self.stats.prefixes_read += 1

        if key == SHORT_KEY:
            self.stats.short_itemsets += self._emitter.emit(records)
            return None

        if key in self._seen:
            raise UpstreamInvariantViolation(
                f"Prefix {' '.join(map(str, key))!r} delivered in more than one reduce call"
            )
        self._seen.add(key)

        group = aggregate(key, records, self.config.min_support)
        if group is None:
            self.stats.groups_pruned += 1
            logger.debug("Pruned prefix %s: no item reaches min_support", key)
            return None

        bucket_idx = self._balancer.assign(group)
        self.stats.groups_assigned += 1
        return bucket_idx

    def close(self) -> None:
        """Flush and close every artifact. Failures propagate."""
        if self._closed:
            return
        self._closed = True
        self.stats.buckets_created = len(self.registry) - self._initial_buckets
        self.stats.bucket_totals = self.registry.totals()
        try:
            self._short_reporter.close()
        finally:
            self.cache.close_all()
