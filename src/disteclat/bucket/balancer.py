"""Least-loaded bucket assignment for prefix groups."""

import logging
from typing import Protocol

from disteclat.bucket.registry import Bucket, BucketRegistry
from disteclat.bucket.types import MAX_BUCKET_TIDS
from disteclat.prefix.codec import encode_artifact_record
from disteclat.prefix.types import PrefixGroup

logger = logging.getLogger(__name__)


class BucketWriter(Protocol):
    def write(self, bucket_idx: int, data: bytes) -> None: ...


class BucketLoadBalancer:
    """
    Assign whole prefix groups to buckets, preferring the least-loaded one.

    A group goes to the bucket with the smallest running total unless that
    would push the bucket's total past max_bucket_tids, in which case a new
    bucket is appended. Groups are never split across buckets.
    """

    def __init__(
        self,
        registry: BucketRegistry,
        writer: BucketWriter,
        max_bucket_tids: int = MAX_BUCKET_TIDS,
    ):
        self._registry = registry
        self._writer = writer
        self._max_bucket_tids = max_bucket_tids

    def fits(self, bucket: Bucket, total_tids: int) -> bool:
        """Check the bucket's accumulated total, not its ordinal, against the cap."""
        return bucket.total + total_tids <= self._max_bucket_tids

    def select(self, total_tids: int) -> Bucket:
        bucket = self._registry.lowest()
        if not self.fits(bucket, total_tids):
            bucket = self._registry.append()
            logger.debug(
                "Opened bucket %d for %d tids (%d buckets)",
                bucket.index,
                total_tids,
                len(self._registry),
            )
        return bucket

    def assign(self, group: PrefixGroup) -> int:
        """Place the group in a bucket, write it out, and return the bucket ordinal."""
        bucket = self.select(group.total_tids)
        self._registry.add(bucket.index, group.total_tids)

        chunks = [encode_artifact_record(group.prefix, [])]
        for item, tid_lists in group.items.items():
            chunks.append(encode_artifact_record((item,), tid_lists))
        chunks.append(encode_artifact_record((), []))
        self._writer.write(bucket.index, b"".join(chunks))
        return bucket.index
