"""Growable registry of buckets and their running TID totals."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(slots=True)
class Bucket:
    """One unit of downstream work: an ordinal and its running TID total."""

    index: int
    total: int = 0


class BucketRegistry:
    """
    Ordered, append-only collection of buckets.

    Owned by a single stage instance; totals only ever grow and buckets are
    never removed.
    """

    def __init__(self, initial_count: int = 1):
        if initial_count < 1:
            raise ValueError(f"initial bucket count must be >= 1, got {initial_count}")
        self._buckets: list[Bucket] = [Bucket(i) for i in range(initial_count)]

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self._buckets)

    def __getitem__(self, index: int) -> Bucket:
        return self._buckets[index]

    def lowest(self) -> Bucket:
        """Return the least-loaded bucket; ties go to the lowest ordinal."""
        lowest = self._buckets[0]
        for bucket in self._buckets[1:]:
            if bucket.total < lowest.total:
                lowest = bucket
        return lowest

    def append(self) -> Bucket:
        bucket = Bucket(len(self._buckets))
        self._buckets.append(bucket)
        return bucket

    def add(self, index: int, tids: int) -> None:
        if tids < 0:
            raise ValueError(f"bucket totals cannot decrease, got {tids}")
        self._buckets[index].total += tids

    def totals(self) -> list[int]:
        return [bucket.total for bucket in self._buckets]
