"""Merging of partial TID evidence and minimum-support filtering."""

from collections.abc import Iterable

from disteclat.prefix.types import (
    MergedRecord,
    Prefix,
    PrefixGroup,
    TidMatrix,
    UpstreamInvariantViolation,
    item_support,
)


def aggregate(
    prefix: Prefix,
    records: Iterable[MergedRecord],
    min_support: int,
) -> PrefixGroup | None:
    """
    Build the prefix group for one prefix from its merged record.

    Items whose support is below min_support are dropped. Returns None when
    nothing is left to schedule (no record, or zero TIDs after filtering).

    Raises:
        ValueError: if the prefix is empty.
        UpstreamInvariantViolation: if more than one record is delivered.
    """
    if not prefix:
        raise ValueError("prefix must hold at least one item")

    merged: MergedRecord | None = None
    for record in records:
        if merged is not None:
            raise UpstreamInvariantViolation(
                f"More than one tid list for prefix {' '.join(map(str, prefix))!r}"
            )
        merged = record

    if merged is None:
        return None

    items: dict[int, TidMatrix] = {}
    total_tids = 0
    for item, tid_lists in merged.items():
        support = item_support(tid_lists)
        if support >= min_support:
            items[item] = tid_lists
            total_tids += support

    if total_tids == 0:
        return None
    return PrefixGroup(prefix, items, total_tids)
