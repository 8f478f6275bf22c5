"""Shared type definitions for prefix groups."""

from dataclasses import dataclass, field
from typing import TypeAlias

Prefix: TypeAlias = tuple[int, ...]
TidList: TypeAlias = list[int]
TidMatrix: TypeAlias = list[TidList]
MergedRecord: TypeAlias = dict[int, TidMatrix]

# Reserved key carrying finalized length-one frequent itemsets.
SHORT_KEY = "$"

GroupKey: TypeAlias = Prefix | str


class UpstreamInvariantViolation(RuntimeError):
    """Raised when more than one merged record arrives for a single prefix."""


def item_support(tid_lists: TidMatrix) -> int:
    """Support of an item: the number of TIDs over all partial lists."""
    return sum(len(tid_list) for tid_list in tid_lists)


@dataclass(frozen=True, slots=True)
class ItemRecord:
    """An item with its partial TID lists, one per source partition."""

    item: int
    tid_lists: TidMatrix

    @property
    def support(self) -> int:
        return item_support(self.tid_lists)

    def tids(self) -> TidList:
        """Concatenate the partial lists into the item's full TID list."""
        return [tid for tid_list in self.tid_lists for tid in tid_list]


@dataclass(frozen=True, slots=True)
class PrefixGroup:
    """Surviving items of one prefix after support filtering."""

    prefix: Prefix
    items: dict[int, TidMatrix] = field(default_factory=dict)
    total_tids: int = 0

    def records(self) -> list[ItemRecord]:
        return [ItemRecord(item, tid_lists) for item, tid_lists in self.items.items()]


@dataclass(frozen=True, slots=True)
class ShortItemset:
    """A finalized frequent itemset with its known support."""

    itemset: tuple[int, ...]
    support: int
