"""Itemset reporters: sinks for frequent itemsets and their supports."""

from collections import Counter
from collections.abc import Sequence
from typing import Protocol, TextIO


class SetReporter(Protocol):
    """Sink for frequent itemsets."""

    def report(self, itemset: Sequence[int], support: int) -> None: ...

    def close(self) -> None: ...


def format_itemset(itemset: Sequence[int], support: int) -> str:
    """Render an itemset as '<length>\\t<i1>|<i2>|...(<support>)'."""
    items = "|".join(str(item) for item in itemset)
    return f"{len(itemset)}\t{items}({support})"


class ItemsetTextReporter:
    """Writes one line per reported itemset, in arrival order."""

    def __init__(self, handle: TextIO):
        self._handle = handle

    def report(self, itemset: Sequence[int], support: int) -> None:
        self._handle.write(format_itemset(itemset, support) + "\n")

    def close(self) -> None:
        self._handle.flush()
        self._handle.close()


class ItemsetLengthCountReporter:
    """
    Counts reported itemsets per length.

    On close, writes one '<length>\\t<count>' line per length in ascending
    order and closes the handle.
    """

    def __init__(self, handle: TextIO):
        self._handle = handle
        self.counts: Counter[int] = Counter()

    def report(self, itemset: Sequence[int], support: int) -> None:
        self.counts[len(itemset)] += 1

    def close(self) -> None:
        for length in sorted(self.counts):
            self._handle.write(f"{length}\t{self.counts[length]}\n")
        self._handle.flush()
        self._handle.close()
