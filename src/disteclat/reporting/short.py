"""Direct output of finalized short frequent itemsets."""

from collections.abc import Iterable

from disteclat.prefix.types import ShortItemset
from disteclat.reporting.reporter import SetReporter


class ShortItemsetEmitter:
    """Forwards finalized itemsets to a reporter, bypassing bucketing."""

    def __init__(self, reporter: SetReporter):
        self._reporter = reporter

    def emit(self, records: Iterable[ShortItemset]) -> int:
        """Report each itemset in arrival order; returns how many were reported."""
        emitted = 0
        for record in records:
            self._reporter.report(record.itemset, record.support)
            emitted += 1
        return emitted
