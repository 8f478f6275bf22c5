from disteclat.reporting.reporter import (
    ItemsetLengthCountReporter,
    ItemsetTextReporter,
    SetReporter,
    format_itemset,
)
from disteclat.reporting.short import ShortItemsetEmitter

__all__ = [
    "ItemsetLengthCountReporter",
    "ItemsetTextReporter",
    "SetReporter",
    "ShortItemsetEmitter",
    "format_itemset",
]
