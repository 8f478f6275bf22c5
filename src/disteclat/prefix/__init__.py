from disteclat.prefix.aggregate import aggregate
from disteclat.prefix.types import (
    SHORT_KEY,
    ItemRecord,
    PrefixGroup,
    ShortItemset,
    UpstreamInvariantViolation,
)

__all__ = [
    "SHORT_KEY",
    "ItemRecord",
    "PrefixGroup",
    "ShortItemset",
    "UpstreamInvariantViolation",
    "aggregate",
]
