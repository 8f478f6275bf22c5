"""Shared constants for bucket artifacts and capacity."""

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Maximum number of bucket files to keep open at once (LRU cache limit).
MAX_OPEN_HANDLES = 128

# Largest artifact a downstream worker should receive (1 GB).
MAX_ARTIFACT_BYTES = 1_000_000_000

# Bytes per encoded TID.
TID_ENCODING_WIDTH = 4

# Fraction of the artifact budget a bucket may fill.
SAFETY_FACTOR = 0.7

# Capacity bound on the running TID total of one bucket.
MAX_BUCKET_TIDS = int(MAX_ARTIFACT_BYTES // TID_ENCODING_WIDTH * SAFETY_FACTOR)

BUCKET_PREFIX = "bucket-"


def bucket_name(index: int) -> str:
    return f"{BUCKET_PREFIX}{index}"
