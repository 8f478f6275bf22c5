"""File-handle cache for bucket artifacts."""

from collections import OrderedDict
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO

from disteclat.bucket.types import BUCKET_PREFIX, BUFFER_SIZE, bucket_name


class BucketFileCache:
    """
    LRU cache for bucket file handles to prevent file descriptor exhaustion.

    A bucket file is truncated the first time it is opened and appended to
    when reopened after eviction.
    """

    def __init__(self, max_handles: int, output_dir: Path):
        self._max_handles = max_handles
        self._output_dir = output_dir
        self._cache: OrderedDict[int, BinaryIO] = OrderedDict()
        self._opened: set[int] = set()

    def path_for(self, bucket_idx: int) -> Path:
        return self._output_dir / bucket_name(bucket_idx)

    def write(self, bucket_idx: int, data: bytes) -> None:
        """Write data to the specified bucket, opening handle if needed."""
        if bucket_idx in self._cache:
            self._cache.move_to_end(bucket_idx)
            handle = self._cache[bucket_idx]
        else:
            while len(self._cache) >= self._max_handles:
                _, old_handle = self._cache.popitem(last=False)
                old_handle.close()

            mode = "ab" if bucket_idx in self._opened else "wb"
            handle = open(self.path_for(bucket_idx), mode, buffering=BUFFER_SIZE)  # noqa: SIM115
            self._opened.add(bucket_idx)
            self._cache[bucket_idx] = handle

        handle.write(data)

    def paths(self) -> list[Path]:
        """Paths of every bucket written during this run, in ordinal order."""
        return [self.path_for(idx) for idx in sorted(self._opened)]

    def remove_stale(self) -> list[Path]:
        """Delete bucket artifacts left in the output directory by an earlier run."""
        removed = []
        for path in sorted(self._output_dir.glob(f"{BUCKET_PREFIX}*")):
            suffix = path.name[len(BUCKET_PREFIX) :]
            if suffix.isdigit() and path.is_file():
                path.unlink()
                removed.append(path)
        return removed

    def close_all(self) -> None:
        """Flush and close all open file handles; every handle is closed even if one fails."""
        handles = list(self._cache.values())
        self._cache.clear()
        with ExitStack() as stack:
            for handle in handles:
                stack.callback(handle.close)
