"""Tests for the bucket file-handle cache."""

import tempfile
from pathlib import Path

import pytest

from disteclat.bucket.cache import BucketFileCache


class TestBucketFileCache:
    """Test cases for BucketFileCache."""

    def test_evicts_lru_when_full(self) -> None:
        """Test that LRU handle is evicted when cache is full."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            cache = BucketFileCache(max_handles=2, output_dir=tmp_path)

            try:
                cache.write(0, b"data0\n")
                cache.write(1, b"data1\n")
                cache.write(2, b"data2\n")  # Should evict bucket 0

                assert len(cache._cache) == 2
                assert 0 not in cache._cache
                assert 1 in cache._cache
                assert 2 in cache._cache

            finally:
                cache.close_all()

            assert (tmp_path / "bucket-0").read_bytes() == b"data0\n"
            assert (tmp_path / "bucket-1").read_bytes() == b"data1\n"
            assert (tmp_path / "bucket-2").read_bytes() == b"data2\n"

    def test_moves_to_end_on_access(self) -> None:
        """Test that accessed handles are moved to end (most recently used)."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            cache = BucketFileCache(max_handles=2, output_dir=Path(tmp_dir))

            try:
                cache.write(0, b"data0\n")
                cache.write(1, b"data1\n")
                cache.write(0, b"more0\n")
                cache.write(2, b"data2\n")  # Should evict bucket 1 (LRU)

                assert len(cache._cache) == 2
                assert 1 not in cache._cache
                assert 0 in cache._cache
                assert 2 in cache._cache

            finally:
                cache.close_all()

    def test_reopen_after_eviction_appends(self) -> None:
        """Test that an evicted bucket keeps its earlier records."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            cache = BucketFileCache(max_handles=1, output_dir=tmp_path)

            try:
                cache.write(0, b"first\n")
                cache.write(1, b"other\n")
                cache.write(0, b"second\n")
            finally:
                cache.close_all()

            assert (tmp_path / "bucket-0").read_bytes() == b"first\nsecond\n"

    def test_truncates_stale_artifact_on_first_open(self) -> None:
        """Test that a rerun into the same directory does not append to old output."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            (tmp_path / "bucket-0").write_bytes(b"stale\n")

            cache = BucketFileCache(max_handles=4, output_dir=tmp_path)
            try:
                cache.write(0, b"fresh\n")
            finally:
                cache.close_all()

            assert (tmp_path / "bucket-0").read_bytes() == b"fresh\n"

    def test_paths_lists_written_buckets(self, tmp_path: Path) -> None:
        cache = BucketFileCache(max_handles=4, output_dir=tmp_path)
        try:
            cache.write(2, b"x\n")
            cache.write(0, b"y\n")
        finally:
            cache.close_all()

        assert cache.paths() == [tmp_path / "bucket-0", tmp_path / "bucket-2"]
        assert not cache._cache


class RecordingHandle:
    """Stand-in file handle that remembers being closed."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.closed = False

    def close(self) -> None:
        self.closed = True
        if self.fail:
            raise OSError("close failed")


def test_close_all_closes_every_handle_when_one_fails(tmp_path: Path) -> None:
    cache = BucketFileCache(max_handles=4, output_dir=tmp_path)
    handles = [RecordingHandle(), RecordingHandle(fail=True), RecordingHandle()]
    for idx, handle in enumerate(handles):
        cache._cache[idx] = handle

    with pytest.raises(OSError, match="close failed"):
        cache.close_all()

    assert all(handle.closed for handle in handles)
    assert not cache._cache


def test_remove_stale_only_touches_numbered_buckets(tmp_path: Path) -> None:
    (tmp_path / "bucket-0").write_bytes(b"old\n")
    (tmp_path / "bucket-12").write_bytes(b"old\n")
    (tmp_path / "bucket-x").write_bytes(b"keep\n")
    (tmp_path / "shortfis").mkdir()

    removed = BucketFileCache(max_handles=4, output_dir=tmp_path).remove_stale()

    assert sorted(path.name for path in removed) == ["bucket-0", "bucket-12"]
    assert (tmp_path / "bucket-x").exists()
