"""Tests for driving a stage over an input file."""

import logging
from pathlib import Path

import pytest

from disteclat.prefix.types import UpstreamInvariantViolation
from disteclat.stage.config import StageConfig
from disteclat.stage.run import run_stage

INPUT = (
    "$\t[[4],6]\n"
    "$\t[[1],5]\n"
    '1\t{"2":[[0],[0,1],[0]],"3":[[],[0],[]]}\n'
    '2\t{"3":[[],[0],[1]]}\n'
    '3\t{"4":[[0],[],[]]}\n'
)


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "input.txt"
    path.write_text(INPUT, encoding="utf-8")
    return path


class TestRunStage:
    """Test cases for run_stage."""

    def test_writes_artifacts(self, tmp_path: Path, input_file: Path) -> None:
        out = tmp_path / "out"
        stats = run_stage(str(input_file), StageConfig(output_dir=out, min_support=2))

        assert (out / "shortfis" / "shortfis").read_text() == "1\t4(6)\n1\t1(5)\n"
        assert (out / "bucket-0").read_bytes() == (
            b"1\t[]\n"
            b"2\t[[0],[0,1],[0]]\n"
            b"\t[]\n"
            b"2\t[]\n"
            b"3\t[[],[0],[1]]\n"
            b"\t[]\n"
        )
        assert stats.prefixes_read == 4
        assert stats.groups_assigned == 2
        assert stats.groups_pruned == 1
        assert stats.short_itemsets == 2
        assert stats.bucket_totals == [6]

    def test_rerun_is_byte_identical(self, tmp_path: Path, input_file: Path) -> None:
        """Test that a rerun with a fresh registry reproduces the artifacts."""
        out = tmp_path / "out"
        config = StageConfig(output_dir=out, initial_bucket_count=2, max_bucket_tids=4)

        run_stage(str(input_file), config)
        first = {path.name: path.read_bytes() for path in sorted(out.glob("bucket-*"))}
        run_stage(str(input_file), config)
        second = {path.name: path.read_bytes() for path in sorted(out.glob("bucket-*"))}

        assert first == second
        assert len(first) >= 2

    def test_duplicate_prefix_aborts(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.txt"
        path.write_text('1\t{"2":[[0]]}\n1\t{"3":[[1]]}\n', encoding="utf-8")

        with pytest.raises(UpstreamInvariantViolation):
            run_stage(str(path), StageConfig(output_dir=tmp_path / "out"))

    def test_logs_progress(
        self, tmp_path: Path, input_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="disteclat")
        run_stage(str(input_file), StageConfig(output_dir=tmp_path / "out"))

        assert "Starting: file=input.txt" in caplog.text
        assert "3 groups assigned" in caplog.text


class TestRunStageFailures:
    """Test cases for errors surfacing from run_stage."""

    def test_non_adjacent_duplicate_prefix_aborts(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.txt"
        path.write_text(
            '1\t{"2":[[0]]}\n2\t{"3":[[1]]}\n1\t{"4":[[2]]}\n',
            encoding="utf-8",
        )

        with pytest.raises(UpstreamInvariantViolation):
            run_stage(str(path), StageConfig(output_dir=tmp_path / "out", initial_bucket_count=3))

    def test_close_failure_propagates(
        self, tmp_path: Path, input_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a failed artifact close escapes run_stage after buckets are flushed."""

        def failing_close(self) -> None:
            raise OSError("No space left on device")

        monkeypatch.setattr("disteclat.stage.reducer.ItemsetTextReporter.close", failing_close)
        out = tmp_path / "out"

        with pytest.raises(OSError, match="No space left"):
            run_stage(str(input_file), StageConfig(output_dir=out, min_support=2))

        assert (out / "bucket-0").read_bytes().endswith(b"3\t[[],[0],[1]]\n\t[]\n")
