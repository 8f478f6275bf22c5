"""Configuration for one prefix computer stage instance."""

from dataclasses import dataclass
from pathlib import Path

from disteclat.bucket.types import MAX_BUCKET_TIDS, MAX_OPEN_HANDLES

# Short-itemset artifact, relative to the output directory.
SHORT_FIS_NAME = "shortfis"


@dataclass(frozen=True)
class StageConfig:
    """Options recognized by the stage."""

    output_dir: Path
    min_support: int = 1
    initial_bucket_count: int = 1
    max_bucket_tids: int = MAX_BUCKET_TIDS
    max_open_handles: int = MAX_OPEN_HANDLES

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        if self.min_support < 1:
            raise ValueError(f"min_support must be >= 1, got {self.min_support}")
        if self.initial_bucket_count < 1:
            raise ValueError(
                f"initial_bucket_count must be >= 1, got {self.initial_bucket_count}"
            )
        if self.max_bucket_tids < 1:
            raise ValueError(f"max_bucket_tids must be >= 1, got {self.max_bucket_tids}")
        if self.max_open_handles < 1:
            raise ValueError(f"max_open_handles must be >= 1, got {self.max_open_handles}")

    @property
    def short_fis_path(self) -> Path:
        return self.output_dir / SHORT_FIS_NAME / SHORT_FIS_NAME
