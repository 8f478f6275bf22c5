"""DistEclat prefix balancer - aggregate prefix groups and balance them over buckets."""

from disteclat.stage.config import StageConfig
from disteclat.stage.reducer import PrefixComputerStage, StageStats
from disteclat.stage.run import run_stage

__all__ = ["PrefixComputerStage", "StageConfig", "StageStats", "run_stage"]
