import logging
import time
from pathlib import Path

from disteclat.prefix.codec import read_input_groups
from disteclat.stage.config import StageConfig
from disteclat.stage.reducer import PrefixComputerStage, StageStats

logger = logging.getLogger(__name__)


def run_stage(input_path: str, config: StageConfig) -> StageStats:
    """
    Feed a grouped input file through one stage instance.

    Consecutive lines with the same key form the records of one reduce call.
    Artifacts are closed even when processing fails; the error still
    propagates to the caller.
    """
    start = time.perf_counter()
    input_file = Path(input_path)

    logger.info(
        f"Starting: file={input_file.name}, output={config.output_dir}, "
        f"min_support={config.min_support}, buckets={config.initial_bucket_count}"
    )

    stage = PrefixComputerStage(config)
    try:
        for key, records in read_input_groups(str(input_file)):
            stage.reduce(key, records)
    finally:
        stage.close()

    stats = stage.stats
    elapsed = time.perf_counter() - start
    logger.info(
        "Done: %d prefixes, %d groups assigned, %d pruned, %d short itemsets, "
        "%d buckets (%d new) in %.2fs",
        stats.prefixes_read,
        stats.groups_assigned,
        stats.groups_pruned,
        stats.short_itemsets,
        len(stats.bucket_totals),
        stats.buckets_created,
        elapsed,
    )
    if stats.bucket_totals:
        logger.debug("Bucket totals: %s", stats.bucket_totals)
    return stats
