"""Command-line interface for the prefix balancer stage."""

import argparse
import logging
import sys

from disteclat.stage.config import StageConfig
from disteclat.stage.run import run_stage


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="disteclat-prefix",
        description="Aggregate prefix groups and assign them to balanced buckets.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the grouped input stream (tab-delimited: Prefix\\tJSON record)",
    )

    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory receiving bucket-<n> artifacts and the short itemsets",
    )

    parser.add_argument(
        "--min-support",
        type=int,
        default=1,
        help="Minimum item support to keep (default: 1)",
    )

    parser.add_argument(
        "--initial-buckets",
        type=int,
        default=1,
        help="Number of buckets to start with (default: 1)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.min_support < 1:
        parser.error(f"--min-support must be >= 1, got {args.min_support}")
    if args.initial_buckets < 1:
        parser.error(f"--initial-buckets must be >= 1, got {args.initial_buckets}")

    config = StageConfig(
        output_dir=args.output_dir,
        min_support=args.min_support,
        initial_bucket_count=args.initial_buckets,
    )
    run_stage(args.input_file, config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
