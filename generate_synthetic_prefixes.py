#!/usr/bin/env python3
"""
Synthetic input generator for prefix balancer benchmarks.

Writes a grouped input stream with a reserved-key block of short itemsets
followed by one merged record per prefix. Prefix sizes follow a Zipf-like
skew so a handful of prefixes carry most of the TIDs, which is the case the
least-loaded bucket assignment exists for.
"""

import argparse
import random
import sys

from disteclat.prefix.codec import encode_input_line
from disteclat.prefix.types import SHORT_KEY, MergedRecord, ShortItemset

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB


def generate_merged_record(
    prefix_rank: int,
    items: int,
    partitions: int,
    max_tids: int,
    skew: float,
    rng: random.Random,
) -> MergedRecord:
    """
    Generate the merged record of one prefix.

    The expected TID count per item decays as 1 / rank**skew; each item's
    TIDs are spread over the source partitions in ascending order.
    """
    scale = max(1, int(max_tids / (prefix_rank**skew)))
    record: MergedRecord = {}
    for item in range(prefix_rank + 1, prefix_rank + 1 + items):
        tids = sorted(rng.sample(range(scale * 2), rng.randint(0, scale)))
        record[item] = [tids[p::partitions] for p in range(partitions)]
    return record


def generate_synthetic_dataset(
    output_path: str,
    num_prefixes: int,
    items: int,
    partitions: int,
    max_tids: int,
    skew: float,
    seed: int,
) -> int:
    """
    Generate a synthetic input stream.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    total_lines = 0

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for item in range(num_prefixes):
            f.write(encode_input_line(SHORT_KEY, ShortItemset((item,), rng.randint(1, max_tids))))
            f.write("\n")
            total_lines += 1

        for rank in range(1, num_prefixes + 1):
            record = generate_merged_record(rank, items, partitions, max_tids, skew, rng)
            f.write(encode_input_line((rank - 1,), record) + "\n")
            total_lines += 1

            if rank % 10000 == 0:
                print(f"  Generated {rank}/{num_prefixes} prefixes...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic prefix-group input stream.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 50k prefixes, heavy skew
  python generate_synthetic_prefixes.py --out data/prefixes.txt --prefixes 50000 --skew 1.2

  # Then balance them over buckets
  disteclat-prefix data/prefixes.txt --output-dir data/out --initial-buckets 8
""",
    )

    parser.add_argument("--out", required=True, help="Output file path")
    parser.add_argument(
        "--prefixes",
        type=int,
        default=10000,
        help="Number of prefixes (default: 10000)",
    )
    parser.add_argument(
        "--items",
        type=int,
        default=4,
        help="Items per prefix (default: 4)",
    )
    parser.add_argument(
        "--partitions",
        type=int,
        default=3,
        help="Source partitions per item (default: 3)",
    )
    parser.add_argument(
        "--max-tids",
        type=int,
        default=1000,
        help="Expected TIDs per item of the largest prefix (default: 1000)",
    )
    parser.add_argument(
        "--skew",
        type=float,
        default=1.0,
        help="Zipf exponent of prefix sizes (default: 1.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    if args.prefixes < 1:
        parser.error("--prefixes must be at least 1")
    if args.partitions < 1:
        parser.error("--partitions must be at least 1")
    if args.max_tids < 1:
        parser.error("--max-tids must be at least 1")

    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Prefixes: {args.prefixes:,}, items: {args.items}, skew: {args.skew}", file=sys.stderr)

    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_prefixes=args.prefixes,
        items=args.items,
        partitions=args.partitions,
        max_tids=args.max_tids,
        skew=args.skew,
        seed=args.seed,
    )

    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
