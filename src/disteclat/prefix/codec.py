"""Line codec for the stage's input stream and for bucket artifacts."""

import json
from collections.abc import Iterable, Iterator
from itertools import groupby
from typing import TypeAlias

from disteclat.prefix.types import (
    SHORT_KEY,
    GroupKey,
    MergedRecord,
    Prefix,
    PrefixGroup,
    ShortItemset,
    TidMatrix,
)

InputLine: TypeAlias = tuple[GroupKey, MergedRecord | ShortItemset]
ArtifactRecord: TypeAlias = tuple[Prefix, TidMatrix]


def encode_key(key: Prefix) -> str:
    return " ".join(str(item) for item in key)


def decode_key(text: str) -> GroupKey:
    text = text.strip()
    if text == SHORT_KEY:
        return SHORT_KEY
    if not text:
        return ()
    return tuple(int(item) for item in text.split())


def encode_matrix(tid_lists: TidMatrix) -> str:
    return json.dumps(tid_lists, separators=(",", ":"))


def _decode_matrix(value: object) -> TidMatrix:
    if not isinstance(value, list) or not all(isinstance(row, list) for row in value):
        raise ValueError(f"expected a list of TID lists, got {value!r}")
    matrix: TidMatrix = []
    for row in value:
        if not all(isinstance(tid, int) and tid >= 0 for tid in row):
            raise ValueError(f"TIDs must be non-negative integers, got {row!r}")
        matrix.append(list(row))
    return matrix


def decode_matrix(text: str) -> TidMatrix:
    return _decode_matrix(json.loads(text))


def encode_input_line(key: GroupKey, payload: MergedRecord | ShortItemset) -> str:
    """Render one input-stream line (without trailing newline)."""
    if key == SHORT_KEY:
        value = json.dumps([list(payload.itemset), payload.support], separators=(",", ":"))
        return f"{SHORT_KEY}\t{value}"
    body = {str(item): tid_lists for item, tid_lists in payload.items()}
    return f"{encode_key(key)}\t{json.dumps(body, separators=(',', ':'))}"


def parse_input_line(raw_line: str) -> InputLine | None:
    """
    Parse one input-stream line into (key, payload).

    Returns None for blank lines. Ordinary keys carry a merged record
    (item -> partial TID lists); the reserved key carries a short itemset.
    """
    line = raw_line.rstrip("\n\r")
    if not line.strip():
        return None

    key_text, sep, value_text = line.partition("\t")
    if not sep:
        raise ValueError(f"missing tab separator in {line!r}")

    key = decode_key(key_text)
    value = json.loads(value_text)

    if key == SHORT_KEY:
        if not (isinstance(value, list) and len(value) == 2 and isinstance(value[0], list)):
            raise ValueError(f"short itemset must be [[items...], support], got {value!r}")
        itemset, support = value
        return key, ShortItemset(tuple(int(item) for item in itemset), int(support))

    if not key:
        raise ValueError("empty prefix key in input stream")
    if not isinstance(value, dict):
        raise ValueError(f"merged record must be an object, got {value!r}")
    record: MergedRecord = {int(item): _decode_matrix(rows) for item, rows in value.items()}
    return key, record


def iter_input_groups(
    lines: Iterable[str] | Iterable[bytes],
) -> Iterator[tuple[GroupKey, list[MergedRecord | ShortItemset]]]:
    """
    Group consecutive lines sharing a key, the way a reducer sees its input.

    Byte lines are decoded as UTF-8. Malformed lines, including undecodable
    ones, raise ValueError naming the line number.
    """

    def parsed() -> Iterator[InputLine]:
        for lineno, raw_line in enumerate(lines, start=1):
            try:
                if isinstance(raw_line, bytes):
                    raw_line = raw_line.decode("utf-8")
                entry = parse_input_line(raw_line)
            except ValueError as exc:
                raise ValueError(f"line {lineno}: {exc}") from exc
            if entry is not None:
                yield entry

    for key, entries in groupby(parsed(), key=lambda entry: entry[0]):
        yield key, [payload for _, payload in entries]


def read_input_groups(
    input_path: str,
) -> Iterator[tuple[GroupKey, list[MergedRecord | ShortItemset]]]:
    """Read and group all records from an input-stream file."""
    with open(input_path, "rb") as handle:
        yield from iter_input_groups(handle)


def encode_artifact_record(key: Prefix, tid_lists: TidMatrix) -> bytes:
    return f"{encode_key(key)}\t{encode_matrix(tid_lists)}\n".encode()


def parse_artifact_line(raw_line: bytes) -> ArtifactRecord | None:
    """Parse one bucket artifact line; returns None for blank lines."""
    line = raw_line.rstrip(b"\n\r")
    if not line:
        return None
    key_bytes, sep, value_bytes = line.partition(b"\t")
    if not sep:
        raise ValueError(f"missing tab separator in {line!r}")
    key = decode_key(key_bytes.decode())
    if key == SHORT_KEY:
        raise ValueError("reserved key found in bucket artifact")
    return key, decode_matrix(value_bytes.decode())


def iter_bucket_groups(lines: Iterable[bytes]) -> Iterator[PrefixGroup]:
    """
    Rebuild prefix groups from bucket artifact lines.

    A group starts with (prefix, []) and ends with ((), []). Raises ValueError
    on records outside a group or on a group left open at end of input.
    """
    current: Prefix | None = None
    items: dict[int, TidMatrix] = {}
    total_tids = 0

    for raw_line in lines:
        record = parse_artifact_line(raw_line)
        if record is None:
            continue
        key, tid_lists = record

        if current is None:
            if not key or tid_lists:
                raise ValueError(f"expected start-of-group marker, got {record!r}")
            current, items, total_tids = key, {}, 0
        elif not key:
            yield PrefixGroup(current, items, total_tids)
            current = None
        else:
            if len(key) != 1:
                raise ValueError(f"item key must hold one item, got {key!r}")
            items[key[0]] = tid_lists
            total_tids += sum(len(tid_list) for tid_list in tid_lists)

    if current is not None:
        raise ValueError(f"unterminated group for prefix {current!r}")


def read_bucket_groups(bucket_path: str) -> Iterator[PrefixGroup]:
    """Read all prefix groups from a bucket artifact."""
    with open(bucket_path, "rb") as handle:
        yield from iter_bucket_groups(handle)
