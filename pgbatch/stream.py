"""
pgbatch/stream.py

Decoder for recorded simple-query message streams in JSON Lines format.

Each non-blank line holds one message:

    {"type": "row", "fields": [["id", "1"], ["name", null]]}
    {"type": "command_complete", "rows_affected": 1}

Design notes:
- JSONL keeps recordings readable and diffable.
- Errors carry the 1-based line number of the offending record.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator

from .errors import InvalidMessageError, StreamDecodeError
from .messages import CommandCompleteMessage, Message, RowMessage

ROW = "row"
COMMAND_COMPLETE = "command_complete"


def _parse_fields(raw: Any) -> list[tuple[str, str | None]]:
    if not isinstance(raw, list):
        raise StreamDecodeError("'fields' must be a list of [name, value] pairs")

    pairs: list[tuple[str, str | None]] = []
    for item in raw:
        if not isinstance(item, list) or len(item) != 2:
            raise StreamDecodeError(f"Expected [name, value] pair, got {item!r}")
        name, value = item
        if not isinstance(name, str):
            raise StreamDecodeError(f"Column name must be a string, got {name!r}")
        if value is not None and not isinstance(value, str):
            raise StreamDecodeError(f"Value of column '{name}' must be a string or null")
        pairs.append((name, value))
    return pairs


def parse_message(obj: Any) -> Message:
    """
    Convert one decoded JSON record into a message.

    Args:
        obj: Decoded JSON value.

    Returns:
        RowMessage or CommandCompleteMessage.

    Raises:
        StreamDecodeError: on unknown types or malformed fields.
    """
    if not isinstance(obj, dict):
        raise StreamDecodeError("Record must be a JSON object")

    kind = obj.get("type")
    try:
        if kind == ROW:
            return RowMessage.from_pairs(_parse_fields(obj.get("fields")))
        if kind == COMMAND_COMPLETE:
            if "rows_affected" not in obj:
                raise StreamDecodeError("Missing 'rows_affected'")
            return CommandCompleteMessage(rows_affected=obj["rows_affected"])
    except InvalidMessageError as e:
        raise StreamDecodeError(str(e)) from e

    raise StreamDecodeError(f"Unknown message type: {kind!r}")


def _decode_lines(lines: Iterable[str | bytes]) -> Iterator[tuple[int, str]]:
    # Text streams decode ahead of the caller, so errors surface from next().
    lineno = 0
    it = iter(lines)
    while True:
        try:
            raw = next(it)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise StreamDecodeError(f"Invalid UTF-8: {e.reason}", line=lineno + 1) from e
        lineno += 1
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise StreamDecodeError(f"Invalid UTF-8: {e.reason}", line=lineno) from e
        yield lineno, raw


def parse_messages(lines: Iterable[str | bytes]) -> Iterator[Message]:
    """
    Decode messages from JSONL lines, skipping blank lines.

    Args:
        lines: Iterable of text or UTF-8 encoded byte lines (e.g. an open file).

    Yields:
        Messages in file order.

    Raises:
        StreamDecodeError: with the line number of the first bad record.
    """
    for lineno, line in _decode_lines(lines):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            raise StreamDecodeError(f"Invalid JSON: {e.msg}", line=lineno) from e
        try:
            yield parse_message(obj)
        except StreamDecodeError as e:
            raise StreamDecodeError(e.message, line=lineno) from e


def load_messages(path: str | Path) -> list[Message]:
    """
    Read a whole JSONL recording from disk.

    Args:
        path: File path.

    Returns:
        List of messages.
    """
    with Path(path).open("rb") as f:
        return list(parse_messages(f))
