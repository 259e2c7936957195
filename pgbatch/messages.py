"""
pgbatch/messages.py

Input message types for the batch classifier.

A simple-query batch sent to a PostgreSQL-compatible server comes back as a flat
stream of messages. Only two variants are ever fed to the classifier:
- RowMessage: one data row, as ordered (column name, value) pairs
- CommandCompleteMessage: end of a statement, with its affected-row count

Design notes:
- Values are text or None (SQL NULL); the simple-query protocol has no typed values.
- Columns and values are stored as parallel tuples so rows are cheap to compare.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import InvalidMessageError

MAX_ROWS_AFFECTED = 2**64 - 1


class Message:
    """Base class marker for all input messages."""


@dataclass(frozen=True)
class RowMessage(Message):
    """
    A single data row.

    Attributes:
        columns: Column names in declared order.
        values: One value per column; None stands for SQL NULL.
    """
    columns: tuple[str, ...]
    values: tuple[str | None, ...]

    def __post_init__(self) -> None:
        for name in ("columns", "values"):
            if isinstance(getattr(self, name), (str, bytes)):
                raise InvalidMessageError(f"Row {name} must be a sequence, not a string")
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "values", tuple(self.values))
        if len(self.columns) != len(self.values):
            raise InvalidMessageError(
                f"Row has {len(self.columns)} column(s) but {len(self.values)} value(s)"
            )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str | None]]) -> "RowMessage":
        """
        Build a row from ordered (column name, value) pairs.

        Args:
            pairs: Iterable of (name, value) tuples.

        Returns:
            RowMessage instance.
        """
        columns: list[str] = []
        values: list[str | None] = []
        for name, value in pairs:
            columns.append(name)
            values.append(value)
        return cls(columns=tuple(columns), values=tuple(values))

    def fields(self) -> Iterator[tuple[str, str | None]]:
        """Iterate the row as (column name, value) pairs."""
        return zip(self.columns, self.values)

    def get(self, idx: int) -> str | None:
        """Return the value at column position idx (None for NULL)."""
        return self.values[idx]


@dataclass(frozen=True)
class CommandCompleteMessage(Message):
    """
    End-of-statement marker.

    Attributes:
        rows_affected: Rows affected (or returned) by the statement.
    """
    rows_affected: int

    def __post_init__(self) -> None:
        n = self.rows_affected
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidMessageError(f"rows_affected must be an integer, got {n!r}")
        if n < 0 or n > MAX_ROWS_AFFECTED:
            raise InvalidMessageError(f"rows_affected out of range: {n}")
