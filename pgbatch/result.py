"""
pgbatch/result.py

Result objects produced by the batch classifier.

The classifier returns an ordered list of result units, each one of:
- Table: the rows of one result set, all sharing the same column signature
- CommandComplete: the affected-row count reported at the end of a statement

These are immutable, plain Python objects so they can be rendered by the CLI or
serialized to JSON without extra dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import RowWidthError


@dataclass(frozen=True)
class Header:
    """
    Ordered column names of a table.

    Attributes:
        columns: Column names; order is significant, names may repeat.
    """
    columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.columns, (str, bytes)):
            raise TypeError("Header columns must be a sequence of names, not a string")
        object.__setattr__(self, "columns", tuple(self.columns))

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class Row:
    """
    One table row.

    Attributes:
        values: Text values aligned with the owning table's header.
    """
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.values, (str, bytes)):
            raise TypeError("Row values must be a sequence of strings, not a string")
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Table:
    """
    A sealed result set.

    Attributes:
        header: Column names shared by every row.
        rows: Rows in arrival order.

    Raises:
        RowWidthError: if any row's width differs from the header's.
    """
    header: Header
    rows: tuple[Row, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))
        width = len(self.header)
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise RowWidthError(
                    f"Row {i} has {len(row)} value(s), header has {width} column(s)"
                )

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> list[str]:
        """Header column names as a list."""
        return list(self.header.columns)

    def as_lists(self) -> list[list[str]]:
        """Return row values as a list of lists (header excluded)."""
        return [list(r.values) for r in self.rows]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {"type": "table", "columns": self.columns, "rows": self.as_lists()}


@dataclass(frozen=True)
class CommandComplete:
    """
    Completion of a statement.

    Attributes:
        rows_affected: Affected-row count reported by the server.
    """
    rows_affected: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {"type": "command_complete", "rows_affected": self.rows_affected}


ResultUnit = Table | CommandComplete
