"""
pgbatch/render.py

Plain-text rendering of result units for console output.

Tables map 1:1 onto an aligned grid: one header line, a separator line, then
one line per row. Completions render as a short status message.
"""

from __future__ import annotations

from typing import Iterable

from .result import CommandComplete, ResultUnit, Table

# A SELECT with no output columns still yields rows, just empty ones.
EMPTY_HEADER = "(no columns)"


def format_table(table: Table) -> str:
    """
    Pretty-print a Table as an aligned ASCII grid.

    Args:
        table: Sealed table.

    Returns:
        A formatted string suitable for printing to console.
    """
    if not table.header.columns:
        return EMPTY_HEADER

    lines = [table.header.columns, *(r.values for r in table.rows)]
    widths = [max(len(cell) for cell in column) for column in zip(*lines)]

    def fmt_line(cells: Iterable[str]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    grid = [fmt_line(lines[0]), "-+-".join("-" * w for w in widths)]
    grid.extend(fmt_line(values) for values in lines[1:])
    return "\n".join(grid)


def format_result(unit: ResultUnit) -> str:
    """
    Render one result unit.

    Args:
        unit: Table or CommandComplete.

    Returns:
        Text block without a trailing newline.
    """
    if isinstance(unit, Table):
        return f"{format_table(unit)}\n({len(unit)} row(s))"
    if isinstance(unit, CommandComplete):
        return f"OK\nrows_affected={unit.rows_affected}"
    raise TypeError(f"Not a result unit: {type(unit).__name__}")


def format_results(units: Iterable[ResultUnit]) -> str:
    """Render all units, separated by blank lines."""
    return "\n\n".join(format_result(u) for u in units)
