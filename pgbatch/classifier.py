"""
pgbatch/classifier.py

Batch classifier: groups a simple-query message stream into result units.

Responsibilities:
- Collect contiguous row messages with the same column signature into one Table
- Seal the open Table when the signature changes, when a completion arrives,
  or when the input ends
- Emit one CommandComplete per completion message, in arrival order

Core design:
- A two-state machine: NoActiveTable or ActiveTable(header, rows, signature).
- The column signature is the only boundary between adjacent row-producing
  statements. Two adjacent statements returning identically named columns with
  no completion in between end up in the same Table.
- NULL values become the literal NULL_PLACEHOLDER, so a NULL and a text value
  equal to the placeholder cannot be told apart afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .errors import UnexpectedMessageError
from .messages import CommandCompleteMessage, Message, RowMessage
from .result import CommandComplete, Header, ResultUnit, Row, Table

logger = logging.getLogger(__name__)

NULL_PLACEHOLDER = "[null]"


@dataclass(frozen=True)
class NoActiveTable:
    """State: no table is being built."""


@dataclass
class ActiveTable:
    """
    State: a table is being built.

    Attributes:
        header: Header of the table in progress.
        rows: Rows collected so far.
        signature: Column names every further row must match to join this table.
    """
    header: Header
    rows: list[Row] = field(default_factory=list)
    signature: tuple[str, ...] = ()

    def seal(self) -> Table:
        """Freeze the collected rows into a Table."""
        return Table(header=self.header, rows=tuple(self.rows))


State = NoActiveTable | ActiveTable


def row_values(msg: RowMessage) -> tuple[str, ...]:
    """
    Extract text values of a row, replacing NULLs with NULL_PLACEHOLDER.

    Args:
        msg: Row message.

    Returns:
        Tuple of strings aligned with msg.columns.
    """
    return tuple(NULL_PLACEHOLDER if v is None else v for v in msg.values)


class BatchClassifier:
    """
    Incremental classifier for one batch.

    Feed messages in arrival order with feed(), then call finish() once the
    stream is exhausted. Each call returns the units sealed by it.
    """

    def __init__(self) -> None:
        self.state: State = NoActiveTable()

    def feed(self, msg: Message) -> list[ResultUnit]:
        """
        Consume one message.

        Args:
            msg: RowMessage or CommandCompleteMessage.

        Returns:
            Result units completed by this message (possibly empty).

        Raises:
            UnexpectedMessageError: for any other message variant.
        """
        if isinstance(msg, RowMessage):
            return self._on_row(msg)
        if isinstance(msg, CommandCompleteMessage):
            return self._on_command_complete(msg)

        raise UnexpectedMessageError(f"Unsupported message: {type(msg).__name__}")

    def finish(self) -> list[ResultUnit]:
        """
        Flush a table left open at the end of the batch.

        Returns:
            The trailing Table, if one was still being built.
        """
        return self._seal()

    def _seal(self) -> list[ResultUnit]:
        state = self.state
        if isinstance(state, NoActiveTable):
            return []
        table = state.seal()
        self.state = NoActiveTable()
        logger.debug("sealed table: columns=%s rows=%d", table.header.columns, len(table.rows))
        return [table]

    def _on_row(self, msg: RowMessage) -> list[ResultUnit]:
        current_columns = msg.columns
        row = Row(values=row_values(msg))

        state = self.state
        if isinstance(state, ActiveTable) and state.signature == current_columns:
            state.rows.append(row)
            return []

        # Either nothing is open yet or the signature changed.
        out = self._seal()
        self.state = ActiveTable(
            header=Header(columns=current_columns),
            rows=[row],
            signature=current_columns,
        )
        return out

    def _on_command_complete(self, msg: CommandCompleteMessage) -> list[ResultUnit]:
        out = self._seal()
        logger.debug("command complete: rows_affected=%d", msg.rows_affected)
        out.append(CommandComplete(rows_affected=msg.rows_affected))
        return out


def iter_results(messages: Iterable[Message]) -> Iterator[ResultUnit]:
    """
    Classify a message stream lazily.

    Units are yielded as soon as they are sealed, so this can sit directly on
    top of a connection reading messages as they arrive.

    Args:
        messages: Messages in arrival order.

    Yields:
        Result units in arrival order.
    """
    classifier = BatchClassifier()
    for msg in messages:
        yield from classifier.feed(msg)
    yield from classifier.finish()


def process_batches(messages: Iterable[Message]) -> list[ResultUnit]:
    """
    Classify a whole batch.

    Args:
        messages: Messages in arrival order.

    Returns:
        List of Table and CommandComplete units in arrival order.

    Raises:
        UnexpectedMessageError: if a message is neither a row nor a completion.
    """
    return list(iter_results(messages))
