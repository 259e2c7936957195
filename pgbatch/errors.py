"""
pgbatch/errors.py

Centralized exception types for pgbatch.

This module defines:
- A common base exception for all pgbatch errors
- Errors raised while building input messages and result tables
- The contract-violation error raised by the batch classifier
- A decode error for recorded message streams, with line context
"""

from __future__ import annotations


class PgBatchError(Exception):
    """
    Base class for all pgbatch errors.

    Catching this exception allows callers (CLI or an embedding shell) to handle
    every pgbatch failure without swallowing unrelated exceptions.
    """


class InvalidMessageError(PgBatchError):
    """
    Raised when an input message is constructed with inconsistent fields.

    Examples:
      - A row message with more column names than values
      - A completion count that is negative or does not fit in 64 bits
    """


class UnexpectedMessageError(PgBatchError):
    """
    Raised when the classifier receives something other than a row message or
    a completion message.

    A simple-query batch only ever carries those two variants, so this signals a
    broken producer rather than a recoverable condition.
    """


class RowWidthError(PgBatchError):
    """Raised when a Table row does not have one value per header column."""


class StreamDecodeError(PgBatchError):
    """
    Raised when a line of a recorded message stream cannot be decoded.

    Args:
        message: Human readable explanation.
        line: Optional 1-based line number where the error occurred.
    """

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.line is None:
            return f"StreamDecodeError: {self.message}"
        return f"StreamDecodeError at line {self.line}: {self.message}"
