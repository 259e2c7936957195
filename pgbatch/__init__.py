"""
pgbatch

Groups the flat message stream of a multi-statement simple-query batch into
tables and completion counts.
"""

from .classifier import BatchClassifier, iter_results, process_batches
from .messages import CommandCompleteMessage, Message, RowMessage
from .result import CommandComplete, Header, ResultUnit, Row, Table

__all__ = [
    "BatchClassifier",
    "CommandComplete",
    "CommandCompleteMessage",
    "Header",
    "Message",
    "ResultUnit",
    "Row",
    "RowMessage",
    "Table",
    "iter_results",
    "process_batches",
]
