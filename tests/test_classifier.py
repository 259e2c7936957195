import pytest

from pgbatch import (
    BatchClassifier,
    CommandComplete,
    CommandCompleteMessage,
    Header,
    Row,
    RowMessage,
    Table,
    iter_results,
    process_batches,
)
from pgbatch.classifier import ActiveTable, NoActiveTable
from pgbatch.errors import UnexpectedMessageError


def row(cols, vals):
    return RowMessage(columns=cols, values=vals)


def table(cols, rows):
    return Table(header=Header(cols), rows=[Row(r) for r in rows])


def test_empty_batch():
    assert process_batches([]) == []


def test_rows_then_complete_then_trailing_rows():
    res = process_batches([
        row(["a", "b"], ["1", "2"]),
        row(["a", "b"], ["3", "4"]),
        CommandCompleteMessage(2),
        row(["x"], ["9"]),
        row(["x"], ["10"]),
    ])
    assert res == [
        table(["a", "b"], [["1", "2"], ["3", "4"]]),
        CommandComplete(2),
        table(["x"], [["9"], ["10"]]),
    ]


def test_null_becomes_placeholder():
    res = process_batches([row(["a"], [None])])
    assert res == [table(["a"], [["[null]"]])]


def test_empty_string_is_kept():
    res = process_batches([row(["a", "b"], ["", None])])
    assert res[0].as_lists() == [["", "[null]"]]


def test_signature_change_splits_without_complete():
    res = process_batches([
        row(["id"], ["1"]),
        row(["id"], ["2"]),
        row(["name"], ["bob"]),
    ])
    assert res == [
        table(["id"], [["1"], ["2"]]),
        table(["name"], [["bob"]]),
    ]


def test_permuted_columns_are_a_different_signature():
    res = process_batches([
        row(["a", "b"], ["1", "2"]),
        row(["b", "a"], ["2", "1"]),
    ])
    assert [t.columns for t in res] == [["a", "b"], ["b", "a"]]


def test_complete_splits_same_shape_tables():
    res = process_batches([
        row(["a"], ["1"]),
        CommandCompleteMessage(1),
        row(["a"], ["2"]),
        CommandCompleteMessage(1),
    ])
    assert res == [
        table(["a"], [["1"]]),
        CommandComplete(1),
        table(["a"], [["2"]]),
        CommandComplete(1),
    ]


def test_same_shape_without_complete_is_merged():
    # Two adjacent statements with identical columns cannot be told apart.
    res = process_batches([
        row(["a"], ["1"]),
        row(["a"], ["2"]),
    ])
    assert res == [table(["a"], [["1"], ["2"]])]


def test_zero_row_statements_produce_only_completions():
    res = process_batches([
        CommandCompleteMessage(0),
        CommandCompleteMessage(3),
    ])
    assert res == [CommandComplete(0), CommandComplete(3)]


def test_row_and_completion_counts_are_preserved():
    msgs = [
        CommandCompleteMessage(5),
        row(["a"], ["1"]),
        row(["b"], ["1"]),
        row(["b"], [None]),
        CommandCompleteMessage(2),
        row(["a", "b"], ["1", "2"]),
        CommandCompleteMessage(7),
        row(["a"], ["3"]),
    ]
    res = process_batches(msgs)

    tables = [u for u in res if isinstance(u, Table)]
    completes = [u for u in res if isinstance(u, CommandComplete)]
    assert sum(len(t) for t in tables) == 5
    assert [c.rows_affected for c in completes] == [5, 2, 7]
    assert isinstance(res[-1], Table)


def test_unknown_message_is_rejected():
    with pytest.raises(UnexpectedMessageError):
        process_batches([row(["a"], ["1"]), "RowDescription"])


def test_feed_reports_sealed_units():
    c = BatchClassifier()
    assert isinstance(c.state, NoActiveTable)

    assert c.feed(row(["a"], ["1"])) == []
    assert isinstance(c.state, ActiveTable)
    assert c.state.signature == ("a",)

    assert c.feed(row(["b"], ["2"])) == [table(["a"], [["1"]])]
    assert c.feed(CommandCompleteMessage(1)) == [table(["b"], [["2"]]), CommandComplete(1)]
    assert isinstance(c.state, NoActiveTable)
    assert c.finish() == []


def test_iter_results_yields_before_input_ends():
    def messages():
        yield row(["a"], ["1"])
        yield CommandCompleteMessage(1)
        raise AssertionError("consumed past the first completion")

    it = iter_results(messages())
    assert next(it) == table(["a"], [["1"]])
    assert next(it) == CommandComplete(1)


def test_zero_column_rows_group_together():
    res = process_batches([row([], []), row([], [])])
    assert res == [table([], [[], []])]


def test_seal_is_logged(caplog):
    with caplog.at_level("DEBUG", logger="pgbatch.classifier"):
        process_batches([row(["a", "b"], ["1", "2"]), CommandCompleteMessage(1)])
    assert "sealed table: columns=('a', 'b') rows=1" in caplog.text
    assert "command complete: rows_affected=1" in caplog.text
