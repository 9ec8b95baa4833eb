import pyarrow as pa
import pytest

from indexview.errors import TableError
from indexview.storage import Table
from indexview.utils.tabulate import format_cell, format_value, tabulate
from indexview.view import TableView

TEST_DATA = Table.from_arrow(
    pa.table(
        {
            "name": pa.array(["Flamingo", None, "A very long animal name that is truncated"]),
            "n_legs": pa.array([2, 4, 100]),
            "size": pa.array([[1.5, 2.0], [3.0, 4.25], [0.5, 0.5]], type=pa.list_(pa.float64(), 2)),
        }
    )
)


def test_tabulate_table():
    assert tabulate(TEST_DATA) == "\n".join(
        [
            "name".ljust(30) + " | n_legs | " + "size".ljust(12),
            "-" * 30 + " | ------ | " + "-" * 12,
            "Flamingo".ljust(30) + " | 2      | [1.50, 2.00]",
            "null".ljust(30) + " | 4      | [3.00, 4.25]",
            "A very long animal name tha... | 100    | [0.50, 0.50]",
        ]
    )


def test_tabulate_view_order_and_limit():
    view = TableView(TEST_DATA)
    view.sort_column(1, ascending=False)
    text = tabulate(view, max_rows=2)
    lines = text.splitlines()
    assert lines[2].startswith("A very long animal name tha... | 100")
    assert lines[3].startswith("null")
    assert lines[-1] == "... and 1 more rows"


def test_tabulate_view_without_table():
    with pytest.raises(TableError):
        tabulate(TableView())


def test_format_value():
    assert format_value(1.0) == "1.00"
    assert format_value(True) == "true"
    assert format_value(None) == "null"
    assert format_value(7) == "7"


def test_format_cell():
    assert format_cell(TEST_DATA.column(2), 1) == "[3.00, 4.25]"
    assert format_cell(TEST_DATA.column(1), 2) == "100"
