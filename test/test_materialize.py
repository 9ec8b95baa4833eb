import math

import pyarrow as pa
import pytest

from indexview.storage import Table
from indexview.view import TableView

TEST_DATA = Table.from_arrow(
    pa.table(
        {
            "name": pa.array(["a", "b", None, "d"]),
            "value": pa.array([1.5, None, 3.5, 4.5]),
            "pos": pa.array(
                [[0, 1], [2, 3], [4, 5], [6, 7]], type=pa.list_(pa.int32(), 2)
            ),
            "grid": pa.array(
                [[[i, i + 1, i + 2], [i + 3, i + 4, i + 5]] for i in range(0, 24, 6)],
                type=pa.list_(pa.list_(pa.float64(), 3), 2),
            ),
        }
    )
)


def test_identity():
    table = TableView(TEST_DATA).new_table()
    assert table is not TEST_DATA
    assert table.equals(TEST_DATA)
    assert table.to_arrow().equals(TEST_DATA.to_arrow())


def test_identity_with_nan():
    data = Table.from_arrow(
        pa.table(
            {
                "value": pa.array([math.nan, 1.0, None]),
                "pos": pa.array(
                    [[0.0, math.nan], [math.nan, math.nan], [1.0, 2.0]],
                    type=pa.list_(pa.float64(), 2),
                ),
            }
        )
    )
    assert TableView(data).new_table().equals(data)

    view = TableView(data)
    view.indices = [2, 0]
    assert view.new_table().equals(Table.from_arrow(data.to_arrow().take([2, 0])))


def test_reordered_cells():
    view = TableView(TEST_DATA)
    view.indices = [3, 0]
    table = view.new_table()
    assert table.rows == 2
    data = table.to_arrow()
    assert data.column("name").to_pylist() == ["d", "a"]
    assert data.column("value").to_pylist() == [4.5, 1.5]
    assert data.column("pos").to_pylist() == [[6, 7], [0, 1]]
    assert data.column("grid").to_pylist() == [
        [[18.0, 19.0, 20.0], [21.0, 22.0, 23.0]],
        [[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]],
    ]


def test_nulls_are_copied():
    view = TableView(TEST_DATA)
    view.sort_column(0, ascending=False)
    data = view.new_table().to_arrow()
    assert data.column("name").to_pylist() == ["d", "b", "a", None]
    assert data.column("value").to_pylist() == [4.5, None, 1.5, 3.5]


def test_duplicated_rows():
    view = TableView(TEST_DATA)
    view.filter(lambda t, row: row == 1)
    view.add_index(1)
    view.add_index(2)
    table = view.new_table()
    assert table.rows == 3
    assert table.to_arrow().column("pos").to_pylist() == [[2, 3], [2, 3], [4, 5]]


@pytest.mark.parametrize("keep", [[], [0], [0, 2], [0, 1, 2, 3]])
def test_rows_match_view_length(keep):
    view = TableView(TEST_DATA)
    view.filter(lambda t, row: row in keep)
    table = view.new_table()
    assert table.rows == len(view) == len(keep)


def test_empty_view_keeps_schema():
    view = TableView(TEST_DATA)
    view.filter(lambda t, row: False)
    table = view.new_table()
    assert table.rows == 0
    assert table.schema() == TEST_DATA.schema()
    assert table.column_names == ["name", "value", "pos", "grid"]
    assert table.column(3).shape == (0, 2, 3)


def test_new_table_is_independent_from_view():
    view = TableView(TEST_DATA)
    view.sort_column(1, ascending=False)
    table = view.new_table()
    view.filter(lambda t, row: False)
    assert table.rows == 4
    assert TableView(table).indices == [0, 1, 2, 3]
