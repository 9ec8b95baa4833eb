import pyarrow as pa
import pytest

from indexview.errors import ColumnIndexError, TableError, UnsupportedColumnTypeError
from indexview.storage import Table
from indexview.view import TableView
from indexview.xy import TableXY, x_breaks, xy_series

TEST_DATA = Table.from_arrow(
    pa.table(
        {
            "epoch": pa.array([0, 1, 2, 0, 1]),
            "loss": pa.array([5.0, 3.0, 2.0, 6.0, None]),
            "run": pa.array(["a", "a", "a", "b", "b"]),
            "acc": pa.array(
                [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6], [0.7, 0.8], [0.9, 1.0]],
                type=pa.list_(pa.float64(), 2),
            ),
        }
    )
)


def test_points_follow_view_order():
    view = TableView(TEST_DATA)
    view.filter(lambda t, row: t.column(2).string_at(row) == "a")
    view.sort_column(1)
    xy = TableXY(view, 0, 1)
    assert len(xy) == 3
    assert xy.points() == [(2.0, 2.0), (1.0, 3.0), (0.0, 5.0)]


def test_cell_element():
    view = TableView(TEST_DATA)
    xy = TableXY(view, 0, 3, y_cell=1, start=1, end=3)
    assert xy.points() == [(1.0, 0.4), (2.0, 0.6)]


def test_labels():
    xy = TableXY(TableView(TEST_DATA), 0, 1, label_col=2)
    assert xy.label_at(3) == "b"
    with pytest.raises(TableError):
        TableXY(TableView(TEST_DATA), 0, 1).label_at(0)


def test_string_x_is_nominal():
    xy = TableXY(TableView(TEST_DATA), 2, 1, start=2)
    assert xy.xy(0) == (2.0, 2.0)


def test_invalid_arguments():
    view = TableView(TEST_DATA)
    with pytest.raises(UnsupportedColumnTypeError):
        TableXY(view, 0, 2)
    with pytest.raises(ColumnIndexError):
        TableXY(view, 0, 3, y_cell=2)
    with pytest.raises(ColumnIndexError):
        TableXY(view, 0, 7)
    with pytest.raises(IndexError):
        TableXY(view, 0, 1, start=3, end=2)
    with pytest.raises(IndexError):
        TableXY(view, 0, 1).xy(5)
    with pytest.raises(TableError):
        TableXY(TableView(), 0, 1)


def test_x_breaks():
    view = TableView(TEST_DATA)
    assert x_breaks(view, 0) == [3, 5]
    view.sort_column(0)
    assert x_breaks(view, 0) == [5]
    view.filter(lambda t, row: False)
    assert x_breaks(view, 0) == []


def test_xy_series():
    series = xy_series(TableView(TEST_DATA), 0, 3, y_cell=0)
    assert [(s.start, s.end) for s in series] == [(0, 3), (3, 5)]
    assert series[1].points() == [(0.0, 0.7), (1.0, 0.9)]
