import math

import pyarrow as pa
import pytest

from indexview.errors import ShapeMismatchError, UnsupportedColumnTypeError
from indexview.metric import (
    abs_diff,
    closest_row,
    closest_view_row,
    euclidean,
    sum_squares,
)
from indexview.storage import Column, Table
from indexview.view import TableView

PATTERNS = Column.from_arrow(
    pa.array(
        [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [4.0, 4.0, 4.0], [1.0, 2.0, 1.0]],
        type=pa.list_(pa.float64(), 3),
    )
)


def test_metrics():
    assert sum_squares([1.0, 2.0], [3.0, 0.0]) == 8.0
    assert euclidean([0.0, 0.0], [3.0, 4.0]) == 5.0
    assert abs_diff([1.0, 2.0], [3.0, 0.0]) == 4.0


@pytest.mark.parametrize(
    "probe, expected",
    [
        ([0.0, 0.0, 0.0], (0, 0.0)),
        ([1.0, 1.0, 2.0], (1, 1.0)),
        ([3.0, 3.0, 3.0], (2, 3.0)),
    ],
)
def test_closest_row(probe, expected):
    assert closest_row(probe, PATTERNS) == expected


def test_closest_row_first_minimum_wins():
    assert closest_row([1.0, 1.5, 1.0], PATTERNS) == (1, 0.25)


def test_closest_row_custom_metric():
    row, distance = closest_row([1.0, 2.0, 1.0], PATTERNS, euclidean)
    assert row == 3
    assert distance == 0.0


def test_closest_row_arrow_probe():
    assert closest_row(pa.array([4.0, 4.0, 5.0]), PATTERNS) == (2, 1.0)


def test_closest_row_probe_size_mismatch():
    calls = []

    def metric(a, b):
        calls.append(1)
        return 0.0

    with pytest.raises(ShapeMismatchError):
        closest_row([1.0, 1.0], PATTERNS, metric)
    assert calls == []


def test_closest_row_string_column():
    with pytest.raises(UnsupportedColumnTypeError):
        closest_row(["a"], Column.from_arrow(pa.array(["a", "b"])))


@pytest.mark.parametrize("probe", [["a", "b", "c"], pa.array(["a", "b", "c"]), [None, 1.0, 1.0]])
def test_closest_row_string_probe(probe):
    with pytest.raises(UnsupportedColumnTypeError):
        closest_row(probe, PATTERNS)
    with pytest.raises(UnsupportedColumnTypeError):
        closest_view_row(TableView(Table(["patterns"], [PATTERNS])), probe, 0)


def test_closest_row_no_rows():
    empty = Column(pa.array([], type=pa.float64()), (0, 3))
    assert closest_row([1.0, 1.0, 1.0], empty) == (-1, math.inf)


def test_closest_view_row():
    view = TableView(Table(["patterns"], [PATTERNS]))
    view.filter(lambda t, row: row != 1)
    assert closest_view_row(view, [1.0, 1.0, 1.0], 0) == (2, 1.0)
