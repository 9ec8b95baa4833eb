"""Find the row of a column closest to a probe pattern.

Multi dimensional numeric columns are frequently used to store
patterns, one per row. A frequent need is to find which row
holds the pattern that is most similar to a given probe.

The similarity is measured through a metric function that
receives the probe and the cell of a row and returns a distance.
The metric must be *increasing*: larger values mean further apart.

>>> import pyarrow as pa
>>> from indexview.storage import Column
>>> patterns = Column.from_arrow(
...     pa.array([[0.0, 0.0], [1.0, 1.0], [5.0, 5.0]], type=pa.list_(pa.float64(), 2))
... )
>>> closest_row([1.0, 1.5], patterns)
(1, 0.25)
"""

import math
from typing import Callable, Sequence

import pyarrow as pa

from .errors import ShapeMismatchError, TableError, UnsupportedColumnTypeError
from .storage import Column, ElementKind
from .view import TableView

MetricFunc = Callable[[Sequence[float], Sequence[float]], float]


def sum_squares(a: Sequence[float], b: Sequence[float]) -> float:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(sum_squares(a, b))


def abs_diff(a: Sequence[float], b: Sequence[float]) -> float:
    """City-block distance, the sum of absolute differences."""
    return sum(abs(x - y) for x, y in zip(a, b))


def closest_row(
    probe: Sequence[float] | pa.Array | Column,
    column: Column,
    metric: MetricFunc = sum_squares,
) -> tuple[int, float]:
    """Return the row whose cell is closest to the probe and its distance.

    The size of the probe must match the cell size of the column,
    the check happens before any distance is computed.
    When the column has no rows, or no distance is smaller
    than infinity, the returned row is ``-1``.
    """
    _check_numeric(column)
    probe_values = _as_floats(probe)
    cells = _cell_reader(column, len(probe_values))
    best_row, best = -1, math.inf
    for row in range(column.rows):
        distance = metric(probe_values, cells(row))
        if distance < best:
            best_row, best = row, distance
    return best_row, best


def closest_view_row(
    view: TableView,
    probe: Sequence[float] | pa.Array | Column,
    col: int,
    metric: MetricFunc = sum_squares,
) -> tuple[int, float]:
    """Like :func:`closest_row` but only considering the rows of a view.

    The returned position is the logical row of the view.
    """
    if view.table is None:
        raise TableError("The view is not bound to any table")
    column = view.table.column(col)
    _check_numeric(column)
    probe_values = _as_floats(probe)
    cells = _cell_reader(column, len(probe_values))
    best_pos, best = -1, math.inf
    for pos, row in enumerate(view):
        distance = metric(probe_values, cells(row))
        if distance < best:
            best_pos, best = pos, distance
    return best_pos, best


def _check_numeric(column: Column) -> None:
    if column.kind is not ElementKind.NUMERIC:
        raise UnsupportedColumnTypeError(
            f"Distances can only be computed on numeric columns, got {column.arrow_type}"
        )


def _cell_reader(column: Column, probe_size: int) -> Callable[[int], list[float]]:
    csz = column.cell_size
    if csz != probe_size:
        raise ShapeMismatchError(
            f"Probe size {probe_size} does not match cell size {csz} of the column"
        )
    values = column.floats()

    def cell(row: int) -> list[float]:
        if not 0 <= row < column.rows:
            raise IndexError(f"Row {row} out of range for column with {column.rows} rows")
        return values[row * csz : (row + 1) * csz]

    return cell


def _as_floats(probe: Sequence[float] | pa.Array | Column) -> list[float]:
    if isinstance(probe, (pa.Array, pa.ChunkedArray)):
        probe = Column.from_arrow(probe)
    if isinstance(probe, Column):
        if probe.kind is not ElementKind.NUMERIC:
            raise UnsupportedColumnTypeError(f"Probe must be numeric, got {probe.arrow_type}")
        return probe.floats()
    try:
        return [float(v) for v in probe]
    except (TypeError, ValueError):
        raise UnsupportedColumnTypeError(f"Probe must be numeric, got {probe!r}") from None
