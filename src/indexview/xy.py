"""Feed the rows of a view to XY plotting.

Plotting layers draw lines, points and labels out of pairs
of columns: one for the X axis and one for the Y axis.
They don't need a reordered copy of the table, iterating
over the logical rows of a view and resolving the values
through the physical rows is enough.

:class:`TableXY` exposes a contiguous range of the logical
rows of a view as a sequence of ``(x, y)`` points.

When X values start again from a lower value, for example
when the table contains multiple runs of the same experiment
one after the other, each run must be drawn as a separate line.
:func:`x_breaks` detects those points and :func:`xy_series`
builds one :class:`TableXY` for each run:

>>> from indexview.storage import Table
>>> from indexview.view import TableView
>>> view = TableView(Table.from_pydict({"epoch": [0, 1, 2, 0, 1], "loss": [5, 3, 2, 6, 4]}))
>>> x_breaks(view, 0)
[3, 5]
>>> [series.points() for series in xy_series(view, 0, 1)]
[[(0.0, 5.0), (1.0, 3.0), (2.0, 2.0)], [(0.0, 6.0), (1.0, 4.0)]]
"""

from .errors import ColumnIndexError, TableError, UnsupportedColumnTypeError
from .storage import Column, ElementKind
from .view import TableView


class TableXY:
    """XY points out of a range of logical rows of a view.

    String X columns are treated as nominal values, the X
    of each point is its position. Y columns must be numeric,
    a string column can instead provide the labels of the points.
    """

    def __init__(
        self,
        view: TableView,
        x_col: int,
        y_col: int,
        x_cell: int = 0,
        y_cell: int = 0,
        start: int = 0,
        end: int | None = None,
        label_col: int | None = None,
    ) -> None:
        """
        :param view: The view providing the rows.
        :param x_col: Position of the X column in the table.
        :param y_col: Position of the Y column in the table.
        :param x_cell: Which element of the X cell to use for multi dimensional columns.
        :param y_cell: Which element of the Y cell to use for multi dimensional columns.
        :param start: First logical row of the range.
        :param end: Logical row where the range ends (excluded), defaults to the view length.
        :param label_col: Position of the column providing the labels, if any.
        """
        if view.table is None:
            raise TableError("The view is not bound to any table")
        end = len(view) if end is None else end
        if not 0 <= start <= end <= len(view):
            raise IndexError(f"Invalid range {start}:{end} for view with {len(view)} rows")

        self.view = view
        self.start = start
        self.end = end
        self.x = view.table.column(x_col)
        self.y = view.table.column(y_col)
        if self.y.kind is not ElementKind.NUMERIC:
            raise UnsupportedColumnTypeError(f"Y column {y_col} must be numeric")
        self.x_cell = _check_cell(self.x, x_cell)
        self.y_cell = _check_cell(self.y, y_cell)
        self.label = None if label_col is None else view.table.column(label_col)

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"TableXY({self.start}:{self.end}, {self.view})"

    def xy(self, i: int) -> tuple[float, float]:
        """The point for the ``i``-th row of the range."""
        row = self._row(i)
        if self.x.kind is ElementKind.STRING:
            x = float(self.start + i)
        else:
            x = self.x.float_at(row * self.x.cell_size + self.x_cell)
        return x, self.y.float_at(row * self.y.cell_size + self.y_cell)

    def label_at(self, i: int) -> str:
        """The label for the ``i``-th row of the range."""
        if self.label is None:
            raise TableError("No label column was provided")
        return self.label.string_at(self._row(i) * self.label.cell_size)

    def points(self) -> list[tuple[float, float]]:
        return [self.xy(i) for i in range(len(self))]

    def _row(self, i: int) -> int:
        if not 0 <= i < len(self):
            raise IndexError(f"Point {i} out of range for {len(self)} points")
        return self.view[self.start + i]


def x_breaks(view: TableView, x_col: int, x_cell: int = 0) -> list[int]:
    """Logical rows where each run of increasing X values ends.

    The last entry is always the length of the view,
    so consecutive entries delimit the runs.
    An empty view has no runs.
    """
    if view.table is None:
        raise TableError("The view is not bound to any table")
    column = view.table.column(x_col)
    if column.kind is not ElementKind.NUMERIC:
        return [len(view)] if len(view) else []
    _check_cell(column, x_cell)

    breaks = []
    previous = None
    for pos, row in enumerate(view):
        x = column.float_at(row * column.cell_size + x_cell)
        if previous is not None and x < previous:
            breaks.append(pos)
        previous = x
    if len(view):
        breaks.append(len(view))
    return breaks


def xy_series(view: TableView, x_col: int, y_col: int, **kwargs) -> list[TableXY]:
    """One :class:`TableXY` for each run of increasing X values."""
    series = []
    start = 0
    for end in x_breaks(view, x_col, kwargs.get("x_cell", 0)):
        series.append(TableXY(view, x_col, y_col, start=start, end=end, **kwargs))
        start = end
    return series


def _check_cell(column: Column, cell: int) -> int:
    if not 0 <= cell < column.cell_size:
        raise ColumnIndexError(
            f"Cell element {cell} out of range for cells of size {column.cell_size}"
        )
    return cell
