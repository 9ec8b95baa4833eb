"""Indexed views over tables.

A :class:`TableView` is a lightweight overlay on top of a
:class:`indexview.storage.Table` that allows to sort, filter
and aggregate the rows of the table without ever copying or
modifying its columns.

The view is nothing more than a reference to the table
and a list of indices, the *physical rows* of the table
in the order the view exposes them::

    table rows:   0: (id=3, v="b")
                  1: (id=1, v="a")
                  2: (id=2, v="a")

    view.indices: [1, 2]  -> logical row 0 is physical row 1
                             logical row 1 is physical row 2

Sorting and filtering only rearrange the indices,
which makes them cheap and composable:

>>> from indexview.storage import Table
>>> table = Table.from_pydict({"id": [3, 1, 2], "v": ["b", "a", "a"]})
>>> view = TableView(table)
>>> view.filter(lambda t, row: t.column(0).float_at(row) != 3)
>>> view.sort_columns([1, 0])
>>> list(view)
[1, 2]

When data physically organized in the order of the view
is needed, :meth:`TableView.new_table` materializes it
into a brand new table:

>>> view.new_table().column(0).elements()
[1, 2]

The table is shared by its owner and by any number of views,
views never extend or shorten its lifetime and the table
must not be modified while views over it are in use.
:meth:`TableView.clone` is the way to fork independent
index state over the same table.
"""

import logging
import math
from typing import Callable, Iterator

from .errors import ShapeMismatchError, TableError
from .storage import Column, ElementKind, Table

__all__ = ("TableView", "LessFunc", "FilterFunc", "ReduceFunc")

logger = logging.getLogger(__name__)

LessFunc = Callable[[int, int], bool]
"""Returns ``True`` if physical row ``a`` sorts before physical row ``b``."""

FilterFunc = Callable[[Table, int], bool]
"""Returns ``True`` if the physical row of the table must be kept."""

ReduceFunc = Callable[[int, float, float], float]
"""Combines ``(index, value, accumulator)`` into a new accumulator."""


class _SortKey:
    """Make physical rows sortable through a less function.

    Python sorting only relies on ``<``, so wrapping
    each row is enough to drive :meth:`list.sort`
    with an arbitrary comparison over physical rows.
    """

    __slots__ = ("row", "less")

    def __init__(self, row: int, less: LessFunc) -> None:
        self.row = row
        self.less = less

    def __lt__(self, other: "_SortKey") -> bool:
        return self.less(self.row, other.row)


class TableView:
    """An indexed view onto a Table.

    The view provides a specific ordering and selection
    of the rows of the table, defined by ``indices``.
    Entries of ``indices`` are physical rows of the table,
    the same physical row can appear more than once.
    """

    def __init__(self, table: Table | None = None) -> None:
        """
        :param table: The table the view is onto, the view
                      starts with sequential indices over all its rows.
        """
        self.table = table
        self.indices: list[int] = []
        self._less: LessFunc | None = None
        self.sequential()

    @classmethod
    def from_table(cls, table: Table) -> "TableView":
        """Create a view over all the rows of the table in their original order."""
        return cls(table)

    def __str__(self) -> str:
        return f"TableView({self.table}, indices={len(self.indices)})"

    __repr__ = __str__

    def set_table(self, table: Table) -> None:
        """Point the view to a new table, resetting to sequential indices."""
        self.table = table
        self.sequential()

    def sequential(self) -> None:
        """Reset the indices to all rows of the table in order."""
        if self.table is None:
            self.indices = []
            return
        self.indices = list(range(self.table.rows))

    def add_index(self, row: int) -> None:
        """Append a physical row to the view.

        The row is not validated against the table,
        operations reading the table will fail on
        out of range rows instead.
        """
        self.indices.append(row)

    def sort(self, less: LessFunc) -> None:
        """Sort the view using the given less function.

        The less function receives the physical rows of the table,
        as the logical positions have already been projected
        through the indices. Sorting is stable, rows that compare
        equal keep their previous relative order.
        """
        self._less = less
        self.indices.sort(key=lambda row: _SortKey(row, less))
        logger.debug("Sorted %d rows of %s", len(self.indices), self.table)

    def sort_column(self, col: int, ascending: bool = True) -> None:
        """Sort the view by the values of a column.

        String columns are compared as text, numeric columns as floats.
        Only valid for columns with one element per row.

        :param col: Position of the column in the table.
        :param ascending: Sort from the smallest value to the largest.
        """
        values = self._sort_values(col)
        self._check_rows()
        if ascending:
            self.sort(lambda a, b: values[a] < values[b])
        else:
            self.sort(lambda a, b: values[a] > values[b])

    def sort_columns(self, cols: list[int], ascending: bool = True) -> None:
        """Sort the view by the values of multiple columns.

        Columns are compared in the order they are provided,
        a column is only consulted when all the previous ones
        are equal. The same direction applies to all the columns,
        there is no per column direction.

        >>> from indexview.storage import Table
        >>> table = Table.from_pydict({"a": [2, 1, 2, 1], "b": ["x", "y", "w", "z"]})
        >>> view = TableView(table)
        >>> view.sort_columns([0, 1])
        >>> view.indices
        [1, 3, 2, 0]
        >>> view.sort_columns([0, 1], ascending=False)
        >>> view.indices
        [0, 2, 3, 1]
        """
        keys = [self._sort_values(col) for col in cols]
        self._check_rows()

        def less(a: int, b: int) -> bool:
            for values in keys:
                va, vb = values[a], values[b]
                if va < vb:
                    return ascending
                elif vb < va:
                    return not ascending
                # equal values, check next column
            return False

        self.sort(less)

    def filter(self, predicate: FilterFunc) -> None:
        """Remove from the view the rows for which the predicate is false.

        The predicate receives the table and the physical row.
        Retained rows keep their relative order, and as rows
        are only ever removed, filtering multiple times narrows
        the view further.
        """
        table = self._require_table()
        before = len(self.indices)
        self.indices = [row for row in self.indices if predicate(table, row)]
        logger.debug("Filtered %d rows down to %d", before, len(self.indices))

    def clone(self) -> "TableView":
        """Return a copy of the view with its own indices, sharing the table."""
        view = self.__class__()
        view.copy_from(self)
        return view

    def copy_from(self, other: "TableView") -> None:
        """Become a copy of another view, the indices are copied not shared."""
        self.table = other.table
        self.indices = list(other.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[int]:
        """Iterate over the physical rows in logical order."""
        return iter(self.indices)

    def __getitem__(self, i: int) -> int:
        return self.physical_row(i)

    def physical_row(self, i: int) -> int:
        """The physical row of the table for logical row ``i``."""
        return self.indices[self._check_position(i)]

    def swap(self, i: int, j: int) -> None:
        """Swap the logical rows ``i`` and ``j``."""
        self._check_position(i)
        self._check_position(j)
        self.indices[i], self.indices[j] = self.indices[j], self.indices[i]

    def less(self, i: int, j: int) -> bool:
        """Compare logical rows ``i`` and ``j`` with the last used less function."""
        if self._less is None:
            raise TableError("No less function available, sort the view first")
        return self._less(self.physical_row(i), self.physical_row(j))

    def new_table(self) -> Table:
        """Create a new table with the rows in the order of the view.

        This is the only operation that copies the column data,
        for each column the whole cell of every physical row
        is copied in logical order into the new table.
        """
        table = self._require_table()
        schema = table.schema()
        rows = len(self.indices)
        if rows == 0:
            return Table.empty(schema)

        builders = schema.builders(rows)
        for column, builder in zip(table.columns, builders):
            csz = builder.spec.cell_size
            for i, row in enumerate(self.indices):
                builder.copy_cells(column, i * csz, row * csz, csz)
        logger.debug("Materialized %d rows from %s", rows, table)
        return Table.from_schema(schema, [builder.finish() for builder in builders])

    def aggregate_column(
        self, col: int, initial: float, reduce: ReduceFunc
    ) -> list[float]:
        """Aggregate the values of a column over the rows of the view.

        Returns one value for each element of the cell, every
        element is aggregated independently across the rows.
        Null and NaN elements are skipped.

        The reduce function receives the index of the element
        (the physical row for single element cells, the flat
        element index otherwise), the element value and the
        current aggregated value and returns the new aggregated value.
        Rows are processed in the order of the view.

        :param col: Position of the column in the table.
        :param initial: Starting value of every aggregated value.
        :param reduce: The aggregation function.

        >>> from indexview.storage import Table
        >>> view = TableView(Table.from_pydict({"v": [1.0, float("nan"), 3.0, None]}))
        >>> view.aggregate_column(0, 0.0, lambda row, val, agg: agg + val)
        [4.0]
        """
        column = self._require_table().column(col)
        self._check_rows()
        _, csz = column.row_cell_size()
        values = column.floats()
        elements = column.elements()

        result = [initial] * csz
        if csz == 1:
            for row in self.indices:
                val = values[row]
                if elements[row] is not None and not math.isnan(val):
                    result[0] = reduce(row, val, result[0])
        else:
            for row in self.indices:
                start = row * csz
                for j in range(csz):
                    val = values[start + j]
                    if elements[start + j] is not None and not math.isnan(val):
                        result[j] = reduce(start + j, val, result[j])
        return result

    def _require_table(self) -> Table:
        if self.table is None:
            raise TableError("The view is not bound to any table")
        return self.table

    def _sort_values(self, col: int) -> list[float] | list[str]:
        # Resolve the accessor once per column, not for every comparison.
        column: Column = self._require_table().column(col)
        if column.cell_size != 1:
            raise ShapeMismatchError(
                f"Can only sort by columns with one element per row, "
                f"column {col} has cells of shape {column.cell_shape}"
            )
        if column.kind is ElementKind.STRING:
            return column.strings()
        return column.floats()

    def _check_rows(self) -> None:
        rows = self._require_table().rows
        for row in self.indices:
            if not 0 <= row < rows:
                raise IndexError(
                    f"Physical row {row} out of range for table with {rows} rows"
                )

    def _check_position(self, i: int) -> int:
        if not 0 <= i < len(self.indices):
            raise IndexError(
                f"Logical row {i} out of range for view with {len(self.indices)} rows"
            )
        return i
