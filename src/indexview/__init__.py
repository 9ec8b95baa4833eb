"""indexview

Sort, filter and aggregate the rows of columnar tables
without copying them.

indexview is built around two components:

* The **storage**, :mod:`indexview.storage`, which defines tables made
  of typed columns backed by Apache Arrow, where each row of a column
  can hold a multi dimensional cell of elements.
* The **views**, :mod:`indexview.view`, an indexed overlay on top of a
  table that reorders and selects rows by only changing a list of
  indices, and can materialize them into a new table when needed.

On top of them :mod:`indexview.aggregate` provides common statistics,
:mod:`indexview.metric` nearest pattern lookups and :mod:`indexview.xy`
the data needed to plot the rows of a view.

>>> from indexview import Table, TableView
>>> view = TableView(Table.from_pydict({"n_legs": [4, 2, 100]}))
>>> view.sort_column(0, ascending=False)
>>> view.new_table().to_arrow().column("n_legs").to_pylist()
[100, 4, 2]
"""

from . import aggregate, metric, storage, view
from .errors import (
    ColumnIndexError,
    ShapeMismatchError,
    TableError,
    UnsupportedColumnTypeError,
)
from .storage import Column, Table
from .view import TableView

__all__ = (
    "aggregate",
    "metric",
    "storage",
    "view",
    "Column",
    "Table",
    "TableView",
    "TableError",
    "ShapeMismatchError",
    "ColumnIndexError",
    "UnsupportedColumnTypeError",
)
