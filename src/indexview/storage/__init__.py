"""Columnar storage for indexview tables.

Tables are made of :class:`Column` objects, each column
stores its elements in a flat Arrow array together with
a shape ``(rows, d1, d2, ...)`` where the trailing dimensions
define the cell of elements that belongs to every row.

Columns expose the few primitives that views need:

* typed element access by flat index (``float_at``, ``string_at``, ``is_null``)
* the element kind (numeric or string) to pick the right accessor
* the rows and cell size of the column
* a bulk copy of contiguous elements through :class:`ColumnBuilder`

The storage knows nothing about views, sorting or filtering.
"""

from .columns import Column, ColumnBuilder, ColumnSpec, ElementKind
from .table import Schema, Table

__all__ = ("Column", "ColumnBuilder", "ColumnSpec", "ElementKind", "Schema", "Table")
