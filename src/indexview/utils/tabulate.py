"""Format the rows of a view into a text table for print.

The `tabulate` function takes a :class:`indexview.view.TableView`
(or a :class:`indexview.storage.Table`) and formats its rows, in the
order of the view, into a text table.
It will truncate long strings, format floats to 2 decimal places,
and limit the number of rows to display.

Example:

    >>> from indexview.storage import Table
    >>> from indexview.view import TableView
    >>> table = Table.from_pydict({
    ...     "Product": ["Videogame", "Laptop", "Laptop"],
    ...     "Quantity": [8, 8, 7],
    ...     "Price": [66.5, 38.72, 77.46],
    ... })
    >>> view = TableView(table)
    >>> view.sort_column(2)
    >>> print(tabulate(view))
    Product   | Quantity | Price
    --------- | -------- | -----
    Laptop    | 8        | 38.72
    Videogame | 8        | 66.50
    Laptop    | 7        | 77.46
"""

from typing import Any

from ..errors import TableError
from ..storage import Column, Table
from ..view import TableView


def tabulate(data: TableView | Table, max_rows: int = 20) -> str:
    """Format a view or a table into a text table.

    Will produce a string like::

        Product   | Quantity | Price
        --------- | -------- | -----
        Videogame | 8        | 66.50
        Laptop    | 8        | 38.72
    """
    view = data if isinstance(data, TableView) else TableView(data)
    table = view.table
    if table is None:
        raise TableError("The view is not bound to any table")
    cols = table.column_names
    rows = [
        [format_cell(column, row) for column in table.columns]
        for row in view.indices[:max_rows]
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    text = "\n".join(header + separator + textrows)
    if len(view) > max_rows:
        text += f"\n... and {len(view) - max_rows} more rows"
    return text


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_cell(column: Column, row: int) -> str:
    """Format the cell of a row, multi element cells are shown as a list."""
    csz = column.cell_size
    elements = column.elements()[row * csz : (row + 1) * csz]
    if csz == 1:
        return format_value(elements[0])
    return format_value("[" + ", ".join(_format_element(v) for v in elements) + "]")


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    and truncate long strings.
    """
    v = _format_element(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v


def _format_element(v: Any) -> str:
    if v is None:
        return "null"
    elif isinstance(v, bool):
        return "true" if v else "false"
    elif isinstance(v, float):
        return f"{v:.2f}"
    return str(v)
