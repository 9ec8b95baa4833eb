"""Command line interface to view the content of table files.

This module provides a command line interface that loads a file
with :mod:`indexview.io`, narrows and reorders its rows with a
:class:`indexview.view.TableView` and prints the result in a tabular
format using the :mod:`indexview.utils.tabulate` module.
"""

import argparse
import logging
import sys

import pyarrow as pa

from indexview.aggregate import AGGREGATIONS
from indexview.errors import TableError
from indexview.io import read_table
from indexview.utils import tabulate
from indexview.view import TableView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Filter, sort and aggregate a table file.")
    parser.add_argument("filename", type=str, help="CSV or Parquet file to load.")
    parser.add_argument(
        "-s",
        "--sort",
        action="append",
        default=[],
        help="Column to sort by. Can be provided multiple times.",
    )
    parser.add_argument(
        "--desc", action="store_true", help="Sort in descending order all the columns."
    )
    parser.add_argument(
        "-k",
        "--keep",
        action="append",
        default=[],
        help="Keep only rows where COLUMN=VALUE. Can be provided multiple times.",
    )
    parser.add_argument(
        "-a",
        "--agg",
        action="append",
        default=[],
        help=f"Print FUNC:COLUMN aggregate, FUNC one of {', '.join(AGGREGATIONS)}.",
    )
    parser.add_argument("-n", "--limit", type=int, default=20, help="Rows to print.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the command line arguments and print the view of the table."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table = read_table(args.filename)
        view = TableView(table)

        for keep in args.keep:
            if "=" not in keep:
                raise TableError(f"Invalid filter {keep!r}, expected COLUMN=VALUE")
            name, value = keep.split("=", 1)
            view.filter(_match(table.column_index(name), value))

        if args.sort:
            view.sort_columns(
                [table.column_index(name) for name in args.sort], ascending=not args.desc
            )

        aggregates = []
        for agg in args.agg:
            func, _, name = agg.partition(":")
            if func not in AGGREGATIONS or not name:
                raise TableError(f"Invalid aggregate {agg!r}, expected FUNC:COLUMN")
            values = AGGREGATIONS[func](view, table.column_index(name))
            aggregates.append((f"{func}({name})", values))
    except (OSError, pa.ArrowInvalid, NotImplementedError, TableError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(tabulate.tabulate(view, max_rows=args.limit))
    for label, values in aggregates:
        print(f"{label}: {', '.join(tabulate.format_value(v) for v in values)}")
    return 0


def _match(col: int, value: str):
    def predicate(table, row):
        column = table.column(col)
        return column.string_at(row * column.cell_size) == value

    return predicate


if __name__ == "__main__":
    sys.exit(main())
