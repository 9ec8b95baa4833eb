"""Common aggregations over the columns of a view.

:meth:`indexview.view.TableView.aggregate_column` accepts any
reduce function, this module provides the most common ones
and helpers computing statistics for every element of the cell
of a column.

For example, given a column of cells with two elements::

    row 0: [1, 10]
    row 1: [3, 30]

:func:`mean_column` would return ``[2.0, 20.0]``.

Null and NaN elements never contribute to the statistics,
when a cell element has no valid value across the rows
the mean, variance and standard deviation are ``nan``,
the minimum is ``inf`` and the maximum ``-inf``.

>>> from indexview.storage import Table
>>> from indexview.view import TableView
>>> view = TableView(Table.from_pydict({"v": [4, None, 2, 6]}))
>>> mean_column(view, 0)
[4.0]
>>> count_column(view, 0)
[3.0]
"""

import math
from typing import Callable

from .view import TableView

__all__ = (
    "agg_sum",
    "agg_sum_sq",
    "agg_count",
    "agg_min",
    "agg_max",
    "sum_column",
    "count_column",
    "min_column",
    "max_column",
    "mean_column",
    "var_column",
    "std_column",
    "AGGREGATIONS",
)


def agg_sum(idx: int, val: float, agg: float) -> float:
    return agg + val


def agg_sum_sq(idx: int, val: float, agg: float) -> float:
    return agg + val * val


def agg_count(idx: int, val: float, agg: float) -> float:
    return agg + 1


def agg_min(idx: int, val: float, agg: float) -> float:
    return min(agg, val)


def agg_max(idx: int, val: float, agg: float) -> float:
    return max(agg, val)


def sum_column(view: TableView, col: int) -> list[float]:
    """Sum of the values of each cell element."""
    return view.aggregate_column(col, 0.0, agg_sum)


def count_column(view: TableView, col: int) -> list[float]:
    """Number of valid (not null and not NaN) values of each cell element."""
    return view.aggregate_column(col, 0.0, agg_count)


def min_column(view: TableView, col: int) -> list[float]:
    return view.aggregate_column(col, math.inf, agg_min)


def max_column(view: TableView, col: int) -> list[float]:
    return view.aggregate_column(col, -math.inf, agg_max)


def mean_column(view: TableView, col: int) -> list[float]:
    """Mean of the values of each cell element."""
    sums = sum_column(view, col)
    counts = count_column(view, col)
    return [s / c if c else math.nan for s, c in zip(sums, counts)]


def var_column(view: TableView, col: int) -> list[float]:
    """Population variance of the values of each cell element.

    Computed in two passes, the first one computes the mean
    and the second one accumulates the squared deviations from it.
    The reduce function receives the flat element index, which
    modulo the cell size gives back the cell element.
    """
    means = mean_column(view, col)
    counts = count_column(view, col)
    csz = len(means)

    def squared_deviation(idx: int, val: float, agg: float) -> float:
        return agg + (val - means[idx % csz]) ** 2

    deviations = view.aggregate_column(col, 0.0, squared_deviation)
    return [d / c if c else math.nan for d, c in zip(deviations, counts)]


def std_column(view: TableView, col: int) -> list[float]:
    """Population standard deviation of the values of each cell element."""
    return [math.sqrt(v) for v in var_column(view, col)]


AGGREGATIONS: dict[str, Callable[[TableView, int], list[float]]] = {
    "sum": sum_column,
    "count": count_column,
    "min": min_column,
    "max": max_column,
    "mean": mean_column,
    "var": var_column,
    "std": std_column,
}
"""Aggregation helpers by name."""
