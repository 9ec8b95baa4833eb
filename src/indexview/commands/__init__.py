"""Shell commands exposing indexview functionalities.

ViewTable
=========

``indexview-table`` loads a CSV or Parquet file, filters and sorts
its rows through a view and prints them together with aggregates::

    indexview-table sales.csv --keep Product=Laptop --sort Price --desc --agg mean:Price

Filters only support exact matches on the text of a column value,
more complex analyses are expected to use the Python API.
"""
