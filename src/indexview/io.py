"""Load tables from files.

Files are read through Arrow readers and converted into
:class:`indexview.storage.Table` objects, so that views can
be built on top of them.

Only loading is supported, tables are never written back.
"""

import logging
import os

import pyarrow as pa
import pyarrow.csv
import pyarrow.parquet

from .storage import Table

logger = logging.getLogger(__name__)


def read_csv(filename: str, block_size: int | None = None) -> Table:
    """Load a table from a CSV file.

    :param filename: The path of the local CSV file.
    :param block_size: How many bytes to process at a time while parsing.
    """
    data = pa.csv.read_csv(
        filename, read_options=pa.csv.ReadOptions(block_size=block_size)
    )
    data = _as_supported_types(data)
    logger.debug("Loaded %d rows from %s", data.num_rows, filename)
    return Table.from_arrow(data)


def read_parquet(filename: str) -> Table:
    """Load a table from a Parquet file."""
    data = _as_supported_types(pa.parquet.read_table(filename))
    logger.debug("Loaded %d rows from %s", data.num_rows, filename)
    return Table.from_arrow(data)


def read_table(filename: str) -> Table:
    """Load a table picking the reader from the file extension."""
    _, ext = os.path.splitext(filename)
    if ext.lower() == ".csv":
        return read_csv(filename)
    elif ext.lower() == ".parquet":
        return read_parquet(filename)
    raise NotImplementedError(f"File format not supported: {filename}")


def _as_supported_types(data: pa.Table) -> pa.Table:
    """Convert the columns that can't be stored as numbers or strings.

    Dates and times, and the columns where every value was missing
    (which the readers load with the ``null`` type), become string columns.
    """
    for i, field in enumerate(data.schema):
        if pa.types.is_temporal(field.type) or pa.types.is_null(field.type):
            logger.debug("Loading column %r of type %s as strings", field.name, field.type)
            data = data.set_column(i, field.name, data.column(i).cast(pa.string()))
    return data
