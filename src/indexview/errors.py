"""Exceptions raised by indexview.

All errors are raised synchronously to the caller,
the library never logs and swallows a failure.

Most errors also inherit from the builtin exception
that matches their nature, so that code which
only cares about ``IndexError`` or ``ValueError``
keeps working without knowing about indexview.
"""


class TableError(Exception):
    """Base class for every error related to tables and views."""


class ShapeMismatchError(TableError, ValueError):
    """Sizes or shapes that are expected to match do not.

    For example a probe whose size differs from the cell size
    of the column it is compared against, or a column whose
    number of rows differs from the rest of the table.
    """


class ColumnIndexError(TableError, IndexError):
    """A column was referenced by an index or name that does not exist."""


class UnsupportedColumnTypeError(TableError, TypeError):
    """The Arrow type of a column can't be stored in a Table."""
