"""Typed column storage backed by Arrow arrays.

A :class:`Column` stores all the elements of a table column
in a single flat :class:`pyarrow.Array` and keeps track of the
shape of the column: ``(rows, d1, d2, ...)``.

The trailing dimensions define the *cell* of each row,
a column with shape ``(3, 2)`` has three rows and each row
has a cell of two elements, which are stored one after the
other in the flat array::

    shape (3, 2) -> values [r0c0, r0c1, r1c0, r1c1, r2c0, r2c1]

Cells are represented in Arrow as (possibly nested)
``FixedSizeList`` arrays and the conversion happens in
:meth:`Column.from_arrow` and :meth:`Column.to_arrow`.

>>> import pyarrow as pa
>>> column = Column.from_arrow(pa.array([[1, 2], [3, 4]], type=pa.list_(pa.int64(), 2)))
>>> column.shape
(2, 2)
>>> column.row_cell_size()
(2, 2)
>>> column.float_at(3)
4.0
"""

import enum
import math
from dataclasses import dataclass
from typing import Any

import pyarrow as pa

from ..errors import ShapeMismatchError, TableError, UnsupportedColumnTypeError


class ElementKind(enum.Enum):
    """The kind of elements stored in a column.

    The views only need to know if they are dealing
    with numbers or with text, the actual Arrow type
    is retained by the column for materialization.
    """

    NUMERIC = "numeric"
    STRING = "string"

    @classmethod
    def from_arrow_type(cls, arrow_type: pa.DataType) -> "ElementKind":
        """Detect the element kind for an Arrow type."""
        if (
            pa.types.is_integer(arrow_type)
            or pa.types.is_floating(arrow_type)
            or pa.types.is_boolean(arrow_type)
        ):
            return cls.NUMERIC
        elif pa.types.is_string(arrow_type) or pa.types.is_large_string(arrow_type):
            return cls.STRING
        raise UnsupportedColumnTypeError(f"Unsupported column type: {arrow_type}")


@dataclass(frozen=True)
class ColumnSpec:
    """Everything needed to create a new column shaped like an existing one."""

    name: str
    kind: ElementKind
    cell_shape: tuple[int, ...]
    arrow_type: pa.DataType

    @property
    def cell_size(self) -> int:
        return math.prod(self.cell_shape)


class Column:
    """A column of typed elements with a per-row cell shape.

    Elements are addressed by their flat index, element ``j``
    of the cell of row ``r`` lives at ``r * cell_size + j``.

    Columns are never modified once created, to get
    a reordered column a :class:`ColumnBuilder` is used.
    """

    def __init__(self, values: pa.Array, shape: tuple[int, ...]) -> None:
        """
        :param values: The flat array of all the elements.
        :param shape: The shape of the column, rows first.
        """
        if isinstance(values, pa.ChunkedArray):
            values = values.combine_chunks()
        shape = tuple(int(d) for d in shape)
        if not shape:
            raise ShapeMismatchError("A column shape requires at least the rows dimension")
        if math.prod(shape) != len(values):
            raise ShapeMismatchError(
                f"Shape {shape} does not match the {len(values)} elements of the column"
            )
        self.kind = ElementKind.from_arrow_type(values.type)
        self.values = values
        self.shape = shape
        self._elements: list[Any] | None = None
        self._floats: list[float] | None = None
        self._strings: list[str] | None = None

    @classmethod
    def from_arrow(cls, array: pa.Array | pa.ChunkedArray) -> "Column":
        """Create a column from an Arrow array.

        Flat arrays become columns with a cell of one element,
        ``FixedSizeList`` arrays add one trailing dimension
        for each level of nesting.
        """
        if isinstance(array, pa.ChunkedArray):
            array = array.combine_chunks()
        rows = len(array)
        dims = []
        values = array
        while pa.types.is_fixed_size_list(values.type):
            if values.null_count:
                raise TableError(
                    "Null cells are not supported, null the elements of the cell instead"
                )
            dims.append(values.type.list_size)
            values = values.flatten()
        return cls(values, (rows, *dims))

    def to_arrow(self) -> pa.Array:
        """Convert the column back to an Arrow array with one entry per row."""
        array = self.values
        for size in reversed(self.shape[1:]):
            array = pa.FixedSizeListArray.from_arrays(array, size)
        return array

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return f"Column({self.kind.value}, shape={self.shape})"

    __repr__ = __str__

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def arrow_type(self) -> pa.DataType:
        return self.values.type

    @property
    def cell_shape(self) -> tuple[int, ...]:
        return self.shape[1:]

    @property
    def cell_size(self) -> int:
        return math.prod(self.shape[1:])

    def dim(self, i: int) -> int:
        """Size of the ``i``-th dimension, ``dim(0)`` is the number of rows."""
        return self.shape[i]

    def row_cell_size(self) -> tuple[int, int]:
        """Return the number of rows and the number of elements in each cell."""
        return self.rows, self.cell_size

    def spec(self, name: str) -> ColumnSpec:
        """Describe this column under the given name."""
        return ColumnSpec(name, self.kind, self.cell_shape, self.arrow_type)

    def elements(self) -> list[Any]:
        """All the elements as Python values, ``None`` for nulls.

        The conversion from Arrow happens only once,
        so that hot loops like sorting don't have to
        go through Arrow scalars for every element.
        """
        if self._elements is None:
            self._elements = self.values.to_pylist()
        return self._elements

    def floats(self) -> list[float]:
        """All the elements converted to float.

        Nulls and strings that are not numbers become ``nan``.
        """
        if self._floats is None:
            if self.kind is ElementKind.STRING:
                self._floats = [_parse_float(v) for v in self.elements()]
            else:
                self._floats = [math.nan if v is None else float(v) for v in self.elements()]
        return self._floats

    def strings(self) -> list[str]:
        """All the elements converted to str, nulls become an empty string."""
        if self._strings is None:
            self._strings = ["" if v is None else str(v) for v in self.elements()]
        return self._strings

    def float_at(self, i: int) -> float:
        """The element at flat index ``i`` as a float."""
        return self.floats()[self._check_index(i)]

    def string_at(self, i: int) -> str:
        """The element at flat index ``i`` as a string."""
        return self.strings()[self._check_index(i)]

    def is_null(self, i: int) -> bool:
        """If the element at flat index ``i`` is null."""
        return self.elements()[self._check_index(i)] is None

    def _check_index(self, i: int) -> int:
        # Negative indices must not wrap around to the end of the column.
        if not 0 <= i < len(self.values):
            raise IndexError(
                f"Element index {i} out of range for column of {len(self.values)} elements"
            )
        return i


class ColumnBuilder:
    """Fill a new column by copying cells from existing columns.

    The builder is sized upfront for a number of rows
    and is filled in order with :meth:`copy_cells`,
    each copy must start where the previous one ended.

    >>> import pyarrow as pa
    >>> source = Column.from_arrow(pa.array([10, 20, 30]))
    >>> builder = ColumnBuilder(source.spec("values"), rows=2)
    >>> builder.copy_cells(source, dst_offset=0, src_offset=2, count=1)
    >>> builder.copy_cells(source, dst_offset=1, src_offset=0, count=1)
    >>> builder.finish().elements()
    [30, 10]
    """

    def __init__(self, spec: ColumnSpec, rows: int) -> None:
        """
        :param spec: The name, type and cell shape of the column to build.
        :param rows: How many rows the built column will have.
        """
        self.spec = spec
        self.rows = rows
        self.size = rows * spec.cell_size
        self._chunks: list[pa.Array] = []
        self._filled = 0

    def copy_cells(
        self, source: Column, dst_offset: int, src_offset: int, count: int
    ) -> None:
        """Copy ``count`` contiguous elements of ``source`` into the new column.

        :param source: The column to copy the elements from.
        :param dst_offset: Flat index in the new column where the copy starts,
                           must be equal to the number of elements copied so far.
        :param src_offset: Flat index in ``source`` of the first element to copy.
        :param count: Number of elements to copy.
        """
        if source.arrow_type != self.spec.arrow_type:
            raise TableError(
                f"Can't copy {source.arrow_type} elements into a {self.spec.arrow_type} column"
            )
        if dst_offset != self._filled:
            raise ValueError(
                f"Cells must be copied in order, expected offset {self._filled} got {dst_offset}"
            )
        if count < 0 or src_offset < 0 or src_offset + count > len(source):
            raise IndexError(
                f"Can't copy {count} elements from offset {src_offset} "
                f"of a column with {len(source)} elements"
            )
        if self._filled + count > self.size:
            raise ShapeMismatchError(
                f"Copying {count} elements would overflow column of {self.size} elements"
            )
        self._chunks.append(source.values.slice(src_offset, count))
        self._filled += count

    def finish(self) -> Column:
        """Build the column out of all the copied cells.

        Concatenating the chunks allocates new buffers,
        so the returned column shares no memory with the sources.
        """
        if self._filled != self.size:
            raise ShapeMismatchError(
                f"Column {self.spec.name!r} was filled with {self._filled} "
                f"elements out of {self.size}"
            )
        if self._chunks:
            values = pa.concat_arrays(self._chunks)
        else:
            values = pa.array([], type=self.spec.arrow_type)
        self._chunks = []
        return Column(values, (self.rows, *self.spec.cell_shape))


def _parse_float(value: str | None) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except ValueError:
        return math.nan
