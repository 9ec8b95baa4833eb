"""Tables made of named columns sharing the same number of rows.

>>> import pyarrow as pa
>>> table = Table.from_pydict({"id": [3, 1, 2], "name": ["c", "a", "b"]})
>>> table.rows
3
>>> table.column_names
['id', 'name']
>>> table.column(table.column_index("name")).string_at(1)
'a'
"""

from typing import Any, Iterator

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import ColumnIndexError, ShapeMismatchError, TableError
from .columns import Column, ColumnBuilder, ColumnSpec


class Schema:
    """The ordered list of column specs of a table.

    The schema carries enough information to create
    a new empty table shaped like the one it came from.
    """

    def __init__(self, specs: list[ColumnSpec]) -> None:
        self.specs = list(specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self.specs)

    def __getitem__(self, i: int) -> ColumnSpec:
        return self.specs[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self.specs == other.specs

    def __str__(self) -> str:
        cols = ", ".join(
            f"{spec.name}: {spec.arrow_type}{list(spec.cell_shape) or ''}"
            for spec in self.specs
        )
        return f"Schema({cols})"

    __repr__ = __str__

    @property
    def names(self) -> list[str]:
        return [spec.name for spec in self.specs]

    def index(self, name: str) -> int:
        """Position of the column with the given name."""
        for idx, spec in enumerate(self.specs):
            if spec.name == name:
                return idx
        raise ColumnIndexError(f"Column {name!r} not found")

    def builders(self, rows: int) -> list[ColumnBuilder]:
        """Prepare one builder for each column of the schema."""
        return [ColumnBuilder(spec, rows) for spec in self.specs]


class Table:
    """An ordered sequence of named columns with a common number of rows.

    Tables are immutable by convention, the indexed views
    built on top of them never modify their columns.
    """

    def __init__(self, names: list[str], columns: list[Column]) -> None:
        """
        :param names: The name of each column.
        :param columns: The columns, in the same order as names.
        """
        if len(names) != len(columns):
            raise ValueError("Names and columns must have the same length")
        if len(set(names)) != len(names):
            raise TableError(f"Duplicate column names in {names}")

        rows = {column.rows for column in columns}
        if len(rows) > 1:
            raise ShapeMismatchError(
                f"All columns must have the same number of rows, got {sorted(rows)}"
            )

        self.column_names = list(names)
        self.columns = list(columns)
        self.rows = rows.pop() if rows else 0

    @classmethod
    def from_arrow(cls, data: pa.Table | pa.RecordBatch) -> "Table":
        """Create a table out of Arrow data.

        ``FixedSizeList`` columns become multi dimensional columns,
        see :meth:`indexview.storage.Column.from_arrow`.
        """
        return cls(
            list(data.column_names),
            [Column.from_arrow(data.column(i)) for i in range(data.num_columns)],
        )

    @classmethod
    def from_pydict(cls, data: dict[str, Any]) -> "Table":
        """Create a table from a ``{name: values}`` dictionary."""
        return cls.from_arrow(pa.table(data))

    @classmethod
    def from_schema(cls, schema: Schema, columns: list[Column]) -> "Table":
        """Create a table with the names of the schema and the given columns."""
        for spec, column in zip(schema, columns):
            if column.arrow_type != spec.arrow_type or column.cell_shape != spec.cell_shape:
                raise ShapeMismatchError(
                    f"Column {spec.name!r} does not match its schema: {column}"
                )
        return cls(schema.names, columns)

    @classmethod
    def empty(cls, schema: Schema) -> "Table":
        """Create a table with no rows and the given schema."""
        return cls.from_schema(schema, [builder.finish() for builder in schema.builders(0)])

    def __str__(self) -> str:
        return f"Table(columns={self.column_names}, rows={self.rows})"

    __repr__ = __str__

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    def column(self, i: int) -> Column:
        """Get a column by position.

        Unlike plain list indexing negative positions
        are not accepted.
        """
        if not 0 <= i < len(self.columns):
            raise ColumnIndexError(
                f"Column index {i} out of range for table with {len(self.columns)} columns"
            )
        return self.columns[i]

    def column_index(self, name: str) -> int:
        """Position of the column with the given name."""
        try:
            return self.column_names.index(name)
        except ValueError:
            raise ColumnIndexError(f"Column {name!r} not found") from None

    def column_by_name(self, name: str) -> Column:
        return self.columns[self.column_index(name)]

    def schema(self) -> Schema:
        """Names, kinds and shapes of the columns."""
        return Schema(
            [column.spec(name) for name, column in zip(self.column_names, self.columns)]
        )

    def to_arrow(self) -> pa.Table:
        """Convert the table to a :class:`pyarrow.Table`."""
        return pa.table(
            [column.to_arrow() for column in self.columns], names=self.column_names
        )

    def equals(self, other: "Table") -> bool:
        """If the two tables have the same schema and the same elements.

        NaN elements are equal to each other, so a table always equals itself.
        """
        if self.schema() != other.schema() or self.rows != other.rows:
            return False
        return all(
            _values_equal(a.values, b.values)
            for a, b in zip(self.columns, other.columns)
        )


def _values_equal(a: pa.Array, b: pa.Array) -> bool:
    if a.equals(b):
        return True
    if not pa.types.is_floating(a.type) or not a.type.equals(b.type):
        return False
    if not a.is_null().equals(b.is_null()):
        return False
    same = pc.or_kleene(pc.equal(a, b), pc.and_kleene(pc.is_nan(a), pc.is_nan(b)))
    return pc.all(pc.fill_null(same, True)).as_py()
