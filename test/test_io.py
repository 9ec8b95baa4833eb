import datetime
import os
import tempfile

import pyarrow as pa
import pyarrow.csv as csv
import pyarrow.parquet as pq
import pytest

from indexview.io import read_csv, read_parquet, read_table
from indexview.storage import ElementKind

MOCK_PYARROW_TABLE = pa.table({"col1": [1, 4, 7], "col2": ["a", "b", "c"], "col3": [0.5, 1.5, None]})

MOCK_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")
MOCK_PARQUET_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".parquet")


def setup_module():
    csv.write_csv(MOCK_PYARROW_TABLE, MOCK_CSV_FILE.name)
    MOCK_CSV_FILE.close()
    pq.write_table(MOCK_PYARROW_TABLE, MOCK_PARQUET_FILE.name)
    MOCK_PARQUET_FILE.close()


def teardown_module():
    os.unlink(MOCK_CSV_FILE.name)
    os.unlink(MOCK_PARQUET_FILE.name)


def test_read_csv():
    table = read_csv(MOCK_CSV_FILE.name)
    assert table.column_names == ["col1", "col2", "col3"]
    assert table.rows == 3
    assert table.column(1).elements() == ["a", "b", "c"]


def test_read_parquet():
    table = read_parquet(MOCK_PARQUET_FILE.name)
    assert table.rows == 3
    assert table.column(2).is_null(2)
    assert table.to_arrow().equals(MOCK_PYARROW_TABLE)


@pytest.mark.parametrize("filename", [MOCK_CSV_FILE.name, MOCK_PARQUET_FILE.name])
def test_read_table(filename):
    table = read_table(filename)
    assert table.column(0).elements() == [1, 4, 7]


def test_read_table_unsupported():
    with pytest.raises(NotImplementedError):
        read_table("data.json")


def test_read_csv_dates_as_strings(tmp_path):
    filename = tmp_path / "dates.csv"
    filename.write_text("Timestamp,Price\n2023-01-01 10:00:00,1.5\n2023-01-02 11:30:00,2.5\n")
    table = read_csv(str(filename))
    assert table.column(0).kind is ElementKind.STRING
    assert table.column(0).string_at(0).startswith("2023-01-01")
    assert table.column(1).float_at(1) == 2.5


def test_read_csv_all_missing_column(tmp_path):
    filename = tmp_path / "missing.csv"
    filename.write_text("a,b\n1,\n2,\n")
    table = read_csv(str(filename))
    assert table.column(1).kind is ElementKind.STRING
    assert table.column(1).is_null(0)
    assert table.column(1).string_at(1) == ""


def test_read_parquet_dates_as_strings(tmp_path):
    filename = str(tmp_path / "dates.parquet")
    pq.write_table(pa.table({"day": pa.array([datetime.date(2023, 1, 1)]), "v": [1]}), filename)
    table = read_parquet(filename)
    assert table.column(0).elements() == ["2023-01-01"]


def test_read_parquet_cell_column(tmp_path):
    filename = str(tmp_path / "sales.parquet")
    daily = pa.FixedSizeListArray.from_arrays(pa.array(range(14), type=pa.int64()), 7)
    pq.write_table(pa.table({"Day": ["2023-01-01", "2023-01-02"], "DailySales": daily}), filename)
    table = read_parquet(filename)
    assert table.column(1).shape == (2, 7)
    assert table.column(1).float_at(8) == 8.0
