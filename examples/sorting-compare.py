import sys
import time

import psutil

from indexview.io import read_parquet
from indexview.view import TableView

try:
    sorting_type = sys.argv[1]
except IndexError:
    sorting_type = None

table = read_parquet("data/sales.parquet")
keys = [table.column_index("Product"), table.column_index("Price")]

proc = psutil.Process()
start = time.time()
if sorting_type == "view":
    # Only reorders the indices.
    view = TableView(table)
    view.sort_columns(keys)
elif sorting_type == "materialize":
    view = TableView(table)
    view.sort_columns(keys)
    view.new_table()
elif sorting_type == "arrow":
    table.to_arrow().sort_by([("Product", "ascending"), ("Price", "ascending")])
else:
    print("Sorting must be view, materialize or arrow")
    sys.exit(1)
end = time.time()

print(
    "TIME:",
    round(end - start, 1),
    "MEMORY:",
    proc.memory_full_info().rss // (1024 * 1024),
)
