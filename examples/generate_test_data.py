"""Generate data/sales.parquet for the example scripts.

Each row is the sales record of a shop: the product it sells,
its price, the day the record was taken and the units sold
during each day of the previous week (a 7 elements cell).
"""

import datetime
import os
import random
import sys

import pyarrow as pa
import pyarrow.parquet as pq

PRODUCTS = ["Dress", "Car", "Videogame", "Laptop", "TV"]
WEEK = 7


def generate(rows: int) -> pa.Table:
    first_day = datetime.date(2023, 1, 1)
    daily_sales = [random.randint(0, 10) for _ in range(rows * WEEK)]
    return pa.table(
        {
            "Product": [random.choice(PRODUCTS) for _ in range(rows)],
            "Price": [round(random.uniform(10, 100), 2) for _ in range(rows)],
            # Stored as text, dates are loaded as strings anyway.
            "Day": [
                (first_day + datetime.timedelta(days=random.randint(0, 364))).isoformat()
                for _ in range(rows)
            ],
            "Quantity": [
                sum(daily_sales[row * WEEK : (row + 1) * WEEK]) for row in range(rows)
            ],
            "DailySales": pa.FixedSizeListArray.from_arrays(
                pa.array(daily_sales, type=pa.int64()), WEEK
            ),
        }
    )


if __name__ == "__main__":
    rows = int(sys.argv[1]) if len(sys.argv) > 1 else 1000000
    os.makedirs("data", exist_ok=True)
    if not os.path.exists("data/sales.parquet"):
        pq.write_table(generate(rows), "data/sales.parquet")
