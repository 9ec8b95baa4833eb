from indexview.aggregate import mean_column
from indexview.io import read_parquet
from indexview.metric import closest_view_row
from indexview.utils.tabulate import tabulate
from indexview.view import TableView

table = read_parquet("data/sales.parquet")
product = table.column_index("Product")
price = table.column_index("Price")
daily = table.column_index("DailySales")

view = TableView(table)
view.filter(lambda t, row: t.column(product).string_at(row) == "Laptop")
view.sort_column(price, ascending=False)
print(tabulate(view, max_rows=10))
print("Mean price:", mean_column(view, price))
# One mean for each day of the week.
print("Mean daily sales:", mean_column(view, daily))

# The laptop record whose week looks most like a weekend peak.
pos, distance = closest_view_row(view, [0, 0, 0, 0, 0, 10, 10], daily)
print("Weekend peak:", table.column(daily).elements()[view[pos] * 7 : view[pos] * 7 + 7], distance)
