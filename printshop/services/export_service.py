import csv
import io

from ..models.order import Order


def _csv_line(values) -> str:
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(values)
    return output.getvalue()


def generate_orders_csv(orders):
    """Genera el CSV línea por línea; todos los campos van entre comillas"""
    yield ",".join(Order.CSV_COLUMNS) + "\n"
    for order in orders:
        row = order.to_row()
        yield _csv_line("" if row[col] is None else row[col] for col in Order.CSV_COLUMNS)
