import csv
import io
from typing import Sequence

from models.transaction import Transaction
from reports.common import HEADERS, project_rows, summary_lines
from tools.aggregation import Totals

EXTENSION = "csv"
FILENAME_PREFIX = "cashbook"
MEDIA_TYPE = "text/csv"


def render(
    transactions: Sequence[Transaction], summary: Totals, currency_symbol: str
) -> bytes:
    """
    Render transactions as UTF-8 CSV.

    Layout:
    - Header: Date,Type,Category,Description,Amount
    - One line per transaction, amounts without a currency marker
    - A blank line
    - Total Income / Total Expense / Net Balance lines, with the currency
      symbol in the fourth column

    Fields containing commas, quotes or newlines are quoted by the csv module.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(HEADERS)
    writer.writerows(project_rows(transactions))

    writer.writerow([])
    for label, amount in summary_lines(summary):
        writer.writerow([label, "", "", currency_symbol, amount])

    return buffer.getvalue().encode("utf-8")
