import io
from decimal import Decimal
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from models.transaction import Transaction
from reports.common import HEADERS, project_row
from tools.aggregation import Totals

EXTENSION = "xlsx"
FILENAME_PREFIX = "cashbook"
MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_NAME = "CashBook"
AMOUNT_FORMAT = "0.00"

BOLD = Font(bold=True)


def render(
    transactions: Sequence[Transaction], summary: Totals, currency_symbol: str
) -> bytes:
    """
    Render transactions as a single-sheet XLSX workbook.

    Layout of the "CashBook" sheet:
    - Row 1: bold header
    - One row per transaction; amount is a numeric cell, the rest are text
      cells, so a value starting with "=" is never read as a formula
    - A blank separator row
    - Total Income: / Total Expense: / Net Balance: rows with numeric amounts
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    ws.append(HEADERS)
    for c in range(1, len(HEADERS) + 1):
        ws.cell(row=1, column=c).font = BOLD

    amount_col = len(HEADERS)
    for t in transactions:
        row = project_row(t)
        row[-1] = float(Decimal(row[-1]))
        ws.append(row)
        r = ws.max_row
        # User text stays text even when it looks like a formula
        for c in range(1, amount_col):
            ws.cell(row=r, column=c).data_type = "s"
        ws.cell(row=r, column=amount_col).number_format = AMOUNT_FORMAT

    ws.append([])
    for label, value in (
        ("Total Income:", summary.income),
        ("Total Expense:", summary.expense),
        ("Net Balance:", summary.net),
    ):
        ws.append([label, "", "", "", float(value)])
        r = ws.max_row
        ws.cell(row=r, column=1).font = BOLD
        ws.cell(row=r, column=amount_col).font = BOLD
        ws.cell(row=r, column=amount_col).number_format = AMOUNT_FORMAT

    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["B"].width = 10
    ws.column_dimensions["C"].width = 20
    ws.column_dimensions["D"].width = 40
    ws.column_dimensions["E"].width = 14

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
