"""Row projection and summary lines shared by every report format."""

from typing import List, Sequence, Tuple

from models.transaction import Transaction
from tools.aggregation import Totals, format_amount

HEADERS = ["Date", "Type", "Category", "Description", "Amount"]

DATE_FORMAT = "%d/%m/%Y"


def project_row(transaction: Transaction) -> List[str]:
    """Project a transaction onto the report columns.

    Returns:
        [DD/MM/YYYY, KIND, category, description or "-", amount with 2 decimals]
    """
    return [
        transaction.timestamp.strftime(DATE_FORMAT),
        transaction.kind.value.upper(),
        transaction.category,
        transaction.description or "-",
        format_amount(transaction.amount),
    ]


def project_rows(transactions: Sequence[Transaction]) -> List[List[str]]:
    return [project_row(t) for t in transactions]


def summary_lines(summary: Totals) -> List[Tuple[str, str]]:
    """Labels and formatted amounts for the three trailing summary rows."""
    return [
        ("Total Income", format_amount(summary.income)),
        ("Total Expense", format_amount(summary.expense)),
        ("Net Balance", format_amount(summary.net)),
    ]
