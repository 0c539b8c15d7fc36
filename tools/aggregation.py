"""Income, expense, and net totals over transaction lists."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from models.transaction import Transaction, TransactionKind

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Totals:
    income: Decimal
    expense: Decimal
    net: Decimal

    @classmethod
    def zero(cls) -> "Totals":
        return cls(income=Decimal("0"), expense=Decimal("0"), net=Decimal("0"))


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expense amounts and derive the net balance.

    The same function serves the overall summary, any filtered subset, and any
    single period bucket.

    Args:
        transactions: Transactions to total. May be empty.

    Returns:
        Totals with net = income - expense. All zero for empty input.

    Raises:
        ValueError: If a transaction has a kind other than income or expense.
    """
    income_total = Decimal("0")
    expense_total = Decimal("0")

    for transaction in transactions:
        if transaction.kind == TransactionKind.INCOME:
            income_total += transaction.amount
        elif transaction.kind == TransactionKind.EXPENSE:
            expense_total += transaction.amount
        else:
            raise ValueError(
                f"Transaction {transaction.id} has unknown kind {transaction.kind!r}"
            )

    return Totals(
        income=income_total,
        expense=expense_total,
        net=income_total - expense_total,
    )


def format_amount(value: Decimal) -> str:
    """Render an amount with exactly two decimals, rounding half up."""
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))
