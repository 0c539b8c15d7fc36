"""Helper utilities for tests."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from models.transaction import Transaction, TransactionKind


def make_transaction(
    kind: TransactionKind,
    amount: Union[str, int],
    category: str,
    timestamp: datetime,
    description: str = "",
    transaction_id: Optional[int] = None,
) -> Transaction:
    """Build a Transaction with a Decimal amount from a short argument list."""
    return Transaction(
        id=transaction_id,
        kind=kind,
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        timestamp=timestamp,
    )


def scenario_transactions() -> List[Transaction]:
    """One income and one expense in January 2024."""
    return [
        make_transaction(
            TransactionKind.INCOME,
            "1000",
            "Sales",
            datetime(2024, 1, 5),
            description="Jan sale",
            transaction_id=1,
        ),
        make_transaction(
            TransactionKind.EXPENSE,
            "200",
            "Rent",
            datetime(2024, 1, 10),
            transaction_id=2,
        ),
    ]
