from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from errors import ValidationError


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    kind: TransactionKind
    amount: Decimal  # never negative; the kind carries the direction
    category: str
    description: str
    timestamp: datetime
    id: Optional[int] = None  # assigned by the store on insert

    def __post_init__(self):
        problems = []
        if not isinstance(self.kind, TransactionKind):
            problems.append(f"kind: must be one of income, expense, got {self.kind!r}")
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            problems.append(f"amount: must be a finite decimal, got {self.amount!r}")
        elif self.amount < 0:
            problems.append(f"amount: must not be negative, got {self.amount}")
        if not isinstance(self.category, str) or not self.category.strip():
            problems.append("category: must not be blank")
        if self.timestamp.tzinfo is not None:
            problems.append("timestamp: must be a naive local time")
        if problems:
            raise ValidationError("Invalid transaction", problems)

    def with_id(self, transaction_id: int) -> "Transaction":
        """Return a copy of this transaction carrying the store-assigned ID."""
        return replace(self, id=transaction_id)

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for database storage."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "amount": str(self.amount),
            "category": self.category,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }
