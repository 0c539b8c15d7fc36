"""Input model for the add and edit transaction flows."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models.transaction import Transaction, TransactionKind


class TransactionDraft(BaseModel):
    """Raw user values for a transaction that has not been saved yet.

    Values usually arrive as strings from the command line, so the model
    coerces them: kind is matched case-insensitively, amount is parsed as a
    decimal and must be finite and non-negative, category must not be blank,
    and a timestamp with a UTC offset is converted to naive local time.
    """

    kind: TransactionKind
    amount: Decimal = Field(ge=0, allow_inf_nan=False)
    category: str = Field(min_length=1)
    description: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("category", "description", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("timestamp")
    @classmethod
    def _to_local_naive(cls, value: datetime) -> datetime:
        # Stored timestamps are naive local times; an explicit offset is converted
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    def to_transaction(self, transaction_id: Optional[int] = None) -> Transaction:
        """Build the immutable Transaction for this draft."""
        return Transaction(
            id=transaction_id,
            kind=self.kind,
            amount=self.amount,
            category=self.category,
            description=self.description,
            timestamp=self.timestamp,
        )


def parse_transaction(
    data: dict, transaction_id: Optional[int] = None
) -> Transaction:
    """Validate raw field values and return a Transaction.

    Args:
        data: Mapping of field name to raw value (kind, amount, category,
              description, timestamp). Missing optional fields use defaults.
        transaction_id: ID to carry over when editing an existing record.

    Returns:
        A validated Transaction.

    Raises:
        ValidationError: If any field is missing or invalid. Nothing is persisted.
    """
    try:
        draft = TransactionDraft.model_validate(data)
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError("Invalid transaction", problems) from e

    return draft.to_transaction(transaction_id)
