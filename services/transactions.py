"""Transaction service for database operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from errors import StoreError, TransactionNotFoundError
from models.draft import parse_transaction
from models.transaction import Transaction, TransactionKind
from logger import get_logger

logger = get_logger()

_TRANSACTION_SELECT_FIELDS = "id, kind, amount, category, description, timestamp"

# Newest first; ties keep the most recently inserted record on top
_ORDER_BY = "ORDER BY timestamp DESC, id DESC"


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, transaction: Union[Transaction, dict]) -> Transaction:
        """Insert a new transaction.

        Args:
            transaction: A Transaction without an ID, or a mapping of raw field
                         values which is validated first.

        Returns:
            A new Transaction carrying the store-assigned ID.

        Raises:
            ValidationError: If raw field values are invalid.
            StoreError: If the transaction already has an ID or the insert fails.
        """
        if isinstance(transaction, dict):
            transaction = parse_transaction(transaction)

        if transaction.id is not None:
            raise StoreError(
                f"Transaction already has ID {transaction.id}; use update instead"
            )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO transactions (kind, amount, category, description, timestamp)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    transaction.kind.value,
                    str(transaction.amount),
                    transaction.category,
                    transaction.description,
                    transaction.timestamp.isoformat(),
                ),
            )
            conn.commit()
            created = transaction.with_id(cursor.lastrowid)

        logger.debug(f"Created transaction {created.id} ({created.kind.value})")
        return created

    def update(self, transaction: Transaction) -> Transaction:
        """Replace a stored transaction with a new version carrying the same ID.

        Args:
            transaction: The replacement record. Its ID selects the row.

        Returns:
            The transaction as stored.

        Raises:
            StoreError: If the transaction has no ID.
            TransactionNotFoundError: If no row has that ID.
        """
        if transaction.id is None:
            raise StoreError("Cannot update a transaction that was never saved")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE transactions
                SET kind = ?, amount = ?, category = ?, description = ?, timestamp = ?
                WHERE id = ?
                """,
                (
                    transaction.kind.value,
                    str(transaction.amount),
                    transaction.category,
                    transaction.description,
                    transaction.timestamp.isoformat(),
                    transaction.id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise TransactionNotFoundError(
                    f"Transaction with ID {transaction.id} not found"
                )

        logger.debug(f"Updated transaction {transaction.id}")
        return transaction

    def delete(self, transaction_id: int) -> None:
        """Delete a transaction by ID.

        Raises:
            TransactionNotFoundError: If no row has that ID.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ?", (transaction_id,)
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise TransactionNotFoundError(
                    f"Transaction with ID {transaction_id} not found"
                )

        logger.debug(f"Deleted transaction {transaction_id}")

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_all(self) -> List[Transaction]:
        """Get a snapshot of every transaction, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions {_ORDER_BY}"
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_recent(self, limit: int = 5) -> List[Transaction]:
        """Get the newest transactions, for dashboard-style listings."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions {_ORDER_BY} LIMIT ?",
                (limit,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            kind=TransactionKind(row[1]),
            amount=Decimal(row[2]),
            category=row[3],
            description=row[4] or "",
            timestamp=datetime.fromisoformat(row[5]),
        )
