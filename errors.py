"""Cash Book error types."""

from typing import List, Optional


class CashbookError(Exception):
    """Base class for all Cash Book errors."""


class ValidationError(CashbookError):
    """Raised when user input cannot be turned into a transaction.

    Args:
        message: Summary of the failure.
        problems: Optional per-field messages, e.g. ["amount: not a number"].
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = problems or []
        if self.problems:
            message = f"{message}: {'; '.join(self.problems)}"
        super().__init__(message)


class StoreError(CashbookError):
    """Raised when the transaction store is unavailable or a record is missing."""


class TransactionNotFoundError(StoreError):
    """Raised when an update or delete targets an unknown transaction id."""


class ExportError(CashbookError):
    """Raised when a report cannot be rendered or handed off."""


class ConfigError(CashbookError):
    """Raised when the configuration file holds an unusable value."""
