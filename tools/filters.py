"""Transaction filtering by free text and relative time window."""

from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from models.transaction import Transaction


class TimeWindow(str, Enum):
    ALL = "all"
    LAST_WEEK = "week"
    LAST_MONTH = "month"
    LAST_YEAR = "year"


def window_cutoff(window: TimeWindow, now: datetime) -> Optional[datetime]:
    """Get the exclusive lower bound for a time window.

    The week window keeps the time of day. Month and year cutoffs fall at
    midnight of the target day, and use relativedelta, which clamps to the
    last valid day of the target month: 31 March minus one month is 28 (or
    29) February, and 29 February minus one year is 28 February.

    Args:
        window: The relative window.
        now: Reference point.

    Returns:
        The cutoff datetime, or None for TimeWindow.ALL.
    """
    if window == TimeWindow.ALL:
        return None
    if window == TimeWindow.LAST_WEEK:
        return now - timedelta(days=7)
    if window == TimeWindow.LAST_MONTH:
        return _start_of_day(now - relativedelta(months=1))
    if window == TimeWindow.LAST_YEAR:
        return _start_of_day(now - relativedelta(years=1))
    raise ValueError(f"Unknown time window: {window!r}")


def _start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def matches_query(transaction: Transaction, query: str) -> bool:
    """Case-insensitive substring match on category or description."""
    if not query:
        return True
    needle = query.lower()
    return (
        needle in transaction.category.lower()
        or needle in transaction.description.lower()
    )


def filter_transactions(
    transactions: Sequence[Transaction],
    query: str = "",
    window: TimeWindow = TimeWindow.ALL,
    now: Optional[datetime] = None,
) -> List[Transaction]:
    """Narrow a transaction list by time window, then by free text.

    Both conditions must hold. The input order is preserved.

    Args:
        transactions: Snapshot to filter, usually newest first from the store.
        query: Text to look for in category or description. Empty matches all.
        window: Relative time window ending at now.
        now: Reference point for the window. Defaults to datetime.now().

    Returns:
        A new list with the matching transactions.
    """
    cutoff = window_cutoff(window, now or datetime.now())

    result = list(transactions)
    if cutoff is not None:
        result = [t for t in result if t.timestamp > cutoff]

    # The query is matched as typed, surrounding spaces included
    if query:
        result = [t for t in result if matches_query(t, query)]

    return result


def filter_by_category(
    transactions: Sequence[Transaction], category: str
) -> List[Transaction]:
    """Keep transactions whose category is exactly `category` (case-sensitive).

    Unlike filter_transactions, there is no substring or case folding.
    """
    return [t for t in transactions if t.category == category]
