"""Grouping of transactions into week, month, and year buckets."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Sequence

from models.transaction import Transaction


class Granularity(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class BucketOrder(str, Enum):
    """How buckets are ordered for display.

    PERIOD: newest period first, by the period's start date.
    LABEL: labels sorted descending as plain strings. This matches older
    listings, but puts "September 2024" before "March 2025".
    """

    PERIOD = "period"
    LABEL = "label"


@dataclass
class PeriodGroup:
    """One bucket: the period it covers and its transactions in input order."""

    label: str
    start: date
    transactions: List[Transaction] = field(default_factory=list)


def week_start(value: datetime) -> date:
    """Monday on or before the given timestamp."""
    day = value.date()
    return day - timedelta(days=day.weekday())


def period_start(value: datetime, granularity: Granularity) -> date:
    """Canonical start date of the period containing `value`.

    Two transactions share a bucket exactly when their period starts are equal.
    """
    if granularity == Granularity.WEEK:
        return week_start(value)
    if granularity == Granularity.MONTH:
        return date(value.year, value.month, 1)
    if granularity == Granularity.YEAR:
        return date(value.year, 1, 1)
    raise ValueError(f"Unknown granularity: {granularity!r}")


def period_label(start: date, granularity: Granularity) -> str:
    """Display label for a period.

    Examples:
        WEEK  -> "01 Jan - 07 Jan 2024"
        MONTH -> "January 2024"
        YEAR  -> "2024"
    """
    if granularity == Granularity.WEEK:
        end = start + timedelta(days=6)
        return f"{start:%d %b} - {end:%d %b %Y}"
    if granularity == Granularity.MONTH:
        return f"{start:%B %Y}"
    if granularity == Granularity.YEAR:
        return f"{start:%Y}"
    raise ValueError(f"Unknown granularity: {granularity!r}")


def period_groups(
    transactions: Sequence[Transaction],
    granularity: Granularity,
    order: BucketOrder = BucketOrder.PERIOD,
) -> List[PeriodGroup]:
    """Partition transactions into period buckets.

    Every transaction lands in exactly one bucket and keeps its input order
    within that bucket.

    Args:
        transactions: Transactions to group.
        granularity: Bucket size.
        order: Display order of the buckets.

    Returns:
        Buckets in display order. Empty input gives an empty list.
    """
    buckets: Dict[date, PeriodGroup] = {}

    for transaction in transactions:
        start = period_start(transaction.timestamp, granularity)
        if start not in buckets:
            buckets[start] = PeriodGroup(
                label=period_label(start, granularity), start=start
            )
        buckets[start].transactions.append(transaction)

    groups = list(buckets.values())
    if order == BucketOrder.LABEL:
        groups.sort(key=lambda g: g.label, reverse=True)
    else:
        groups.sort(key=lambda g: g.start, reverse=True)
    return groups


def group_by_period(
    transactions: Sequence[Transaction],
    granularity: Granularity,
    order: BucketOrder = BucketOrder.PERIOD,
) -> Dict[str, List[Transaction]]:
    """Group transactions by period label, in display order.

    Example:
        {
            "February 2024": [Transaction(...), ...],
            "January 2024": [Transaction(...), ...],
        }
    """
    return {
        group.label: group.transactions
        for group in period_groups(transactions, granularity, order)
    }
