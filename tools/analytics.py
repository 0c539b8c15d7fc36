"""Per-category analytics broken down by period."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Sequence

from models.transaction import Transaction
from tools.aggregation import compute_totals
from tools.filters import filter_by_category
from tools.grouping import BucketOrder, Granularity, period_groups


@dataclass
class PeriodSummary:
    income: Decimal
    expense: Decimal
    net: Decimal
    count: int
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class CategoryAnalysis:
    category: str
    granularity: Granularity
    total_income: Decimal
    total_expense: Decimal
    net: Decimal
    per_period: Dict[str, PeriodSummary] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return sum(summary.count for summary in self.per_period.values())


def distinct_categories(transactions: Sequence[Transaction]) -> List[str]:
    """Get the categories in use, in first-seen order.

    Categories are not stored on their own; this is recomputed from whatever
    snapshot the caller holds.
    """
    return list(dict.fromkeys(t.category for t in transactions))


def analyze_category(
    transactions: Sequence[Transaction],
    category: str,
    granularity: Granularity,
    order: BucketOrder = BucketOrder.PERIOD,
) -> CategoryAnalysis:
    """Total one category overall and per period.

    Args:
        transactions: Snapshot of all transactions.
        category: Exact, case-sensitive category name.
        granularity: Period size for the breakdown.
        order: Display order of the periods.

    Returns:
        CategoryAnalysis whose per_period maps each period label to the
        income, expense, net, count, and member transactions of that period.

    Example:
        analyze_category(txns, "Rent", Granularity.MONTH).per_period
        {
            "February 2024": PeriodSummary(income=Decimal("0"),
                                           expense=Decimal("200"), ...),
            "January 2024": PeriodSummary(...),
        }
    """
    matching = filter_by_category(transactions, category)
    overall = compute_totals(matching)

    per_period: Dict[str, PeriodSummary] = {}
    for group in period_groups(matching, granularity, order):
        totals = compute_totals(group.transactions)
        per_period[group.label] = PeriodSummary(
            income=totals.income,
            expense=totals.expense,
            net=totals.net,
            count=len(group.transactions),
            transactions=group.transactions,
        )

    return CategoryAnalysis(
        category=category,
        granularity=granularity,
        total_income=overall.income,
        total_expense=overall.expense,
        net=overall.net,
        per_period=per_period,
    )
