"""Tests for income/expense/net totals."""

from datetime import datetime
from decimal import Decimal

import pytest

from models.transaction import TransactionKind
from tests.helpers import make_transaction
from tools.aggregation import Totals, compute_totals, format_amount


class TestComputeTotals:
    """Tests for compute_totals function."""

    def test_scenario_totals(self, scenario):
        """Test income 1000 and expense 200 give net 800."""
        totals = compute_totals(scenario)

        assert totals.income == Decimal("1000")
        assert totals.expense == Decimal("200")
        assert totals.net == Decimal("800")

    def test_empty_is_zero(self):
        """Test totals over no transactions are all zero."""
        assert compute_totals([]) == Totals.zero()
        assert compute_totals([]).net == Decimal("0")

    def test_net_is_income_minus_expense(self):
        """Test the net balance identity over a mixed set, including a negative net."""
        transactions = [
            make_transaction(TransactionKind.INCOME, "10.10", "Sales", datetime(2024, 1, 1)),
            make_transaction(TransactionKind.EXPENSE, "99.99", "Rent", datetime(2024, 1, 2)),
            make_transaction(TransactionKind.EXPENSE, "0.01", "Fuel", datetime(2024, 1, 3)),
            make_transaction(TransactionKind.INCOME, "5", "Service", datetime(2024, 1, 4)),
        ]

        totals = compute_totals(transactions)

        assert totals.income == Decimal("15.10")
        assert totals.expense == Decimal("100.00")
        assert totals.net == totals.income - totals.expense
        assert totals.net == Decimal("-84.90")

    def test_decimal_sums_are_exact(self):
        """Test that amounts add without binary floating point drift."""
        transactions = [
            make_transaction(TransactionKind.INCOME, "0.1", "Sales", datetime(2024, 1, 1)),
            make_transaction(TransactionKind.INCOME, "0.2", "Sales", datetime(2024, 1, 2)),
        ]

        assert compute_totals(transactions).income == Decimal("0.3")

    def test_accepts_generator(self, scenario):
        """Test totals over a one-shot iterable."""
        totals = compute_totals(t for t in scenario)

        assert totals.net == Decimal("800")

    def test_unknown_kind_fails_fast(self):
        """Test that a transaction with a bad kind raises instead of being skipped."""
        bad = make_transaction(TransactionKind.INCOME, "5", "Bank", datetime(2024, 1, 1))
        # Records are checked on construction, so corrupt one after the fact
        object.__setattr__(bad, "kind", "transfer")

        with pytest.raises(ValueError, match="unknown kind"):
            compute_totals([bad])


class TestFormatAmount:
    """Tests for format_amount function."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("1000"), "1000.00"),
            (Decimal("12.5"), "12.50"),
            (Decimal("0.005"), "0.01"),
            (Decimal("2.344"), "2.34"),
            (Decimal("-84.9"), "-84.90"),
        ],
    )
    def test_two_decimals(self, value, expected):
        """Test amounts always render with exactly two decimals."""
        assert format_amount(value) == expected
