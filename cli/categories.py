#!/usr/bin/env python3

import sys
from cli.transactions import format_transaction, log_totals
from models.transaction import TransactionKind
from tools.aggregation import Totals
from tools.analytics import analyze_category, distinct_categories
from tools.categories import suggested_categories
from tools.grouping import BucketOrder, Granularity
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the categories used by recorded transactions."""
    categories = distinct_categories(services.transactions.find_all())

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for name in categories:
        logger.info(name)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_suggest(args, services):
    """Show the category names offered when adding a transaction of a kind."""
    kind = TransactionKind(args.kind)
    names = suggested_categories(
        kind, services.transactions.find_all(), services.category_defaults
    )

    logger.info(f"\n{kind.value.capitalize()} categories:")
    for name in names:
        logger.info(f"  {name}")


def cmd_analyze(args, services):
    """Break one category down by week, month, or year."""
    transactions = services.transactions.find_all()

    if args.category not in distinct_categories(transactions):
        logger.error(f"Category '{args.category}' not found.")
        logger.info("Use 'python -m cli categories list' to see available categories.")
        sys.exit(1)

    analysis = analyze_category(
        transactions,
        args.category,
        Granularity(args.period),
        BucketOrder(args.order),
    )
    currency = services.config.currency_symbol

    logger.info(f"\n{analysis.category}: {analysis.count} transaction(s)")
    logger.info("=" * 80)
    log_totals(
        Totals(analysis.total_income, analysis.total_expense, analysis.net), currency
    )

    for label, period in analysis.per_period.items():
        logger.info(f"\n{label}  ({period.count} transaction(s))")
        logger.info("-" * 80)
        for t in period.transactions:
            logger.info(format_transaction(t))
        log_totals(period, currency, indent="  ")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="List, suggest, and analyze categories",
        description="Categories are derived from recorded transactions",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list", help="List categories in use"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories suggest
    suggest_parser = categories_subparsers.add_parser(
        "suggest", help="Show category names offered for a transaction kind"
    )
    suggest_parser.add_argument(
        "--kind",
        required=True,
        choices=[k.value for k in TransactionKind],
    )
    suggest_parser.set_defaults(func=cmd_suggest)

    # categories analyze
    analyze_parser = categories_subparsers.add_parser(
        "analyze",
        help="Break a category down by period",
        epilog="""
Examples:
  python -m cli categories analyze Rent --period month
  python -m cli categories analyze Sales --period week
        """,
    )
    analyze_parser.add_argument("category", help="Exact category name (case-sensitive)")
    analyze_parser.add_argument(
        "--period",
        choices=[g.value for g in Granularity],
        default=Granularity.MONTH.value,
        help="Period size (default: month)",
    )
    analyze_parser.add_argument(
        "--order",
        choices=[o.value for o in BucketOrder],
        default=BucketOrder.PERIOD.value,
        help="Period order: newest first (default) or by label text",
    )
    analyze_parser.set_defaults(func=cmd_analyze)
