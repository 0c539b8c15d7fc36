#!/usr/bin/env python3

import sys
from errors import TransactionNotFoundError, ValidationError
from models.draft import parse_transaction
from models.transaction import TransactionKind
from tools.aggregation import compute_totals, format_amount
from tools.filters import TimeWindow, filter_transactions
from tools.grouping import BucketOrder, Granularity, group_by_period
from logger import get_logger

logger = get_logger()


def format_transaction(transaction) -> str:
    """One-line listing of a transaction."""
    sign = "+" if transaction.kind == TransactionKind.INCOME else "-"
    description = f"  {transaction.description}" if transaction.description else ""
    return (
        f"[{transaction.id}] {transaction.timestamp:%d %b %Y}  "
        f"{sign}{format_amount(transaction.amount):>12}  "
        f"{transaction.category}{description}"
    )


def log_totals(totals, currency_symbol: str, indent: str = "") -> None:
    logger.info(f"{indent}Income:  {currency_symbol}{format_amount(totals.income)}")
    logger.info(f"{indent}Expense: {currency_symbol}{format_amount(totals.expense)}")
    logger.info(f"{indent}Net:     {currency_symbol}{format_amount(totals.net)}")


def cmd_add(args, services):
    """Add a new transaction.

    Args:
        args: Parsed command-line arguments with kind, amount, category,
              description and date
        services: Services container with the transactions service
    """
    data = {
        "kind": args.kind,
        "amount": args.amount,
        "category": args.category,
        "description": args.description,
    }
    if args.date:
        data["timestamp"] = args.date

    try:
        transaction = parse_transaction(data)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    created = services.transactions.create(transaction)

    logger.info(f"✓ Transaction added with ID: {created.id}")
    logger.info(f"  {format_transaction(created)}")


def cmd_edit(args, services):
    """Replace fields of an existing transaction, keeping its ID."""
    existing = services.transactions.find(args.transaction_id)
    if not existing:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)

    data = {
        "kind": args.kind or existing.kind.value,
        "amount": args.amount if args.amount is not None else existing.amount,
        "category": args.category or existing.category,
        "description": (
            args.description if args.description is not None else existing.description
        ),
        "timestamp": args.date or existing.timestamp,
    }

    try:
        replacement = parse_transaction(data, transaction_id=existing.id)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        services.transactions.update(replacement)
    except TransactionNotFoundError as e:
        # Deleted between the lookup and the update
        logger.error(str(e))
        sys.exit(1)

    logger.info("✓ Transaction updated")
    logger.info(f"  {format_transaction(replacement)}")


def cmd_delete(args, services):
    """Delete a transaction by ID, asking for confirmation unless --yes."""
    transaction = services.transactions.find(args.transaction_id)
    if not transaction:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)

    if not args.yes:
        print(format_transaction(transaction))
        response = input("Delete this transaction? (yes/no): ")
        if response.strip().lower() != "yes":
            logger.info("Delete cancelled.")
            return

    try:
        services.transactions.delete(transaction.id)
    except TransactionNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Deleted transaction {transaction.id}")


def cmd_list(args, services):
    """List transactions, optionally filtered and grouped by period."""
    snapshot = services.transactions.find_all()
    transactions = filter_transactions(
        snapshot, args.search or "", TimeWindow(args.window)
    )
    currency = services.config.currency_symbol

    if not transactions:
        if snapshot:
            logger.info("No transactions match the current filter.")
        else:
            logger.info("No transactions recorded yet.")
        return

    if args.group_by:
        groups = group_by_period(
            transactions, Granularity(args.group_by), BucketOrder(args.order)
        )
        for label, members in groups.items():
            totals = compute_totals(members)
            logger.info(f"\n{label}  ({len(members)} transaction(s))")
            logger.info("=" * 80)
            for t in members:
                logger.info(format_transaction(t))
            logger.info("-" * 80)
            log_totals(totals, currency, indent="  ")
    else:
        for t in transactions:
            logger.info(format_transaction(t))

    logger.info("\n" + "=" * 80)
    logger.info(f"Total transactions: {len(transactions)}")
    log_totals(compute_totals(transactions), currency)


def add_filter_arguments(parser):
    """Add the --search and --window options shared by list and export."""
    parser.add_argument(
        "--search",
        help="Case-insensitive text to match in category or description",
    )
    parser.add_argument(
        "--window",
        choices=[w.value for w in TimeWindow],
        default=TimeWindow.ALL.value,
        help="Only include the last week, month, or year (default: all)",
    )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Add, edit, delete, and list transactions",
        description="Manage income and expense entries",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add",
        help="Add a transaction",
        epilog="""
Examples:
  python -m cli transactions add income 1000 Sales --description "Jan sale"
  python -m cli transactions add expense 200 Rent --date 2024-01-10
        """,
    )
    add_parser.add_argument(
        "kind", choices=[k.value for k in TransactionKind], help="income or expense"
    )
    add_parser.add_argument("amount", help="Non-negative amount, e.g. 12.50")
    add_parser.add_argument("category", help="Category name, e.g. Rent")
    add_parser.add_argument("--description", default="", help="Optional note")
    add_parser.add_argument(
        "--date",
        help="Date in YYYY-MM-DD or YYYY-MM-DDTHH:MM format (default: now)",
    )
    add_parser.set_defaults(func=cmd_add)

    # transactions edit
    edit_parser = transactions_subparsers.add_parser(
        "edit",
        help="Edit a transaction",
        description="Replace selected fields of a transaction; other fields are kept",
    )
    edit_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    edit_parser.add_argument("--kind", choices=[k.value for k in TransactionKind])
    edit_parser.add_argument("--amount")
    edit_parser.add_argument("--category")
    edit_parser.add_argument("--description")
    edit_parser.add_argument("--date")
    edit_parser.set_defaults(func=cmd_edit)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction"
    )
    delete_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Delete without asking for confirmation"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list",
        help="List transactions",
        epilog="""
Examples:
  python -m cli transactions list --search rent
  python -m cli transactions list --window month --group-by week
        """,
    )
    add_filter_arguments(list_parser)
    list_parser.add_argument(
        "--group-by",
        choices=[g.value for g in Granularity],
        help="Group transactions by week, month, or year",
    )
    list_parser.add_argument(
        "--order",
        choices=[o.value for o in BucketOrder],
        default=BucketOrder.PERIOD.value,
        help="Group order: newest period first (default) or by label text",
    )
    list_parser.set_defaults(func=cmd_list)
