#!/usr/bin/env python3

import sys
from pathlib import Path
from cli.transactions import add_filter_arguments, format_transaction, log_totals
from errors import ExportError
from reports import ExportFormat, get_available_formats
from tools.aggregation import compute_totals
from tools.filters import TimeWindow, filter_transactions
from logger import get_logger

logger = get_logger()


def cmd_summary(args, services):
    """Show overall totals and the most recent transactions."""
    totals = compute_totals(services.transactions.find_all())

    logger.info("\nFinancial Summary")
    logger.info("=" * 80)
    log_totals(totals, services.config.currency_symbol)

    recent = services.transactions.find_recent(args.recent)
    logger.info("\nRecent Transactions")
    logger.info("-" * 80)
    if not recent:
        logger.info("No transactions recorded yet.")
    for t in recent:
        logger.info(format_transaction(t))


def cmd_export(args, services):
    """Export transactions and their summary to a PDF, XLSX, or CSV file.

    Args:
        args: Parsed command-line arguments with format, output_dir, search, window
        services: Services container with transactions and reports services
    """
    transactions = filter_transactions(
        services.transactions.find_all(), args.search or "", TimeWindow(args.window)
    )

    if not transactions:
        logger.info("No transactions found for the specified criteria.")
        return

    # The totals written into the report are the ones shown here
    totals = compute_totals(transactions)
    log_totals(totals, services.config.currency_symbol)

    output_dir = Path(args.output_dir) if args.output_dir else services.config.export_dir

    try:
        result = services.reports.export(
            transactions, totals, ExportFormat(args.format)
        )
        path = services.reports.save(result, output_dir)
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)

    logger.info(f"✓ Exported {len(transactions)} transaction(s) to: {path}")


def setup_parser(subparsers):
    """Setup reports subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reports",
        help="Show the summary and export reports",
        description="Summaries and PDF/XLSX/CSV report exports",
    )

    reports_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    # reports summary
    summary_parser = reports_subparsers.add_parser(
        "summary", help="Show totals and recent transactions"
    )
    summary_parser.add_argument(
        "--recent",
        type=int,
        default=5,
        help="Number of recent transactions to show (default: 5)",
    )
    summary_parser.set_defaults(func=cmd_summary)

    # reports export
    export_parser = reports_subparsers.add_parser(
        "export",
        help="Export a report file",
        epilog="""
Examples:
  python -m cli reports export --format pdf
  python -m cli reports export --format csv --window month --output-dir ./out
        """,
    )
    export_parser.add_argument(
        "--format",
        required=True,
        choices=get_available_formats(),
        help="Report format",
    )
    export_parser.add_argument(
        "--output-dir",
        help="Directory to write the report to (default: export_dir from config)",
    )
    add_filter_arguments(export_parser)
    export_parser.set_defaults(func=cmd_export)
