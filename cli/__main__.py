#!/usr/bin/env python3
"""
Cash Book CLI - record income and expenses, summarize them, and export reports.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Add, edit, delete, and list transactions
    reports      Show the summary and export reports
    categories   List, suggest, and analyze categories

Examples:
    python -m cli transactions add income 1000 Sales --description "Jan sale"
    python -m cli transactions list --window month --group-by week
    python -m cli reports summary
    python -m cli reports export --format pdf
    python -m cli categories analyze Rent --period month
"""

import sys
import argparse
from cli import transactions, reports, categories
from config import load_config
from errors import CashbookError
from services.base import open_services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cashbook",
        description="Cash Book - Income and expense tracking and reporting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    transactions.setup_parser(subparsers)
    reports.setup_parser(subparsers)
    categories.setup_parser(subparsers)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        setup_logging(config)

        with open_services(config) as services:
            args.func(args, services)
    except CashbookError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
