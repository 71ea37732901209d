#!/usr/bin/env python3
"""
Tally CLI - Command-line interface for the personal ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Add, edit, list, summarize and export transactions
    categories   Manage categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli transactions add 12.50 -d "Lunch" -c "Food & Dining"
    python -m cli transactions edit 7 --amount 13.00
    python -m cli transactions summary --month 2025-01
    python -m cli transactions export
"""

import sys
import argparse
from cli import transactions, migrate, categories
from config import load_config
from services.base import Services
from services.ledger import LedgerEngine
from errors import LedgerError
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - Personal ledger for transactions and categories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)
            services = Services(config)

            # Ledger commands go through the engine; migrate works on the raw database
            if args.command in ("transactions", "categories"):
                args.func(args, LedgerEngine(services))
            elif args.command == "migrate":
                args.func(args, services.db_manager)
            else:
                args.func(args)
        except LedgerError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
