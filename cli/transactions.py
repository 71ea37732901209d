#!/usr/bin/env python3

import sys
from pathlib import Path

from errors import LedgerError
from logger import get_logger
from models.transaction import TransactionUpdate

logger = get_logger()


def _resolve_category(ledger, category_input):
    """Turn a category ID or name from the command line into an ID.

    Returns the input unchanged when it looks like an ID, so the ledger
    does the existence check.
    """
    if category_input is None:
        return None
    if category_input.strip().isdecimal():
        return category_input

    category = ledger.find_category_by_name(category_input)
    if not category:
        logger.error(f"Category '{category_input}' not found.")
        logger.info("Use 'python -m cli categories list' to see available categories.")
        sys.exit(1)
    return category.id


def _log_transaction(transaction):
    logger.info(f"  ID: {transaction.id}")
    logger.info(f"  Date: {transaction.transaction_date.isoformat()}")
    logger.info(f"  Amount: {transaction.amount:.2f}")
    if transaction.description:
        logger.info(f"  Description: {transaction.description}")
    if transaction.category_name:
        logger.info(f"  Category: {transaction.category_name}")


def _truncate(text, length):
    if not text:
        return ""
    return text if len(text) <= length else text[: length - 3] + "..."


def cmd_add(args, ledger):
    """Add a new transaction."""
    category_id = _resolve_category(ledger, args.category)

    try:
        transaction = ledger.add_transaction(
            args.amount, args.description, args.date, category_id
        )
    except LedgerError as e:
        logger.error(f"Error adding transaction: {e}")
        sys.exit(1)

    logger.info("✓ Transaction added successfully")
    _log_transaction(transaction)


def cmd_list(args, ledger):
    """List recent transactions, newest first."""
    try:
        transactions = ledger.list_transactions(args.limit)
    except LedgerError as e:
        logger.error(f"Error listing transactions: {e}")
        sys.exit(1)

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info(
        f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Description':<30} {'Category':<20}"
    )
    logger.info("-" * 84)
    for t in transactions:
        logger.info(
            f"{t.id:<6} {t.transaction_date.isoformat():<12} {t.amount:>12.2f}  "
            f"{_truncate(t.description, 30):<30} {t.category_name or '':<20}"
        )

    logger.info(f"\nShowing {len(transactions)} transaction(s)")


def cmd_edit(args, ledger):
    """Change selected fields of a transaction.

    Options that are not given leave the stored value alone.
    """
    if args.category is not None and args.clear_category:
        logger.error("--category and --clear-category cannot be used together")
        sys.exit(1)

    changes = TransactionUpdate()
    if args.amount is not None:
        changes.amount = args.amount
    if args.description is not None:
        changes.description = args.description
    if args.date is not None:
        changes.transaction_date = args.date
    if args.clear_category:
        changes.category_id = None
    elif args.category is not None:
        changes.category_id = _resolve_category(ledger, args.category)

    if changes.is_empty():
        logger.error("Nothing to change. Pass at least one field option.")
        sys.exit(1)

    try:
        transaction = ledger.edit_transaction(args.transaction_id, changes)
    except LedgerError as e:
        logger.error(f"Error updating transaction: {e}")
        sys.exit(1)

    logger.info("✓ Transaction updated successfully")
    _log_transaction(transaction)


def cmd_delete(args, ledger):
    """Delete a transaction by ID."""
    try:
        transaction = ledger.get_transaction(args.transaction_id)
    except LedgerError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("\nTransaction to delete:")
    _log_transaction(transaction)

    if not args.yes:
        confirm = input("\nAre you sure? (yes/no): ").strip().lower()
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        ledger.delete_transaction(args.transaction_id)
    except LedgerError as e:
        logger.error(f"Error deleting transaction: {e}")
        sys.exit(1)

    logger.info("✓ Transaction deleted successfully")


def _log_summary(summary):
    logger.info(f"\nMonthly Summary: {summary.year_month}")
    logger.info(f"{'Category':<24} {'Count':>6} {'Total':>14}")
    logger.info("-" * 46)
    for row in summary.per_category:
        logger.info(
            f"{row.category_name:<24} {row.transaction_count:>6} {row.total:>14.2f}"
        )
    logger.info("-" * 46)
    logger.info(f"{'TOTAL':<24} {'':>6} {summary.grand_total:>14.2f}")


def cmd_summary(args, ledger):
    """Show per-category totals for one month or a range of months."""
    try:
        if args.end_month:
            start = args.month or args.end_month
            summaries = list(ledger.period_summary(start, args.end_month).values())
        else:
            summaries = [ledger.monthly_summary(args.month)]
    except LedgerError as e:
        logger.error(f"Error generating summary: {e}")
        sys.exit(1)

    if not summaries:
        logger.info("No months in the requested range.")
        return

    for summary in summaries:
        _log_summary(summary)


def cmd_export(args, ledger):
    """Export all transactions to a dated CSV file."""
    output_dir = Path(args.output_dir) if args.output_dir else None

    try:
        output_path = ledger.export_to_file(output_dir)
    except (LedgerError, OSError) as e:
        logger.error(f"Error exporting transactions: {e}")
        sys.exit(1)

    logger.info(f"✓ Data exported to {output_path}")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Add, list, edit, delete, summarize and export transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser("add", help="Add a transaction")
    add_parser.add_argument("amount", help="Amount, e.g. 12.50 or -3.00")
    add_parser.add_argument("--description", "-d", help="Description")
    add_parser.add_argument(
        "--date", help="Date in YYYY-MM-DD format (default: today)"
    )
    add_parser.add_argument("--category", "-c", help="Category ID or name")
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List recent transactions"
    )
    list_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of transactions (default: from config)",
    )
    list_parser.set_defaults(func=cmd_list)

    # transactions edit
    edit_parser = transactions_subparsers.add_parser(
        "edit", help="Change selected fields of a transaction"
    )
    edit_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    edit_parser.add_argument("--amount", help="New amount")
    edit_parser.add_argument(
        "--description", "-d", help="New description (use \"\" to clear)"
    )
    edit_parser.add_argument("--date", help="New date in YYYY-MM-DD format")
    edit_parser.add_argument("--category", "-c", help="New category ID or name")
    edit_parser.add_argument(
        "--clear-category", action="store_true", help="Remove the category"
    )
    edit_parser.set_defaults(func=cmd_edit)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    delete_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # transactions summary
    summary_parser = transactions_subparsers.add_parser(
        "summary", help="Per-category totals for a month"
    )
    summary_parser.add_argument(
        "--month", help="Month in YYYY-MM format (default: current month)"
    )
    summary_parser.add_argument(
        "--end-month", help="Last month (YYYY-MM) to summarize a range ending there"
    )
    summary_parser.set_defaults(func=cmd_summary)

    # transactions export
    export_parser = transactions_subparsers.add_parser(
        "export", help="Export all transactions to CSV"
    )
    export_parser.add_argument(
        "--output-dir", help="Output directory (default: from config)"
    )
    export_parser.set_defaults(func=cmd_export)
