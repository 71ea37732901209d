"""Ledger engine: the operation set used by front ends.

Front ends pass raw values straight through; the engine delegates to the
stores and report tools and returns model objects or raises LedgerError
subclasses. It holds no business rules of its own.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Union

from logger import get_logger
from models.category import Category
from models.period import YearMonth
from models.summary import MonthlySummary
from models.transaction import Transaction, TransactionUpdate
from tools.export import to_csv_text, write_export
from tools.summary import get_monthly_summary, get_period_summary

logger = get_logger()


class LedgerEngine:
    """Facade over the category and transaction services.

    Args:
        services: Services container holding config and stores.
    """

    def __init__(self, services):
        self.services = services

    # Transactions

    def add_transaction(
        self,
        amount: Union[Decimal, int, str],
        description: Optional[str] = None,
        transaction_date: Union[date, str, None] = None,
        category_id: Union[int, str, None] = None,
    ) -> Transaction:
        """Record a transaction. The date defaults to today."""
        if transaction_date is None:
            transaction_date = date.today()
        transaction = self.services.transactions.create(
            amount, description, transaction_date, category_id
        )
        logger.info(
            f"Added transaction {transaction.id}: {transaction.amount} on "
            f"{transaction.transaction_date.isoformat()}"
        )
        return transaction

    def edit_transaction(
        self, transaction_id: int, changes: TransactionUpdate
    ) -> Transaction:
        """Apply only the supplied changes to a transaction."""
        transaction = self.services.transactions.update(transaction_id, changes)
        fields = ", ".join(changes.changes()) or "no fields"
        logger.info(f"Updated transaction {transaction_id} ({fields})")
        return transaction

    def delete_transaction(self, transaction_id: int) -> None:
        self.services.transactions.delete(transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")

    def get_transaction(self, transaction_id: int) -> Transaction:
        return self.services.transactions.get(transaction_id)

    def list_transactions(self, limit: Optional[int] = None) -> List[Transaction]:
        """List recent transactions, newest first.

        Args:
            limit: Maximum rows; defaults to the configured recent_limit.
        """
        if limit is None:
            limit = self.services.config.recent_limit
        return self.services.transactions.find_recent(limit)

    # Categories

    def add_category(self, name: str, description: Optional[str] = None) -> Category:
        category = self.services.categories.create(name, description)
        logger.info(f"Added category {category.id}: {category.name}")
        return category

    def list_categories(self) -> List[Category]:
        return self.services.categories.find_all()

    def get_category(self, category_id: int) -> Category:
        return self.services.categories.get(category_id)

    def find_category_by_name(self, name: str) -> Optional[Category]:
        return self.services.categories.find_by_name(name)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no transaction references."""
        self.services.categories.delete(category_id)
        logger.info(f"Deleted category {category_id}")

    # Reports

    def monthly_summary(
        self, year_month: Union[YearMonth, date, str, None] = None
    ) -> MonthlySummary:
        """Summarize a month by category. Defaults to the current month."""
        if year_month is None:
            year_month = YearMonth.current()
        return get_monthly_summary(self.services, year_month)

    def period_summary(
        self,
        start_month: Union[YearMonth, date, str],
        end_month: Union[YearMonth, date, str],
    ) -> Dict[str, MonthlySummary]:
        return get_period_summary(self.services, start_month, end_month)

    def export_text(self) -> str:
        """Get every transaction as CSV text, newest first."""
        return to_csv_text(self.services.transactions.find_all())

    def export_to_file(
        self, directory: Optional[Path] = None, today: Optional[date] = None
    ) -> Path:
        """Write every transaction to a dated CSV file.

        Args:
            directory: Output directory; defaults to the configured export_dir.
            today: Date used in the file name; defaults to today.

        Returns:
            Path of the written file.
        """
        directory = directory or self.services.config.export_dir
        output_path = write_export(self.export_text(), directory, today)
        logger.info(f"Exported transactions to {output_path}")
        return output_path
