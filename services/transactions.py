"""Transaction service for database operations."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Union

from db.manager import write_transaction
from errors import NotFoundError, UnknownCategoryError
from models.period import YearMonth
from models.transaction import Transaction, TransactionUpdate
from parsing import (
    is_storable_id,
    parse_amount,
    parse_category_id,
    parse_date,
    parse_description,
    parse_limit,
    parse_year_month,
)

# SQL Query Constants
_TRANSACTION_SELECT = """
    SELECT t.id, t.amount_cents, t.description, t.transaction_date, t.category_id,
           t.created_at, t.updated_at, c.name
    FROM transactions t
    LEFT JOIN categories c ON t.category_id = c.id
"""

# Newest first; id breaks ties between entries on the same day
_TRANSACTION_ORDER = " ORDER BY t.transaction_date DESC, t.id DESC"

# Columns a TransactionUpdate may touch, keyed by update field name
_UPDATABLE_COLUMNS = {
    "amount": "amount_cents",
    "description": "description",
    "transaction_date": "transaction_date",
    "category_id": "category_id",
}


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(
        self,
        amount: Union[Decimal, int, str],
        description: Optional[str],
        transaction_date: Union[date, str],
        category_id: Union[int, str, None] = None,
    ) -> Transaction:
        """Create a single transaction in the database.

        All inputs are validated before anything is written.

        Args:
            amount: Signed amount with at most two decimal places.
            description: Optional free-form description.
            transaction_date: Date of the transaction (date or YYYY-MM-DD).
            category_id: Optional ID of an existing category.

        Returns:
            The created Transaction, joined with its category name.

        Raises:
            InvalidAmountError: If the amount is not valid.
            InvalidDateError: If the date is not valid.
            UnknownCategoryError: If the category does not exist.
        """
        amount_cents = parse_amount(amount)
        description = parse_description(description)
        parsed_date = parse_date(transaction_date)
        category_id = parse_category_id(category_id)
        timestamp = datetime.now().isoformat()

        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                self._check_category(conn, category_id)
                cursor = conn.execute(
                    """
                    INSERT INTO transactions
                        (amount_cents, description, transaction_date, category_id,
                         created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        amount_cents,
                        description,
                        parsed_date.isoformat(),
                        category_id,
                        timestamp,
                        timestamp,
                    ),
                )
                transaction_id = cursor.lastrowid

            return self._find(conn, transaction_id)

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Args:
            transaction_id: The transaction ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self._find(conn, transaction_id)

    def get(self, transaction_id: int) -> Transaction:
        """Get a single transaction by ID, failing if it does not exist.

        Raises:
            NotFoundError: If no transaction has this ID.
        """
        transaction = self.find(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")
        return transaction

    def find_recent(self, limit: int) -> List[Transaction]:
        """Get the most recent transactions.

        Args:
            limit: Maximum number of transactions to return.

        Returns:
            List of Transaction objects ordered by date (newest first), then
            by ID (highest first).

        Raises:
            InvalidLimitError: If limit is not a positive integer.
        """
        limit = parse_limit(limit)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _TRANSACTION_SELECT + _TRANSACTION_ORDER + " LIMIT ?", (limit,)
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_all(self) -> List[Transaction]:
        """Get every transaction, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(_TRANSACTION_SELECT + _TRANSACTION_ORDER)
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def update(self, transaction_id: int, changes: TransactionUpdate) -> Transaction:
        """Apply a sparse set of changes to a transaction.

        Only the fields supplied in ``changes`` are validated and written;
        every other column keeps its stored value. ``updated_at`` is
        refreshed on every successful call, even when nothing else changes.
        The read and the write share one write lock.

        Args:
            transaction_id: The transaction ID to update.
            changes: Fields to change.

        Returns:
            The updated Transaction.

        Raises:
            NotFoundError: If no transaction has this ID.
            InvalidAmountError: If a supplied amount is not valid.
            InvalidDateError: If a supplied date is not valid.
            UnknownCategoryError: If a supplied category does not exist.
        """
        values = {}
        for field_name, value in changes.changes().items():
            if field_name == "amount":
                value = parse_amount(value)
            elif field_name == "transaction_date":
                value = parse_date(value).isoformat()
            elif field_name == "category_id":
                value = parse_category_id(value)
            elif field_name == "description":
                value = parse_description(value)
            values[_UPDATABLE_COLUMNS[field_name]] = value

        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                current = self._find(conn, transaction_id)
                if current is None:
                    raise NotFoundError(
                        f"Transaction with ID {transaction_id} not found"
                    )

                if "category_id" in values:
                    self._check_category(conn, values["category_id"])

                # Keep updated_at strictly increasing even within one clock tick
                updated_at = max(
                    datetime.now(), current.updated_at + timedelta(microseconds=1)
                )
                values["updated_at"] = updated_at.isoformat()

                set_clause = ", ".join(f"{column} = ?" for column in values)
                conn.execute(
                    f"UPDATE transactions SET {set_clause} WHERE id = ?",
                    (*values.values(), transaction_id),
                )

            return self._find(conn, transaction_id)

    def delete(self, transaction_id: int) -> None:
        """Delete a transaction by ID.

        Raises:
            NotFoundError: If no transaction has this ID.
        """
        if not is_storable_id(transaction_id):
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                cursor = conn.execute(
                    "DELETE FROM transactions WHERE id = ?", (transaction_id,)
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(
                        f"Transaction with ID {transaction_id} not found"
                    )

    def find_by_date_range(
        self, start_date: Union[date, str], end_date: Union[date, str]
    ) -> List[Transaction]:
        """Get transactions within a date range.

        Args:
            start_date: First day of the range (inclusive).
            end_date: Last day of the range (inclusive).

        Returns:
            List of Transaction objects ordered by date (newest first).

        Raises:
            InvalidDateError: If either bound is not a valid date.
        """
        start = parse_date(start_date).isoformat()
        end = parse_date(end_date).isoformat()

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _TRANSACTION_SELECT
                + " WHERE t.transaction_date >= ? AND t.transaction_date <= ?"
                + _TRANSACTION_ORDER,
                (start, end),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_by_month(self, year_month: Union[YearMonth, str]) -> List[Transaction]:
        """Get transactions dated within a calendar month.

        Args:
            year_month: The month, as a YearMonth or "YYYY-MM".

        Returns:
            List of Transaction objects from the first to the last day of the
            month, inclusive.

        Raises:
            InvalidDateError: If the month is not valid.
        """
        month = parse_year_month(year_month)
        return self.find_by_date_range(month.first_day, month.last_day)

    def _find(self, conn, transaction_id: int) -> Optional[Transaction]:
        if not is_storable_id(transaction_id):
            return None
        cursor = conn.execute(
            _TRANSACTION_SELECT + " WHERE t.id = ?", (transaction_id,)
        )
        row = cursor.fetchone()
        if row:
            return self._row_to_transaction(row)
        return None

    def _check_category(self, conn, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        cursor = conn.execute("SELECT 1 FROM categories WHERE id = ?", (category_id,))
        if cursor.fetchone() is None:
            raise UnknownCategoryError(f"Category with ID {category_id} not found")

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            amount_cents=row[1],
            description=row[2],
            transaction_date=date.fromisoformat(row[3]),
            category_id=row[4],
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
            category_name=row[7],
        )
