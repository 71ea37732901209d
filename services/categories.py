"""Category service for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from db.manager import write_transaction
from errors import (
    CategoryInUseError,
    DuplicateNameError,
    EmptyNameError,
    NotFoundError,
)
from models.category import Category
from parsing import is_storable_id

_CATEGORY_SELECT_FIELDS = "id, name, description, created_at"


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name, id"
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        if not is_storable_id(category_id):
            return None

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def get(self, category_id: int) -> Category:
        """Get a single category by ID, failing if it does not exist.

        Raises:
            NotFoundError: If no category has this ID.
        """
        category = self.find(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by exact (case-sensitive) name.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def create(self, name: str, description: Optional[str] = None) -> Category:
        """Create a new category.

        Args:
            name: Category name. Surrounding whitespace is stripped.
            description: Optional description of the category.

        Returns:
            The created Category object with id populated.

        Raises:
            EmptyNameError: If the name is empty or only whitespace.
            DuplicateNameError: If a category with this name already exists.
        """
        name = (name or "").strip()
        if not name:
            raise EmptyNameError("Category name cannot be empty")

        created_at = datetime.now()

        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                cursor = conn.execute(
                    "SELECT 1 FROM categories WHERE name = ?", (name,)
                )
                if cursor.fetchone():
                    raise DuplicateNameError(f"Category '{name}' already exists")

                try:
                    cursor = conn.execute(
                        "INSERT INTO categories (name, description, created_at) VALUES (?, ?, ?)",
                        (name, description, created_at.isoformat()),
                    )
                except sqlite3.IntegrityError as e:
                    raise DuplicateNameError(f"Category '{name}' already exists") from e

            return Category(
                id=cursor.lastrowid,
                name=name,
                description=description,
                created_at=created_at,
            )

    def count_transactions(self, category_id: int) -> int:
        """Count transactions that reference a category.

        Args:
            category_id: The category ID to check.

        Returns:
            Number of referencing transactions.
        """
        if not is_storable_id(category_id):
            return 0

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM transactions WHERE category_id = ?",
                (category_id,),
            )
            return cursor.fetchone()[0]

    def delete(self, category_id: int) -> None:
        """Delete a category by ID.

        A category that any transaction still references is never deleted.

        Args:
            category_id: The category ID to delete.

        Raises:
            NotFoundError: If no category has this ID.
            CategoryInUseError: If one or more transactions reference it.
        """
        if not is_storable_id(category_id):
            raise NotFoundError(f"Category with ID {category_id} not found")

        with self.db_manager.connect() as conn:
            with write_transaction(conn):
                cursor = conn.execute(
                    "SELECT name FROM categories WHERE id = ?", (category_id,)
                )
                row = cursor.fetchone()
                if not row:
                    raise NotFoundError(f"Category with ID {category_id} not found")

                cursor = conn.execute(
                    "SELECT COUNT(*) FROM transactions WHERE category_id = ?",
                    (category_id,),
                )
                in_use = cursor.fetchone()[0]
                if in_use:
                    raise CategoryInUseError(
                        f"Category '{row[0]}' is used by {in_use} transaction(s)"
                    )

                conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))

    def _row_to_category(self, row: tuple) -> Category:
        """Convert a database row to a Category object."""
        return Category(
            id=row[0],
            name=row[1],
            description=row[2],
            created_at=datetime.fromisoformat(row[3]),
        )
