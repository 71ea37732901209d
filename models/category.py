"""Category model for transaction categorization."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Unique identifier (auto-generated, never reused).
        name: Category name (unique, case-sensitive).
        description: Optional description of what belongs in this category.
        created_at: When the category was created.
    """

    id: int
    name: str
    description: Optional[str]
    created_at: datetime
