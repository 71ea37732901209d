from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from parsing import cents_to_decimal


@dataclass
class Transaction:
    id: int
    amount_cents: int  # signed, integer cents
    description: Optional[str]
    transaction_date: date
    category_id: Optional[int]
    created_at: datetime
    updated_at: datetime
    category_name: Optional[str] = None  # filled in by queries that join categories

    @property
    def amount(self) -> Decimal:
        """Amount as a Decimal with two decimal places."""
        return cents_to_decimal(self.amount_cents)


class _Unset:
    """Marker for a field left out of a TransactionUpdate."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class TransactionUpdate:
    """Sparse set of changes for a transaction.

    Fields left as UNSET keep their stored value. Any other value is
    validated and written, so ``category_id=None`` clears the category and
    ``description=""`` stores an empty description.

    Amount and date accept the same raw forms as TransactionService.create.
    """

    amount: Any = UNSET
    description: Any = UNSET
    transaction_date: Any = UNSET
    category_id: Any = UNSET

    def changes(self) -> Dict[str, Any]:
        """Get only the fields that were supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()
