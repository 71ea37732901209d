"""Report models produced by the summary tools."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from models.period import YearMonth
from parsing import cents_to_decimal

UNCATEGORIZED = "Uncategorized"


@dataclass
class CategoryTotal:
    """Count and total of one category's transactions in a month.

    Attributes:
        category_id: Category ID, or None for the uncategorized bucket.
        category_name: Category name ("Uncategorized" for the None bucket).
        transaction_count: Number of transactions in the bucket.
        total_cents: Sum of the bucket's amounts in cents.
    """

    category_id: Optional[int]
    category_name: str
    transaction_count: int
    total_cents: int

    @property
    def total(self) -> Decimal:
        return cents_to_decimal(self.total_cents)


@dataclass
class MonthlySummary:
    """Per-category breakdown and grand total for one month."""

    year_month: YearMonth
    per_category: List[CategoryTotal] = field(default_factory=list)
    grand_total_cents: int = 0

    @property
    def grand_total(self) -> Decimal:
        return cents_to_decimal(self.grand_total_cents)
