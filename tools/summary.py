"""Monthly summary reports."""

from datetime import date
from typing import Dict, Iterable, Optional, Union

from models.period import YearMonth
from models.summary import UNCATEGORIZED, CategoryTotal, MonthlySummary
from models.transaction import Transaction
from parsing import parse_year_month


def summarize(
    year_month: YearMonth, transactions: Iterable[Transaction]
) -> MonthlySummary:
    """Group transactions by category and total them.

    Transactions without a category are collected in an "Uncategorized"
    bucket, so the grand total covers every transaction given. A user
    category may carry the same name; its row keeps its category_id, while
    the bucket's category_id is None, so front ends should tell the two
    apart by ID rather than by name.

    Rows are ordered by total (largest first), then by category name, with
    the uncategorized bucket after a named category on a full tie.

    Args:
        year_month: Month the transactions belong to.
        transactions: Transactions to summarize.

    Returns:
        MonthlySummary with per-category rows and the grand total, in cents.
    """
    buckets: Dict[Optional[int], CategoryTotal] = {}

    for transaction in transactions:
        category_id = transaction.category_id
        if category_id not in buckets:
            name = transaction.category_name if category_id is not None else None
            buckets[category_id] = CategoryTotal(
                category_id=category_id,
                category_name=name or UNCATEGORIZED,
                transaction_count=0,
                total_cents=0,
            )
        bucket = buckets[category_id]
        bucket.transaction_count += 1
        bucket.total_cents += transaction.amount_cents

    per_category = sorted(
        buckets.values(),
        key=lambda b: (-b.total_cents, b.category_name, b.category_id is None),
    )

    return MonthlySummary(
        year_month=year_month,
        per_category=per_category,
        grand_total_cents=sum(b.total_cents for b in per_category),
    )


def get_monthly_summary(
    services, year_month: Union[YearMonth, date, str]
) -> MonthlySummary:
    """Get the per-category summary for one month.

    Args:
        services: Services container with transaction service.
        year_month: The month, as a YearMonth, a date in it, or "YYYY-MM".

    Returns:
        MonthlySummary for the month. A month without transactions yields
        no rows and a zero grand total.

    Raises:
        InvalidDateError: If the month is not valid.
    """
    month = parse_year_month(year_month)
    transactions = services.transactions.find_by_month(month)
    return summarize(month, transactions)


def get_period_summary(
    services,
    start_month: Union[YearMonth, date, str],
    end_month: Union[YearMonth, date, str],
) -> Dict[str, MonthlySummary]:
    """Get monthly summaries for each month in a period.

    Args:
        services: Services container with transaction service.
        start_month: First month of the period (inclusive).
        end_month: Last month of the period (inclusive).

    Returns:
        Dictionary mapping "YYYY-MM" keys, in calendar order, to the
        month's MonthlySummary. Empty when end_month precedes start_month.

    Example:
        {
            "2025-01": MonthlySummary(per_category=[...], grand_total_cents=3000),
            "2025-02": MonthlySummary(per_category=[...], grand_total_cents=500),
        }
    """
    current = parse_year_month(start_month)
    last = parse_year_month(end_month)

    result = {}
    while current <= last:
        result[str(current)] = get_monthly_summary(services, current)
        current = current.next()

    return result
