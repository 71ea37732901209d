"""Tests for the monthly summary tools."""

from datetime import date
from decimal import Decimal

import pytest

from errors import InvalidDateError
from models.period import YearMonth
from models.summary import UNCATEGORIZED
from tools.summary import get_monthly_summary, get_period_summary


class TestGetMonthlySummary:
    """Tests for get_monthly_summary function."""

    def test_single_category_month(self, services):
        """Test the basic monthly breakdown for one category."""
        food = services.categories.create("Food")
        services.transactions.create("10.00", None, "2025-01-05", food.id)
        services.transactions.create("20.00", None, "2025-01-20", food.id)
        services.transactions.create("5.00", None, "2025-02-01", food.id)

        summary = get_monthly_summary(services, "2025-01")

        assert summary.year_month == YearMonth(2025, 1)
        assert [
            (row.category_name, row.transaction_count, row.total)
            for row in summary.per_category
        ] == [("Food", 2, Decimal("30.00"))]
        assert summary.grand_total == Decimal("30.00")

    def test_empty_month(self, services):
        """Test that a month without transactions is not an error."""
        services.transactions.create("5.00", None, "2025-02-01")

        summary = get_monthly_summary(services, YearMonth(2025, 3))

        assert summary.per_category == []
        assert summary.grand_total_cents == 0
        assert summary.grand_total == Decimal("0.00")

    def test_ordered_by_total_descending(self, services):
        """Test that rows are sorted by total, largest first."""
        food = services.categories.create("Food")
        rent = services.categories.create("Rent")
        fun = services.categories.create("Fun")
        services.transactions.create("50.00", None, "2025-01-02", food.id)
        services.transactions.create("900.00", None, "2025-01-01", rent.id)
        services.transactions.create("12.00", None, "2025-01-03", fun.id)
        services.transactions.create("25.00", None, "2025-01-04", food.id)

        summary = get_monthly_summary(services, "2025-01")

        assert [row.category_name for row in summary.per_category] == [
            "Rent",
            "Food",
            "Fun",
        ]
        assert [row.total_cents for row in summary.per_category] == [90000, 7500, 1200]

    def test_ties_broken_by_name(self, services):
        """Test that equal totals are ordered by category name."""
        zoo = services.categories.create("Zoo")
        art = services.categories.create("Art")
        services.transactions.create("10.00", None, "2025-01-01", zoo.id)
        services.transactions.create("10.00", None, "2025-01-02", art.id)

        summary = get_monthly_summary(services, "2025-01")

        assert [row.category_name for row in summary.per_category] == ["Art", "Zoo"]

    def test_uncategorized_bucket(self, services):
        """Test that uncategorized transactions are grouped and counted."""
        food = services.categories.create("Food")
        services.transactions.create("10.00", None, "2025-01-05", food.id)
        services.transactions.create("3.00", None, "2025-01-06")
        services.transactions.create("4.00", None, "2025-01-07")

        summary = get_monthly_summary(services, "2025-01")

        assert [
            (row.category_id, row.category_name, row.transaction_count, row.total_cents)
            for row in summary.per_category
        ] == [(food.id, "Food", 1, 1000), (None, UNCATEGORIZED, 2, 700)]

    def test_category_named_uncategorized_keeps_its_own_row(self, services):
        """Test that a user category with the bucket's name stays separate."""
        named = services.categories.create(UNCATEGORIZED)
        services.transactions.create("5.00", None, "2025-01-05", named.id)
        services.transactions.create("5.00", None, "2025-01-06")

        summary = get_monthly_summary(services, "2025-01")

        assert [
            (row.category_id, row.category_name, row.total_cents)
            for row in summary.per_category
        ] == [(named.id, UNCATEGORIZED, 500), (None, UNCATEGORIZED, 500)]
        assert summary.grand_total_cents == 1000

    def test_grand_total_matches_all_transactions(self, services):
        """Test that the grand total is the month's sum regardless of category."""
        food = services.categories.create("Food")
        travel = services.categories.create("Travel")
        amounts = ["0.10", "0.20", "19.99", "-5.00", "100.01", "0.70"]
        category_ids = [food.id, travel.id, None, food.id, travel.id, None]
        for day, (amount, category_id) in enumerate(zip(amounts, category_ids), 1):
            services.transactions.create(amount, None, date(2025, 1, day), category_id)
        services.transactions.create("999.00", None, "2025-02-01", food.id)

        summary = get_monthly_summary(services, "2025-01")

        assert summary.grand_total == sum(Decimal(a) for a in amounts)
        assert summary.grand_total_cents == sum(
            row.total_cents for row in summary.per_category
        )

    def test_invalid_month(self, services):
        """Test that an invalid month raises InvalidDateError."""
        with pytest.raises(InvalidDateError):
            get_monthly_summary(services, "January")


class TestGetPeriodSummary:
    """Tests for get_period_summary function."""

    def test_multi_month_period(self, services):
        """Test one summary per month, across a year boundary."""
        food = services.categories.create("Food")
        services.transactions.create("10.00", None, "2024-12-15", food.id)
        services.transactions.create("20.00", None, "2025-02-10", food.id)

        result = get_period_summary(services, "2024-12", date(2025, 2, 28))

        assert list(result) == ["2024-12", "2025-01", "2025-02"]
        assert result["2024-12"].grand_total == Decimal("10.00")
        assert result["2025-01"].per_category == []
        assert result["2025-02"].grand_total == Decimal("20.00")

    def test_reversed_period_is_empty(self, services):
        """Test that an end before the start yields no months."""
        assert get_period_summary(services, "2025-03", "2025-01") == {}
