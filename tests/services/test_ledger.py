import pytest
from datetime import date
from decimal import Decimal

from db.manager import DatabaseManager
from errors import CategoryInUseError, StorageUnavailableError, ValidationError
from models.transaction import TransactionUpdate
from services.base import Services
from services.ledger import LedgerEngine


class TestLedgerEngine:
    """Tests for LedgerEngine."""

    def test_add_transaction_defaults_to_today(self, ledger):
        """Test that a missing date means today."""
        transaction = ledger.add_transaction("4.20", "Coffee")

        assert transaction.transaction_date == date.today()

    def test_add_and_list(self, ledger):
        """Test adding transactions and listing them newest first."""
        food = ledger.add_category("Food")
        ledger.add_transaction("10.00", "Lunch", "2025-01-05", food.id)
        ledger.add_transaction("20.00", "Dinner", "2025-01-20", food.id)

        listed = ledger.list_transactions()

        assert [t.description for t in listed] == ["Dinner", "Lunch"]
        assert all(t.category_name == "Food" for t in listed)

    def test_list_uses_configured_limit(self, ledger, services):
        """Test that the configured recent_limit caps the listing."""
        services.config.recent_limit = 2
        for day in range(1, 5):
            ledger.add_transaction("1.00", None, date(2025, 1, day))

        assert len(ledger.list_transactions()) == 2
        assert len(ledger.list_transactions(limit=3)) == 3

    def test_edit_transaction(self, ledger):
        """Test that edits go through the sparse update."""
        transaction = ledger.add_transaction("10.00", "Lunch", "2025-01-05")

        edited = ledger.edit_transaction(
            transaction.id, TransactionUpdate(description="Brunch")
        )

        assert edited.description == "Brunch"
        assert edited.amount == Decimal("10.00")

    def test_delete_category_in_use(self, ledger):
        """Test the reject policy through the engine."""
        food = ledger.add_category("Food")
        ledger.add_transaction("10.00", "Lunch", "2025-01-05", food.id)

        with pytest.raises(CategoryInUseError):
            ledger.delete_category(food.id)

        assert [c.name for c in ledger.list_categories()] == ["Food"]

    def test_validation_errors_share_a_base(self, ledger):
        """Test that bad input is distinguishable from storage faults."""
        with pytest.raises(ValidationError):
            ledger.add_category(" ")
        with pytest.raises(ValidationError):
            ledger.add_transaction("ten", "Lunch", "2025-01-05")

    def test_monthly_summary(self, ledger):
        """Test the monthly summary scenario end to end."""
        food = ledger.add_category("Food")
        ledger.add_transaction("10", None, "2025-01-05", food.id)
        ledger.add_transaction("20", None, "2025-01-20", food.id)
        ledger.add_transaction("5", None, "2025-02-01", food.id)

        summary = ledger.monthly_summary("2025-01")

        assert [
            (row.category_name, row.transaction_count, row.total)
            for row in summary.per_category
        ] == [("Food", 2, Decimal("30.00"))]
        assert summary.grand_total == Decimal("30.00")

    def test_monthly_summary_defaults_to_current_month(self, ledger):
        """Test that no month means the current month."""
        ledger.add_transaction("7.00", "Today")

        summary = ledger.monthly_summary()

        assert summary.year_month.year == date.today().year
        assert summary.year_month.month == date.today().month
        assert summary.grand_total == Decimal("7.00")

    def test_period_summary(self, ledger):
        """Test the multi-month summary."""
        ledger.add_transaction("7.00", None, "2025-01-10")

        result = ledger.period_summary("2025-01", "2025-02")

        assert list(result) == ["2025-01", "2025-02"]

    def test_export_text(self, ledger):
        """Test exporting every transaction, newest first."""
        food = ledger.add_category("Food")
        first = ledger.add_transaction("10.00", "Lunch", "2025-01-05", food.id)
        second = ledger.add_transaction("2.50", 'Say "cheese"', "2025-01-06")

        lines = ledger.export_text().splitlines()

        assert lines == [
            "ID,Date,Amount,Description,Category",
            f'{second.id},2025-01-06,2.50,"Say ""cheese""",',
            f'{first.id},2025-01-05,10.00,"Lunch",Food',
        ]

    def test_export_to_file_uses_export_dir(self, ledger, services):
        """Test that the export lands in the configured directory."""
        ledger.add_transaction("10.00", "Lunch", "2025-01-05")

        path = ledger.export_to_file(today=date(2025, 1, 31))

        assert path == services.config.export_dir / "expenses_2025-01-31.csv"
        assert path.read_text(encoding="utf-8") == ledger.export_text()


class TestStorageUnavailable:
    """Tests for storage faults surfacing through the engine."""

    def test_missing_schema(self, test_config):
        """Test that a database without tables reports a storage fault."""
        engine = LedgerEngine(Services(test_config, DatabaseManager(test_config)))

        with pytest.raises(StorageUnavailableError):
            engine.monthly_summary("2025-01")
        with pytest.raises(StorageUnavailableError):
            engine.export_text()

    def test_unopenable_database(self, test_config):
        """Test that a database path that is a directory reports a storage fault."""
        (test_config.db_data_dir / test_config.db_filename).mkdir(parents=True)
        engine = LedgerEngine(Services(test_config, DatabaseManager(test_config)))

        with pytest.raises(StorageUnavailableError):
            engine.list_categories()
