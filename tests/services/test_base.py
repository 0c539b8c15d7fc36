from datetime import datetime

import pytest

from db.manager import DatabaseManager
from errors import StoreError
from models.transaction import TransactionKind
from services.base import open_services
from tests.helpers import make_transaction


class TestOpenServices:
    """Tests for the open_services lifecycle."""

    def test_creates_and_migrates_store(self, test_config):
        """Test a first open creates the database file with the schema applied."""
        with open_services(test_config) as services:
            assert services.db_manager.is_open
            assert services.db_manager.pending_migrations() == []
            assert services.transactions.find_all() == []

        assert test_config.db_path.exists()

    def test_closes_on_exit(self, test_config):
        """Test the store is closed after the block, even after an error."""
        with pytest.raises(RuntimeError):
            with open_services(test_config) as services:
                raise RuntimeError("boom")

        assert not services.db_manager.is_open

        with pytest.raises(StoreError):
            services.transactions.find_all()

    def test_data_survives_reopen(self, test_config):
        """Test records written in one session are visible in the next."""
        with open_services(test_config) as services:
            created = services.transactions.create(
                make_transaction(
                    TransactionKind.EXPENSE, "200", "Rent", datetime(2024, 1, 10)
                )
            )

        with open_services(test_config) as services:
            found = services.transactions.find(created.id)

        assert found == created

    def test_second_open_applies_nothing(self, test_config):
        """Test migrations are recorded and not re-run."""
        with open_services(test_config):
            pass

        with DatabaseManager(test_config) as manager:
            assert manager.applied_migrations() == manager.available_migrations()
            assert manager.apply_migrations() == []

    def test_services_use_config(self, test_config):
        """Test the container wires config into the exporter."""
        test_config.currency_symbol = "$"

        with open_services(test_config) as services:
            assert services.reports.currency_symbol == "$"
            assert services.config is test_config


class TestDatabaseManager:
    """Tests for DatabaseManager lifecycle."""

    def test_close_is_idempotent(self, test_config):
        """Test closing twice does not fail."""
        manager = DatabaseManager(test_config).open()
        manager.close()
        manager.close()

        assert not manager.is_open

    def test_available_migrations_sorted(self, test_config):
        """Test migration files are listed in apply order."""
        migrations = DatabaseManager(test_config).available_migrations()

        assert migrations == sorted(migrations)
        assert "001_create_transactions.sql" in migrations

    def test_sql_error_becomes_store_error(self, db_manager_with_schema):
        """Test SQLite failures surface as StoreError."""
        with pytest.raises(StoreError, match="Database error"):
            with db_manager_with_schema.connect() as conn:
                conn.execute("SELECT * FROM no_such_table")

    def test_schema_rejects_bad_kind(self, db_manager_with_schema):
        """Test the table constraint rejects unknown kinds."""
        with pytest.raises(StoreError):
            with db_manager_with_schema.connect() as conn:
                conn.execute(
                    "INSERT INTO transactions (kind, amount, category, description, timestamp) "
                    "VALUES ('transfer', '1', 'Bank', '', '2024-01-01T00:00:00')"
                )
