"""Shared pytest fixtures for all tests."""

import pytest

from config import Config
from db.manager import DatabaseManager
from services.base import Services
from tests.helpers import scenario_transactions


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "cashbook",
        db_data_dir=tmp_path / "cashbook" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "cashbook" / "logs",
        export_dir=tmp_path / "cashbook" / "exports",
        currency_symbol="₹",
    )


@pytest.fixture
def db_manager_with_schema(test_config):
    """Create an open DatabaseManager with all migrations applied.

    Yields:
        DatabaseManager: Database manager with schema ready.
    """
    manager = DatabaseManager(test_config).open()
    manager.apply_migrations()
    yield manager
    manager.close()


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with a fresh test database.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def scenario():
    """The two-record book used across the engine tests.

    Returns:
        List of [Income 1000 Sales "Jan sale" 2024-01-05,
                 Expense 200 Rent "" 2024-01-10], in that order.
    """
    return scenario_transactions()
