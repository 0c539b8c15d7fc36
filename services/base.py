"""Base services container for dependency injection."""

from contextlib import contextmanager

from config import Config
from db.manager import DatabaseManager
from logger import get_logger

logger = get_logger()


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database manager.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config
                    is not used to locate the database.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.transactions import TransactionService
        from reports.exporter import ReportExporter
        from tools.categories import CategoryDefaults

        self.transactions = TransactionService(self.db_manager)
        self.reports = ReportExporter(config.currency_symbol)
        self.category_defaults = CategoryDefaults(config.categories_file)


@contextmanager
def open_services(config: Config, db_manager=None):
    """Open the store, bring its schema up to date, and yield Services.

    The database is closed when the block exits, including on error.

    Example:
        with open_services(load_config()) as services:
            transactions = services.transactions.find_all()
    """
    services = Services(config, db_manager=db_manager)
    services.db_manager.open()
    try:
        applied = services.db_manager.apply_migrations()
        if applied:
            logger.info(f"Applied {len(applied)} migration(s)")
        yield services
    finally:
        services.db_manager.close()
