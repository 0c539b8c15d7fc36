"""Database manager owning the SQLite connection and schema migrations."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List

from config import Config, get_migrations_dir
from errors import StoreError
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Owns the single SQLite connection used by the services.

    The connection has an explicit lifecycle: call open() before use and
    close() when done, or use the manager as a context manager.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config
        self._conn = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "DatabaseManager":
        """Open the database connection, creating the data directory if needed.

        Raises:
            StoreError: If the database file cannot be opened.
        """
        if self._conn is not None:
            return self

        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = sqlite3.connect(db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database at {db_path}: {e}") from e

        logger.debug(f"Opened database: {db_path}")
        return self

    def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed database")

    def __enter__(self) -> "DatabaseManager":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @contextmanager
    def connect(self):
        """Yield the open connection, translating SQLite failures to StoreError.

        Yields:
            sqlite3.Connection: Database connection.

        Raises:
            StoreError: If the manager is not open or a SQLite error occurs.
        """
        if self._conn is None:
            raise StoreError("Database is not open")

        try:
            yield self._conn
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StoreError(f"Database error: {e}") from e

    def get_db_path(self) -> Path:
        """Get the current database path."""
        return self.config.db_path

    def get_migrations_dir(self) -> Path:
        """Get the migrations directory path."""
        return get_migrations_dir()

    def available_migrations(self) -> List[str]:
        """List migration file names in the order they must be applied."""
        migrations_dir = self.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied_migrations(self) -> List[str]:
        """List migration file names already recorded as applied."""
        with self.connect() as conn:
            _init_schema_migrations_table(conn)
            cursor = conn.execute(
                "SELECT migration_file FROM schema_migrations ORDER BY migration_file"
            )
            return [row[0] for row in cursor.fetchall()]

    def pending_migrations(self) -> List[str]:
        applied = set(self.applied_migrations())
        return [m for m in self.available_migrations() if m not in applied]

    def apply_migrations(self) -> List[str]:
        """Apply every pending migration in filename order.

        Returns:
            Names of the migrations that were applied.

        Raises:
            StoreError: If a migration fails. Earlier migrations stay applied.
        """
        pending = self.pending_migrations()
        migrations_dir = self.get_migrations_dir()

        for migration_file in pending:
            sql = (migrations_dir / migration_file).read_text()
            with self.connect() as conn:
                conn.executescript(sql)
                conn.execute(
                    "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                    (migration_file,),
                )
                conn.commit()
            logger.info(f"Applied migration: {migration_file}")

        return pending


def _init_schema_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()
