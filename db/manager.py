"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir
from errors import StorageUnavailableError
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Manages database connections and paths.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the database manager.

        Args:
            config: Config object containing database configuration.
        """
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Foreign key enforcement is switched on for every connection. SQLite
        operational faults (unreadable file, missing schema, locked database)
        surface as StorageUnavailableError.

        Yields:
            sqlite3.Connection: Database connection.

        Raises:
            StorageUnavailableError: If the database cannot be opened or used.
        """
        db_path = self.config.db_path
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(db_path)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Cannot open database {db_path}: {e}")
            raise StorageUnavailableError(f"Cannot open database {db_path}: {e}") from e

        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        except sqlite3.DatabaseError as e:
            # constraint and API misuse errors are the caller's to handle
            if isinstance(e, (sqlite3.IntegrityError, sqlite3.ProgrammingError)):
                raise
            logger.error(f"Database error on {db_path}: {e}")
            raise StorageUnavailableError(f"Database error: {e}") from e
        finally:
            conn.close()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()


@contextmanager
def write_transaction(conn: sqlite3.Connection):
    """Run a block of statements as one atomic write.

    Takes the write lock up front (BEGIN IMMEDIATE) so a read followed by a
    write inside the block sees no interleaved writer. Commits on success and
    rolls back on any exception.

    Args:
        conn: Open SQLite connection with no transaction in progress.

    Yields:
        sqlite3.Connection: The same connection.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    conn.commit()
