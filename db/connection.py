"""
db/connection.py
----------------
Manages connections to the embedded SQLite database.

Connection strings use SQLite URIs:
    file:<path>?mode=rwc   create the database if absent, then open it
    file:<path>?mode=rw    open an existing database
    file:<path>?mode=ro    open an existing database read-only

A single process-wide handle is shared by the schema and insert phase.
Readers open their own short-lived connections.
"""

import importlib
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Iterator, Optional
from urllib.parse import quote

import config
from db.errors import DatabaseConnectionError
from utils.logger import get_logger

logger = get_logger(__name__)

_driver: ModuleType | None = None
_conn: sqlite3.Connection | None = None
_conn_path: str | None = None


def build_url(path: str, create: bool = True, read_only: bool = False) -> str:
    """
    Build the connection URI for a database file.

    Args:
        path: Location of the database file.
        create: Create the database if it does not exist yet.
        read_only: Open without write access (ignores `create`).

    Returns:
        A ``file:`` URI understood by sqlite3.connect(uri=True).
    """
    if read_only:
        mode = "ro"
    elif create:
        mode = "rwc"
    else:
        mode = "rw"
    return f"file:{quote(str(path))}?mode={mode}"


def register_driver(name: str = config.DB_DRIVER) -> ModuleType:
    """
    Import the DB-API driver module and remember it for later connections.

    Raises:
        DatabaseConnectionError: If the module cannot be found or is not a driver.
    """
    global _driver
    try:
        module = importlib.import_module(name)
    except ImportError as e:
        raise DatabaseConnectionError(f"Database driver '{name}' not found") from e
    if not callable(getattr(module, "connect", None)):
        raise DatabaseConnectionError(f"Module '{name}' is not a DB-API driver")
    _driver = module
    logger.debug(f"Registered database driver '{name}'.")
    return module


def open_connection(
    path: Optional[str] = None,
    create: bool = True,
    read_only: bool = False,
    detect_types: int = 0,
) -> sqlite3.Connection:
    """
    Open a new connection in autocommit mode.

    The connection is probed once so that a missing, unreadable or
    locked database fails here rather than on the first statement.

    Args:
        path: Database file; defaults to config.DB_PATH.
        create: Create the database if it does not exist yet.
        read_only: Open the database read-only.
        detect_types: Passed to the driver to enable column converters.

    Returns:
        An open sqlite3.Connection.

    Raises:
        DatabaseConnectionError: If the database cannot be opened.
    """
    driver = _driver or register_driver()
    url = build_url(path or config.DB_PATH, create=create, read_only=read_only)
    try:
        conn = driver.connect(
            url,
            uri=True,
            timeout=config.DB_TIMEOUT,
            isolation_level=None,
            detect_types=detect_types,
        )
    except driver.OperationalError as e:
        logger.error(f"Failed to open database '{url}': {e}")
        raise DatabaseConnectionError(f"Cannot open '{url}': {e}") from e
    try:
        conn.execute("PRAGMA schema_version").fetchone()
    except driver.OperationalError as e:
        conn.close()
        logger.error(f"Database '{url}' is not available: {e}")
        raise DatabaseConnectionError(f"Cannot use '{url}': {e}") from e
    return conn


@contextmanager
def connection(
    path: Optional[str] = None,
    create: bool = True,
    read_only: bool = False,
    detect_types: int = 0,
) -> Iterator[sqlite3.Connection]:
    """Open a connection for the duration of a ``with`` block, then close it."""
    conn = open_connection(path, create=create, read_only=read_only, detect_types=detect_types)
    try:
        yield conn
    finally:
        conn.close()


def init_db_handle(path: Optional[str] = None) -> None:
    """
    Open the shared process-wide connection, creating the database if needed.
    Repeated calls are no-ops while the handle is open.
    """
    global _conn, _conn_path
    if _conn is not None:
        return
    _conn_path = path or config.DB_PATH
    _conn = open_connection(_conn_path, create=True)
    logger.info(f"Database handle opened on '{_conn_path}'.")


def get_connection() -> sqlite3.Connection:
    """
    Get the shared connection.

    Raises:
        RuntimeError: If the handle has not been initialized.
    """
    if _conn is None:
        raise RuntimeError("Database handle not initialized. Call init_db_handle() first.")
    return _conn


def close_db_handle() -> None:
    """Close the shared connection."""
    global _conn, _conn_path
    if _conn is not None:
        _conn.close()
        _conn = None
        logger.info(f"Database handle on '{_conn_path}' closed.")
        _conn_path = None


def shutdown(path: Optional[str] = None) -> None:
    """
    Shut down one database, or the whole engine when `path` is None.

    For one database this closes the shared handle if it is open on that
    file and checkpoints its write-ahead log. For the engine it closes the
    shared handle and forgets the registered driver.
    """
    global _driver
    if path is None:
        close_db_handle()
        _driver = None
        logger.info("Database engine shut down.")
        return

    if _conn_path is not None and Path(_conn_path).resolve() == Path(path).resolve():
        close_db_handle()
    if Path(path).exists():
        with connection(path, create=False) as conn:
            conn.execute("PRAGMA wal_checkpoint(TRUNCATE)").fetchall()
    logger.info(f"Database '{path}' shut down.")
