"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db

The statements omit IF NOT EXISTS: an existing table is
reported by the engine and skipped, any other DDL failure aborts.

SQLite only has type affinity, so CHECK constraints make the engine
reject values of the wrong type. Affinity is applied before a CHECK
runs, which leaves two gaps: a number stored in a VARCHAR column is
already text, and a numeric string stored in a numeric column is
already a number. Both are accepted.
"""

import sqlite3
from contextlib import closing
from datetime import datetime
from decimal import Decimal
from typing import Optional

from db.connection import get_connection
from db.errors import ErrorState, classify
from utils.logger import get_logger

logger = get_logger(__name__)

DECIMAL_PRECISION = 5
DECIMAL_SCALE = 2

# timestamps must be text shaped like 'YYYY-MM-DD ...' that datetime() parses
_DATE_BORN_CHECK = (
    "typeof(date_born) = 'text'"
    " AND date_born GLOB '[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]*'"
    " AND datetime(date_born) IS NOT NULL"
)

CREATE_SPECIES_TABLE = f"""
CREATE TABLE species (
    id          INTEGER PRIMARY KEY,
    NAME        VARCHAR(255)
                CHECK (NAME IS NULL OR typeof(NAME) = 'text'),
    num_acres   DECIMAL({DECIMAL_PRECISION},{DECIMAL_SCALE})
                CHECK (num_acres IS NULL OR typeof(num_acres) IN ('integer', 'real'))
)
"""

CREATE_ANIMAL_TABLE = f"""
CREATE TABLE animal (
    id          INTEGER PRIMARY KEY,
    species_id  INTEGER
                CHECK (species_id IS NULL OR typeof(species_id) = 'integer'),
    name        VARCHAR(255)
                CHECK (name IS NULL OR typeof(name) = 'text'),
    date_born   TIMESTAMP
                CHECK (date_born IS NULL OR ({_DATE_BORN_CHECK}))
)
"""


def _convert_decimal(value: bytes) -> Decimal:
    return Decimal(value.decode()).quantize(Decimal(1).scaleb(-DECIMAL_SCALE))


def _convert_timestamp(value: bytes) -> datetime:
    return datetime.fromisoformat(value.decode())


def register_converters() -> None:
    """
    Register read converters for the declared column types.

    Used by connections opened with ``detect_types=sqlite3.PARSE_DECLTYPES``:
    DECIMAL columns come back as Decimal with the schema's scale and
    TIMESTAMP columns as datetime.
    """
    sqlite3.register_converter("DECIMAL", _convert_decimal)
    sqlite3.register_converter("TIMESTAMP", _convert_timestamp)


def create_table(conn: sqlite3.Connection, statement: str) -> None:
    """
    Execute a CREATE TABLE statement.

    An "already exists" failure is logged and ignored; anything else is raised.
    """
    try:
        with closing(conn.cursor()) as cur:
            cur.execute(statement)
    except sqlite3.Error as e:
        if classify(e) is ErrorState.TABLE_ALREADY_EXISTS:
            logger.info(str(e))
            return
        raise


def create_tables(conn: Optional[sqlite3.Connection] = None) -> None:
    """
    Create the species and animal tables.
    Safe to call multiple times.

    Args:
        conn: Connection to use; defaults to the shared handle.
    """
    conn = conn or get_connection()
    create_table(conn, CREATE_SPECIES_TABLE)
    create_table(conn, CREATE_ANIMAL_TABLE)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from db.connection import init_db_handle, close_db_handle
    init_db_handle()
    try:
        create_tables()
    finally:
        close_db_handle()
    print("Database schema created successfully.")
