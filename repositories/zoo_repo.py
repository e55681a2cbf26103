"""
repositories/zoo_repo.py
------------------------
Data access layer for the `species` and `animal` tables.
All inserts, counts and row reads of the demo live here.
"""

import sqlite3
from contextlib import closing
from typing import Optional

from db.connection import connection, get_connection
from db.errors import ErrorState, classify
from db.init_db import register_converters
from models.animal import Animal
from models.species import Species
from utils.logger import get_logger

logger = get_logger(__name__)

TABLES = ("species", "animal")

# printf-style templates, interpolated by the caller without escaping
INSERT_SPECIES_SQL = "INSERT INTO species VALUES (%d, '%s', %f)"
INSERT_ANIMAL_SQL = "INSERT INTO animal VALUES (%d, %d, '%s', '%s')"
SELECT_ALL_SQL = "SELECT * FROM %s"
COUNT_ROWS_SQL = "SELECT count(*) AS count FROM %s"


def _check_table(table: str) -> str:
    if table not in TABLES:
        raise ValueError(f"Unknown table '{table}', expected one of {TABLES}")
    return table


class ZooRepository:
    """Repository for inserting and counting rows of the zoo tables."""

    def __init__(self, conn: Optional[sqlite3.Connection] = None):
        """
        Args:
            conn: Connection to use; defaults to the shared handle.
        """
        self._conn = conn

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn or get_connection()

    # ── CREATE ────────────────────────────────────────────

    def insert_row(self, statement: str) -> bool:
        """
        Execute a literal INSERT statement.

        Duplicate keys, values of the wrong type and a wrong number of
        values are logged and skipped. Other failures are raised.

        Returns:
            True if the row was inserted, False if it was skipped.
        """
        return self._execute_insert(statement, None)

    def insert(self, table: str, values: tuple) -> bool:
        """
        Insert one row with bound parameters.

        Args:
            table: Either 'species' or 'animal'.
            values: Column values in table order.

        Returns:
            True if the row was inserted, False if it was skipped.
        """
        placeholders = ", ".join("?" for _ in values)
        sql = f"INSERT INTO {_check_table(table)} VALUES ({placeholders})"
        return self._execute_insert(sql, tuple(values))

    def add_species(self, species: Species) -> bool:
        return self.insert("species", species.values())

    def add_animal(self, animal: Animal) -> bool:
        return self.insert("animal", animal.values())

    # ── READ ──────────────────────────────────────────────

    def count_rows(self, statement: str) -> int:
        """
        Run a ``SELECT count(*) AS count`` query.

        Returns:
            The `count` column of the first row, or 0 if there is no row.
        """
        with closing(self.conn.cursor()) as cur:
            cur.execute(statement)
            row = cur.fetchone()
            if row is None:
                return 0
            columns = [d[0].lower() for d in cur.description]
            return int(row[columns.index("count")])

    def count(self, table: str) -> int:
        """Number of rows in `table`."""
        return self.count_rows(COUNT_ROWS_SQL % _check_table(table))

    # ── HELPERS ───────────────────────────────────────────

    def _execute_insert(self, sql: str, params: Optional[tuple]) -> bool:
        query = sql if params is None else f"{sql} {params!r}"
        try:
            with closing(self.conn.cursor()) as cur:
                if params is None:
                    cur.execute(sql)
                else:
                    cur.execute(sql, params)
        except sqlite3.Error as e:
            state = classify(e)
            if state is ErrorState.DUPLICATE_KEY:
                logger.warning(f"The query '{query}' was not executed because of duplicate key value.")
            elif state in (ErrorState.TYPE_MISMATCH, ErrorState.ARITY_MISMATCH):
                logger.warning(f"The query '{query}' was not executed. {e}")
            else:
                raise
            return False
        return True


def get_last_row(statement: str, path: Optional[str] = None) -> str:
    """
    Render the last row returned by `statement` as ``col='value'`` pairs.

    Opens its own read-only connection. Without an ORDER BY, "last" is the
    engine's scan order; for these rowid tables that is ascending `id`.
    Unquoted identifiers are reported upper-case, DECIMAL values keep the
    column scale and NULL renders as `null`.

    Args:
        statement: A SELECT query.
        path: Database file; defaults to config.DB_PATH.

    Returns:
        The pairs joined by ", ", or an empty string if there are no rows.
    """
    register_converters()
    with connection(path, create=False, read_only=True, detect_types=sqlite3.PARSE_DECLTYPES) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(statement)
            last = None
            for row in cur:
                last = row
            if last is None:
                return ""
            names = [d[0].upper() for d in cur.description]
            return ", ".join(
                f"{name}='{'null' if value is None else value}'"
                for name, value in zip(names, last)
            )
