"""
db/errors.py
------------
Error taxonomy for the database layer.

SQLite reports most conditions through an extended result code
(``sqlite_errorname``), but "table already exists" and a wrong number
of values share the generic ``SQLITE_ERROR`` code, so those two are
told apart by the engine message.
"""

import re
import sqlite3
from enum import Enum


class ErrorState(Enum):
    """Logical categories of engine failures the demo knows how to handle."""

    TABLE_ALREADY_EXISTS = "table_already_exists"
    DUPLICATE_KEY = "duplicate_key"
    TYPE_MISMATCH = "type_mismatch"
    ARITY_MISMATCH = "arity_mismatch"
    OTHER = "other"


class DatabaseConnectionError(ConnectionError):
    """Raised when the driver is missing or the database cannot be opened."""


_STATE_BY_ERRORNAME = {
    "SQLITE_CONSTRAINT_PRIMARYKEY": ErrorState.DUPLICATE_KEY,
    "SQLITE_CONSTRAINT_UNIQUE": ErrorState.DUPLICATE_KEY,
    "SQLITE_MISMATCH": ErrorState.TYPE_MISMATCH,
    "SQLITE_CONSTRAINT_CHECK": ErrorState.TYPE_MISMATCH,
}

_ALREADY_EXISTS_RE = re.compile(r"^(table|index|view|trigger) \S+ already exists$")
_ARITY_RE = re.compile(
    r"has \d+ columns but \d+ values were supplied"
    r"|\d+ values for \d+ columns"
)


def classify(exc: sqlite3.Error) -> ErrorState:
    """
    Map an engine error onto an ErrorState.

    Args:
        exc: The exception raised by the driver.

    Returns:
        The matching ErrorState, or ErrorState.OTHER.
    """
    name = getattr(exc, "sqlite_errorname", None)
    if name in _STATE_BY_ERRORNAME:
        return _STATE_BY_ERRORNAME[name]

    if name in (None, "SQLITE_ERROR"):
        message = str(exc)
        if _ALREADY_EXISTS_RE.search(message):
            return ErrorState.TABLE_ALREADY_EXISTS
        if _ARITY_RE.search(message):
            return ErrorState.ARITY_MISMATCH

    return ErrorState.OTHER
