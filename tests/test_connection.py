"""Tests for the connection provider."""

import sqlite3

import pytest

import config
from db import connection as db_connection
from db.connection import (
    build_url,
    close_db_handle,
    connection,
    get_connection,
    init_db_handle,
    open_connection,
    register_driver,
    shutdown,
)
from db.errors import DatabaseConnectionError


class TestBuildUrl:

    def test_create(self):
        assert build_url("TestDB") == "file:TestDB?mode=rwc"

    def test_open_existing(self):
        assert build_url("TestDB", create=False) == "file:TestDB?mode=rw"

    def test_read_only(self):
        assert build_url("/tmp/zoo/TestDB", read_only=True) == "file:/tmp/zoo/TestDB?mode=ro"

    def test_special_characters_are_quoted(self):
        assert build_url("my db?.sqlite") == "file:my%20db%3F.sqlite?mode=rwc"


class TestRegisterDriver:

    def test_default_driver(self):
        assert register_driver() is sqlite3

    def test_missing_driver(self):
        with pytest.raises(DatabaseConnectionError, match="not found"):
            register_driver("no_such_database_driver")

    def test_module_without_connect(self):
        with pytest.raises(ConnectionError, match="not a DB-API driver"):
            register_driver("json")


class TestOpenConnection:

    def test_creates_database(self, db_path, tmp_path):
        with connection(db_path) as conn:
            conn.execute("CREATE TABLE t (x INTEGER)")
        assert (tmp_path / "TestDB").exists()

    def test_defaults_to_configured_path(self, db_path, tmp_path):
        with connection() as conn:
            conn.execute("CREATE TABLE t (x INTEGER)")
        assert (tmp_path / "TestDB").exists()

    def test_open_existing_fails_when_absent(self, db_path):
        with pytest.raises(DatabaseConnectionError):
            open_connection(db_path, create=False)

    def test_read_only_rejects_writes(self, db_path):
        with connection(db_path) as conn:
            conn.execute("CREATE TABLE t (x INTEGER)")
        with connection(db_path, read_only=True) as conn:
            with pytest.raises(sqlite3.OperationalError):
                conn.execute("INSERT INTO t VALUES (1)")

    def test_autocommit(self, db_path):
        with connection(db_path) as conn:
            conn.execute("CREATE TABLE t (x INTEGER)")
            conn.execute("INSERT INTO t VALUES (1)")
        with connection(db_path) as conn:
            assert conn.execute("SELECT count(*) FROM t").fetchone()[0] == 1

    def test_locked_database(self, db_path, monkeypatch):
        monkeypatch.setattr(config, "DB_TIMEOUT", 0.1)
        with connection(db_path) as holder:
            holder.execute("CREATE TABLE t (x INTEGER)")
            holder.execute("BEGIN EXCLUSIVE")
            try:
                with pytest.raises(DatabaseConnectionError, match="locked"):
                    open_connection(db_path)
            finally:
                holder.execute("ROLLBACK")

    def test_context_manager_closes_on_error(self, db_path):
        with pytest.raises(RuntimeError):
            with connection(db_path) as conn:
                raise RuntimeError("boom")
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")


class TestSharedHandle:

    def test_not_initialized(self):
        with pytest.raises(RuntimeError):
            get_connection()

    def test_init_is_idempotent(self, db_path):
        init_db_handle(db_path)
        first = get_connection()
        init_db_handle(db_path)
        assert get_connection() is first
        close_db_handle()
        with pytest.raises(RuntimeError):
            get_connection()

    def test_shutdown_database_closes_handle(self, db_path):
        init_db_handle(db_path)
        get_connection().execute("CREATE TABLE t (x INTEGER)")
        shutdown(db_path)
        with pytest.raises(RuntimeError):
            get_connection()

    def test_shutdown_other_database_keeps_handle(self, db_path, tmp_path):
        init_db_handle(db_path)
        shutdown(str(tmp_path / "OtherDB"))
        assert get_connection() is not None

    def test_shutdown_engine_forgets_driver(self, db_path):
        register_driver()
        init_db_handle(db_path)
        shutdown()
        assert db_connection._driver is None
        with pytest.raises(RuntimeError):
            get_connection()
