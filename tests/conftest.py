"""Pytest configuration and fixtures."""

import pytest

import config
from db.connection import connection, shutdown
from db.init_db import create_tables
from repositories.zoo_repo import ZooRepository


@pytest.fixture(autouse=True)
def db_path(tmp_path, monkeypatch):
    """Point every test at a fresh database file and reset the engine afterwards."""
    path = str(tmp_path / "TestDB")
    monkeypatch.setattr(config, "DB_PATH", path)
    yield path
    shutdown()


@pytest.fixture
def conn(db_path):
    """An open connection on the test database."""
    with connection(db_path) as c:
        yield c


@pytest.fixture
def repo(conn):
    """A repository over a database with both tables created."""
    create_tables(conn)
    return ZooRepository(conn)
