"""
main.py
-------
Entry point for the ZooDB demo.

Responsibilities:
    - Register the database driver and open the shared connection.
    - Create the species and animal tables and insert the sample rows.
    - Print the row count and the last row of each table.
"""

import sqlite3
from datetime import datetime

import config
from db.connection import close_db_handle, init_db_handle, register_driver, shutdown
from db.errors import DatabaseConnectionError
from db.init_db import create_tables
from models.animal import Animal
from models.species import Species
from repositories.zoo_repo import (
    COUNT_ROWS_SQL,
    INSERT_ANIMAL_SQL,
    INSERT_SPECIES_SQL,
    SELECT_ALL_SQL,
    ZooRepository,
    get_last_row,
)
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

SAMPLE_SPECIES = [
    Species(1, "African Elephant", 7.5),
    Species(2, "Zebra", 1.2),
]

SAMPLE_ANIMALS = [
    Animal(1, 1, "Elsa", datetime(2001, 5, 6, 2, 15)),
    Animal(2, 2, "Zelda", datetime(2002, 8, 15, 9, 12)),
    Animal(3, 1, "Ester", datetime(2002, 9, 9, 10, 36)),
    Animal(4, 1, "Eddie", datetime(2010, 6, 8, 1, 24)),
    Animal(5, 2, "Zoe", datetime(2005, 11, 12, 3, 44)),
]


def populate(repo: ZooRepository) -> None:
    """Insert the sample rows with literal, string-formatted statements."""
    for species in SAMPLE_SPECIES:
        if repo.insert_row(INSERT_SPECIES_SQL % species.values()):
            logger.info(f"Added species {species}")
    for animal in SAMPLE_ANIMALS:
        if repo.insert_row(INSERT_ANIMAL_SQL % animal.values()):
            logger.info(f"Added animal {animal}")


def main() -> None:
    """Run the demo."""

    # ── 1. Logging and driver ─────────────────────────────
    configure_logging()
    register_driver()

    # ── 2. Schema, sample rows and counts ─────────────────
    try:
        init_db_handle(config.DB_PATH)
        create_tables()

        repo = ZooRepository()
        populate(repo)

        for table in ("species", "animal"):
            rows = repo.count_rows(COUNT_ROWS_SQL % table)
            print(f"There are {rows} rows in the '{table}' table")
    except (sqlite3.Error, DatabaseConnectionError):
        logger.exception("Database setup failed")
    finally:
        close_db_handle()

    # ── 3. Last rows (failures here end the run) ──────────
    for table in ("species", "animal"):
        row = get_last_row(SELECT_ALL_SQL % table, config.DB_PATH)
        print(f"The last row in the '{table}' table is: {{{row}}}")

    # ── 4. Cleanup ────────────────────────────────────────
    shutdown(config.DB_PATH)


if __name__ == "__main__":
    main()
