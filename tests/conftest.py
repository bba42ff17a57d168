# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and shared fixtures for SQLRepository tests.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Generator

import pytest

from sqlrepository import ConnectionPool, DbConnection, Repository

from . import cleanup_test_db, create_test_db_path

TABLE_AUTO = "test_auto_pk"
TABLE_INT = "test_integer_pk"
TABLE_STR = "test_string_pk"
PK = "id"

SCHEMA = (
    f"""
    CREATE TABLE {TABLE_AUTO} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT,
        age INTEGER,
        status TEXT DEFAULT 'active'
    )
    """,
    f"""
    CREATE TABLE {TABLE_INT} (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    f"""
    CREATE TABLE {TABLE_STR} (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
)


def open_sqlite(db_path: Path, name: str) -> DbConnection:
    """Autocommit SQLite connection so readers see writes immediately."""
    native = sqlite3.connect(str(db_path), isolation_level=None, check_same_thread=False)
    return DbConnection(native, "sqlite", name=name)


@pytest.fixture(scope="function")
def test_db_path() -> Generator[Path, None, None]:
    """Temporary SQLite database file with the test schema."""
    db_path = create_test_db_path()
    with sqlite3.connect(str(db_path)) as conn:
        for statement in SCHEMA:
            conn.execute(statement)
    conn.close()
    yield db_path
    cleanup_test_db(db_path)


@pytest.fixture(scope="function")
def pool(test_db_path: Path) -> Generator[ConnectionPool, None, None]:
    """Pool with one writer and one reader on the same database file."""
    writer = open_sqlite(test_db_path, "writer")
    reader = open_sqlite(test_db_path, "reader")
    connection_pool = ConnectionPool(writer, [reader])
    try:
        yield connection_pool
    finally:
        connection_pool.close()


@pytest.fixture(scope="function")
def repository(pool: ConnectionPool) -> Repository:
    return Repository(pool)


@pytest.fixture(scope="function")
def writer_native(pool: ConnectionPool) -> sqlite3.Connection:
    """Raw writer connection for seeding rows behind the repository's back."""
    return pool.get_writer().native
