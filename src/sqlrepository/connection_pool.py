# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Reader/writer connection pool over DB-API 2.0 connections.

The pool owns connection lifecycle. Repositories and executors only borrow the
handles returned by ``get_writer()`` and ``get_reader()`` and never close them.
"""

from __future__ import annotations

import itertools
import logging
import sqlite3
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from .config import ConnectionConfig, PoolConfig
from .constants import DialectConstants, ErrorMessages, LoggingConstants
from .dialect import canonical_dialect

logger = logging.getLogger(__name__)

Connector = Callable[[ConnectionConfig], "DbConnection"]


class DbConnection:
    """A physical DB-API connection plus the driver name it was opened with."""

    def __init__(
        self,
        native: Any,
        driver_name: str,
        *,
        manage_commits: bool = False,
        name: Optional[str] = None,
    ):
        """
        Args:
            native: DB-API 2.0 connection object
            driver_name: Driver identifier, e.g. ``"sqlite"``, ``"mysql"``, ``"pgsql"``
            manage_commits: Commit after each write and roll back after a failed
                statement. Leave False for connections already in autocommit mode.
            name: Label used in log messages
        """
        self._native = native
        self._driver_name = driver_name
        self.manage_commits = manage_commits
        self.name = name or driver_name
        self._closed = False

    @property
    def driver_name(self) -> str:
        return self._driver_name

    @property
    def native(self) -> Any:
        return self._native

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def error_types(self) -> Tuple[Type[BaseException], ...]:
        """DB-API ``Error`` class exposed by the connection, else ``Exception``."""
        error_type = getattr(self._native, "Error", None)
        if isinstance(error_type, type) and issubclass(error_type, BaseException):
            return (error_type,)
        return (Exception,)

    def commit(self) -> None:
        self._native.commit()

    def rollback(self) -> None:
        self._native.rollback()

    def close(self) -> None:
        if not self._closed:
            self._native.close()
            self._closed = True

    def __repr__(self) -> str:
        return f"DbConnection(name={self.name!r}, driver={self._driver_name!r})"


def connect_sqlite(config: ConnectionConfig) -> DbConnection:
    """
    Open a SQLite connection, in autocommit mode unless ``options`` sets an
    ``isolation_level``; commits are then managed per statement.
    """
    options = {"check_same_thread": False, "isolation_level": None, **config.options}
    native = sqlite3.connect(config.database, **options)
    return DbConnection(
        native,
        DialectConstants.SQLITE,
        manage_commits=options["isolation_level"] is not None,
        name=config.database,
    )


_CONNECTORS: Dict[str, Connector] = {
    DialectConstants.SQLITE: connect_sqlite,
}
_CONNECTORS_LOCK = RLock()


def register_connector(driver: str, connector: Connector) -> None:
    """
    Register a factory that opens connections for ``driver``.

    Only SQLite is built in. Other drivers are plugged in by the application,
    e.g. a function calling ``pymysql.connect`` and wrapping the result in a
    ``DbConnection(native, "mysql", manage_commits=True)``.
    """
    with _CONNECTORS_LOCK:
        _CONNECTORS[driver.lower()] = connector


def get_connector(driver: str) -> Connector:
    """Connector for ``driver``, looked up by name and then by its dialect alias."""
    key = driver.lower()
    with _CONNECTORS_LOCK:
        connector = _CONNECTORS.get(key) or _CONNECTORS.get(canonical_dialect(key))
    if connector is None:
        raise ValueError(ErrorMessages.UNKNOWN_CONNECTOR.format(driver=driver))
    return connector


class ConnectionPool:
    """One writer connection and any number of reader connections."""

    def __init__(self, writer: DbConnection, readers: Optional[Sequence[DbConnection]] = None):
        self._writer = writer
        self._readers: List[DbConnection] = list(readers or [])
        self._reader_cycle = itertools.cycle(self._readers) if self._readers else None
        self._lock = RLock()
        self._closed = False

    @classmethod
    def from_config(cls, config: PoolConfig) -> ConnectionPool:
        """Open every connection described by ``config`` through the registered connectors."""
        writer = cls._open(config.writer)
        readers: List[DbConnection] = []
        try:
            for reader_config in config.readers:
                readers.append(cls._open(reader_config))
        except Exception:
            # Do not leak the connections opened so far
            for connection in [writer, *readers]:
                connection.close()
            raise
        return cls(writer, readers)

    @staticmethod
    def _open(config: ConnectionConfig) -> DbConnection:
        connection = get_connector(config.driver)(config)
        logger.debug(LoggingConstants.CONNECTION_OPENED.format(driver=config.driver, name=connection.name))
        return connection

    def get_writer(self) -> DbConnection:
        self._ensure_open()
        return self._writer

    def get_reader(self) -> DbConnection:
        """Next reader in round-robin order, or the writer when there are no readers."""
        self._ensure_open()
        if self._reader_cycle is None:
            return self._writer
        with self._lock:
            return next(self._reader_cycle)

    @property
    def readers(self) -> List[DbConnection]:
        return list(self._readers)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(ErrorMessages.POOL_CLOSED)

    def close(self) -> None:
        """Close every connection; failures are logged and the first one re-raised."""
        if self._closed:
            return
        self._closed = True
        first_error: Optional[BaseException] = None
        for connection in [self._writer, *self._readers]:
            try:
                connection.close()
            except Exception as e:
                logger.warning(LoggingConstants.CONNECTION_CLOSE_FAILED.format(name=connection.name, error=e))
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __enter__(self) -> ConnectionPool:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ConnectionPool(writer={self._writer!r}, readers={len(self._readers)})"
