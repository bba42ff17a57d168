# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Executes prepared statements against one database connection.
"""

from __future__ import annotations

import logging
from contextlib import closing, contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from .connection_pool import DbConnection
from .constants import LoggingConstants
from .dialect import resolve_dialect
from .sql_query_builder import PreparedQuery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a write statement."""
    rowcount: int
    last_insert_id: Optional[Any] = None


def _row_to_dict(cursor: Any, row: Any) -> Dict[str, Any]:
    if isinstance(row, dict):
        return dict(row)
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row))


class QueryExecutor:
    """
    Runs prepared statements on a single connection.

    The dialect is resolved from the connection's driver name once, at
    construction. Driver errors are never wrapped here; classifying them is the
    caller's job. On connections with ``manage_commits`` every statement, read
    or write, ends its own transaction so readers see fresh snapshots and a
    failed statement never leaves the connection in an aborted transaction.
    """

    def __init__(self, connection: DbConnection):
        self._connection = connection
        self._dialect = resolve_dialect(connection.driver_name)

    @property
    def dialect(self) -> str:
        return self._dialect

    @property
    def connection(self) -> DbConnection:
        return self._connection

    @property
    def native(self) -> Any:
        """Underlying DB-API connection."""
        return self._connection.native

    def fetch_all(self, prepared: PreparedQuery) -> List[Dict[str, Any]]:
        """Execute and return every row as a dict; statements without a result set yield ``[]``."""
        with self._statement_scope(), closing(self._run(prepared)) as cursor:
            if cursor.description is None:
                return []
            return [_row_to_dict(cursor, row) for row in cursor.fetchall()]

    def fetch_one(self, prepared: PreparedQuery) -> Optional[Dict[str, Any]]:
        """Execute and return the first row, or ``None`` when nothing matched."""
        with self._statement_scope(), closing(self._run(prepared)) as cursor:
            if cursor.description is None:
                return None
            row = cursor.fetchone()
            return None if row is None else _row_to_dict(cursor, row)

    def execute(self, prepared: PreparedQuery) -> ExecutionResult:
        """
        Execute a write statement.

        The generated key is taken from a returned row (``RETURNING``) when the
        statement produces one, otherwise from ``cursor.lastrowid``. Connections
        with ``manage_commits`` are committed on success and rolled back before
        the driver error is re-raised.
        """
        with self._statement_scope(), closing(self._run(prepared)) as cursor:
            if cursor.description is not None:
                row = cursor.fetchone()
                last_insert_id = None if row is None else next(iter(_row_to_dict(cursor, row).values()), None)
            else:
                last_insert_id = getattr(cursor, "lastrowid", None)
            result = ExecutionResult(rowcount=cursor.rowcount, last_insert_id=last_insert_id)
        return result

    @contextmanager
    def _statement_scope(self) -> Iterator[None]:
        """Commit after the enclosed statement, or roll back and re-raise its error."""
        try:
            yield
            if self._connection.manage_commits:
                self._connection.commit()
        except Exception as e:
            if self._connection.manage_commits:
                self._rollback_after(e)
            raise

    def _rollback_after(self, error: BaseException) -> None:
        # The statement's error is re-raised by the caller; a failed rollback is only logged
        try:
            self._connection.rollback()
        except Exception as rollback_error:
            logger.warning(
                LoggingConstants.ROLLBACK_FAILED.format(
                    name=self._connection.name, error=error, rollback_error=rollback_error
                )
            )
            return
        logger.debug(LoggingConstants.ROLLBACK_AFTER_ERROR.format(name=self._connection.name, error=error))

    def _run(self, prepared: PreparedQuery) -> Any:
        logger.debug(LoggingConstants.STATEMENT_EXECUTING.format(sql=prepared.sql))
        cursor = self._connection.native.cursor()
        try:
            cursor.execute(prepared.sql, tuple(prepared.bindings))
        except Exception:
            cursor.close()
            raise
        return cursor

    def __repr__(self) -> str:
        return f"QueryExecutor(connection={self._connection!r}, dialect={self._dialect!r})"
