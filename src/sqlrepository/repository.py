# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Generic CRUD repository with read/write splitting.

Writes (insert, update, delete, delete_all) run on the pool's writer, reads
(find_by_id, find_by_query, exists) on a reader. Each repository creates at
most one writer executor and one reader executor, on first use, and keeps
them for its lifetime whatever tables it touches.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .connection_pool import ConnectionPool
from .constants import ErrorMessages, ExecutorRole, LoggingConstants, PrimaryKeyConstants
from .crud_handlers import DeleteAllHandler, DeleteHandler, ExistsHandler, FindByIdHandler, UpdateHandler
from .duplicate_key import DuplicateKeyClassifier
from .exceptions import RecordNotFoundException
from .insert_handler import InsertHandler
from .pk_strategy import PkStrategy
from .query_executor import QueryExecutor
from .sql_query import Query
from .sql_query_builder import PreparedQuery

logger = logging.getLogger(__name__)

PrimaryKey = Union[int, str]
Row = Dict[str, Any]


class RepositoryInterface(ABC):
    """Public CRUD contract."""

    @abstractmethod
    def insert(
        self,
        table: str,
        pk_column: str,
        values: Mapping[str, Any],
        pk_strategy: PkStrategy = PkStrategy.AUTOINCREMENT,
    ) -> PrimaryKey:
        """
        Insert a new row.

        Args:
            table: Table name
            pk_column: Primary key column
            values: Column values (without the key for AUTOINCREMENT/INTEGER/STRING)
            pk_strategy: How the primary key is produced

        Returns:
            The primary key of the new row
        """

    @abstractmethod
    def update(self, table: str, pk_column: str, id: PrimaryKey, values: Mapping[str, Any]) -> bool:
        """Update the row with key ``id``; empty ``values`` is a successful no-op."""

    @abstractmethod
    def delete(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        """Delete the row with key ``id``."""

    @abstractmethod
    def delete_all(self, table: str, pk_column: str, ids: Sequence[PrimaryKey]) -> None:
        """Delete every row whose key is in ``ids``; an empty list deletes nothing."""

    @abstractmethod
    def find_by_id(self, table: str, pk_column: str, id: PrimaryKey) -> Optional[Row]:
        """The row with key ``id``, or ``None``."""

    @abstractmethod
    def find_by_query(self, query: Union[Query, PreparedQuery]) -> List[Row]:
        """
        Run a caller-built SELECT.

        The caller is responsible for the complete query (columns, table,
        WHERE, ORDER BY, LIMIT); nothing is added to it.
        """

    @abstractmethod
    def exists(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        """Whether a row with key ``id`` exists."""


class Repository(RepositoryInterface):
    """CRUD repository over a reader/writer connection pool."""

    def __init__(
        self,
        pool: ConnectionPool,
        *,
        max_insert_attempts: int = PrimaryKeyConstants.MAX_INSERT_ATTEMPTS,
        duplicate_key_classifier: Optional[DuplicateKeyClassifier] = None,
    ):
        """
        Args:
            pool: Source of reader and writer connections
            max_insert_attempts: Attempts for INTEGER-strategy inserts
            duplicate_key_classifier: Replaces the default duplicate-key detection

        Raises:
            ValueError: If max_insert_attempts is less than 1
        """
        if max_insert_attempts < 1:
            raise ValueError(ErrorMessages.INVALID_MAX_ATTEMPTS.format(value=max_insert_attempts))
        self._pool = pool
        self._max_insert_attempts = max_insert_attempts
        self._duplicate_key_classifier = duplicate_key_classifier

        self._write_executor: Optional[QueryExecutor] = None
        self._read_executor: Optional[QueryExecutor] = None

        self._insert_handler: Optional[InsertHandler] = None
        self._update_handler: Optional[UpdateHandler] = None
        self._delete_handler: Optional[DeleteHandler] = None
        self._delete_all_handler: Optional[DeleteAllHandler] = None
        self._find_by_id_handler: Optional[FindByIdHandler] = None
        self._exists_handler: Optional[ExistsHandler] = None

    def insert(
        self,
        table: str,
        pk_column: str,
        values: Mapping[str, Any],
        pk_strategy: PkStrategy = PkStrategy.AUTOINCREMENT,
    ) -> PrimaryKey:
        if self._insert_handler is None:
            self._insert_handler = InsertHandler(
                self._writer(),
                max_attempts=self._max_insert_attempts,
                duplicate_key_classifier=self._duplicate_key_classifier,
            )
        return self._insert_handler(table, pk_column, values, pk_strategy)

    def update(self, table: str, pk_column: str, id: PrimaryKey, values: Mapping[str, Any]) -> bool:
        if self._update_handler is None:
            self._update_handler = UpdateHandler(self._writer())
        return self._update_handler(table, pk_column, id, values)

    def delete(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        if self._delete_handler is None:
            self._delete_handler = DeleteHandler(self._writer())
        return self._delete_handler(table, pk_column, id)

    def delete_all(self, table: str, pk_column: str, ids: Sequence[PrimaryKey]) -> None:
        if self._delete_all_handler is None:
            self._delete_all_handler = DeleteAllHandler(self._writer())
        self._delete_all_handler(table, pk_column, ids)

    def find_by_id(self, table: str, pk_column: str, id: PrimaryKey) -> Optional[Row]:
        if self._find_by_id_handler is None:
            self._find_by_id_handler = FindByIdHandler(self._reader())
        return self._find_by_id_handler(table, pk_column, id)

    def get_by_id(self, table: str, pk_column: str, id: PrimaryKey) -> Row:
        """
        Like ``find_by_id`` but a missing row is an error.

        Raises:
            RecordNotFoundException: If no row has key ``id``
        """
        row = self.find_by_id(table, pk_column, id)
        if row is None:
            raise RecordNotFoundException(
                ErrorMessages.RECORD_NOT_FOUND.format(table=table, pk_column=pk_column, id=id)
            )
        return row

    def find_by_query(self, query: Union[Query, PreparedQuery]) -> List[Row]:
        reader = self._reader()
        if isinstance(query, PreparedQuery):
            prepared = query
        elif isinstance(query, Query):
            prepared = query.sql(reader.dialect)
        else:
            raise TypeError(ErrorMessages.UNSUPPORTED_QUERY_OBJECT.format(type_name=type(query).__name__))
        return reader.fetch_all(prepared)

    def exists(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        if self._exists_handler is None:
            self._exists_handler = ExistsHandler(self._reader())
        return self._exists_handler(table, pk_column, id)

    def _writer(self) -> QueryExecutor:
        if self._write_executor is None:
            self._write_executor = QueryExecutor(self._pool.get_writer())
            logger.debug(
                LoggingConstants.EXECUTOR_CREATED.format(role=ExecutorRole.WRITER, dialect=self._write_executor.dialect)
            )
        return self._write_executor

    def _reader(self) -> QueryExecutor:
        if self._read_executor is None:
            self._read_executor = QueryExecutor(self._pool.get_reader())
            logger.debug(
                LoggingConstants.EXECUTOR_CREATED.format(role=ExecutorRole.READER, dialect=self._read_executor.dialect)
            )
        return self._read_executor

    def __repr__(self) -> str:
        return f"Repository(pool={self._pool!r})"
