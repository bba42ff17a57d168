# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Insert handling with configurable primary key strategies.

INTEGER inserts read MAX+1 and insert in two steps, so concurrent writers can
pick the same key. The database's unique constraint rejects the loser, which
is retried with a fresh key a bounded number of times. Every other strategy
inserts exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .constants import ErrorMessages, LoggingConstants, PrimaryKeyConstants
from .dialect import get_dialect_rules
from .duplicate_key import DuplicateKeyClassifier, is_duplicate_key_error
from .exceptions import PersistException
from .pk_generators import IntegerPkGenerator, StringPkGenerator
from .pk_strategy import PkStrategy
from .query_executor import ExecutionResult, QueryExecutor
from .sql_query import Insert

logger = logging.getLogger(__name__)

PrimaryKey = Union[int, str]


class InsertHandler:
    """Inserts one row and returns its primary key."""

    def __init__(
        self,
        executor: QueryExecutor,
        *,
        max_attempts: int = PrimaryKeyConstants.MAX_INSERT_ATTEMPTS,
        duplicate_key_classifier: Optional[DuplicateKeyClassifier] = None,
        integer_pk_generator: Optional[IntegerPkGenerator] = None,
        string_pk_generator: Optional[StringPkGenerator] = None,
    ):
        """
        Args:
            executor: Writer-bound executor
            max_attempts: Insert attempts for the INTEGER strategy
            duplicate_key_classifier: Decides whether a driver error is a key collision
            integer_pk_generator: MAX+1 generator
            string_pk_generator: UUID generator

        Raises:
            ValueError: If max_attempts is less than 1
        """
        if max_attempts < 1:
            raise ValueError(ErrorMessages.INVALID_MAX_ATTEMPTS.format(value=max_attempts))
        self._executor = executor
        self._max_attempts = max_attempts
        self._is_duplicate_key_error = duplicate_key_classifier or is_duplicate_key_error
        self._integer_pk_generator = integer_pk_generator or IntegerPkGenerator()
        self._string_pk_generator = string_pk_generator or StringPkGenerator()

    def __call__(
        self,
        table: str,
        pk_column: str,
        values: Mapping[str, Any],
        pk_strategy: PkStrategy,
    ) -> PrimaryKey:
        """
        Insert ``values`` into ``table``.

        Args:
            table: Table name
            pk_column: Primary key column
            values: Column values; never modified
            pk_strategy: How the key is produced

        Returns:
            The primary key of the inserted row

        Raises:
            PersistException: On empty values, an invalid caller key, an
                exhausted retry budget or any wrapped driver failure
        """
        if not values:
            raise PersistException(ErrorMessages.EMPTY_INSERT_VALUES.format(table=table))

        if pk_strategy is PkStrategy.AUTOINCREMENT:
            return self._autoincrement(table, pk_column, values)
        if pk_strategy is PkStrategy.INTEGER:
            return self._integer_pk(table, pk_column, values)
        if pk_strategy is PkStrategy.STRING:
            return self._string_pk(table, pk_column, values)
        if pk_strategy is PkStrategy.NONE:
            return self._provided_pk(table, pk_column, values)
        raise ValueError(ErrorMessages.UNSUPPORTED_PK_STRATEGY.format(strategy=pk_strategy))

    def _autoincrement(self, table: str, pk_column: str, values: Mapping[str, Any]) -> int:
        statement = Insert().into(table).set(values)
        # @@ STEP: PostgreSQL has no lastrowid; ask for the key with RETURNING instead
        if get_dialect_rules(self._executor.dialect).returning_for_generated_key:
            statement = statement.returning(pk_column)

        result = self._execute_wrapped(table, statement)
        if result.last_insert_id is None:
            raise PersistException(ErrorMessages.NO_GENERATED_KEY.format(table=table))
        return int(result.last_insert_id)

    def _integer_pk(self, table: str, pk_column: str, values: Mapping[str, Any]) -> int:
        dialect = self._executor.dialect

        for attempt in range(1, self._max_attempts + 1):
            pk = self._integer_pk_generator.generate(self._executor.native, dialect, table, pk_column)
            logger.debug(LoggingConstants.INTEGER_PK_GENERATED.format(pk=pk, table=table, pk_column=pk_column))
            prepared = Insert().into(table).set({**values, pk_column: pk}).sql(dialect)

            try:
                self._executor.execute(prepared)
                return pk
            except self._executor.connection.error_types as e:
                if not self._is_duplicate_key_error(e) or attempt == self._max_attempts:
                    logger.error(
                        LoggingConstants.INSERT_FAILED.format(
                            table=table, attempt=attempt, max_attempts=self._max_attempts, error=e
                        )
                    )
                    raise PersistException(ErrorMessages.INSERT_FAILED.format(table=table, error=e)) from e
                logger.warning(
                    LoggingConstants.DUPLICATE_KEY_RETRY.format(
                        pk=pk,
                        table=table,
                        pk_column=pk_column,
                        attempt=attempt,
                        max_attempts=self._max_attempts,
                        error=e,
                    )
                )

        raise PersistException(
            ErrorMessages.INSERT_ATTEMPTS_EXHAUSTED.format(table=table, attempts=self._max_attempts)
        )

    def _string_pk(self, table: str, pk_column: str, values: Mapping[str, Any]) -> str:
        pk = self._string_pk_generator.generate()
        logger.debug(LoggingConstants.STRING_PK_GENERATED.format(pk=pk, table=table, pk_column=pk_column))
        self._execute_wrapped(table, Insert().into(table).set({**values, pk_column: pk}))
        return pk

    def _provided_pk(self, table: str, pk_column: str, values: Mapping[str, Any]) -> PrimaryKey:
        if pk_column not in values:
            raise PersistException(ErrorMessages.MISSING_PROVIDED_PK.format(pk_column=pk_column, table=table))

        pk = values[pk_column]
        # bool is an int subclass but never a valid key
        if isinstance(pk, bool) or not isinstance(pk, (int, str)):
            raise PersistException(
                ErrorMessages.INVALID_PK_TYPE.format(table=table, type_name=type(pk).__name__)
            )

        self._execute_wrapped(table, Insert().into(table).set(values))
        return pk

    def _execute_wrapped(self, table: str, statement: Insert) -> ExecutionResult:
        prepared = statement.sql(self._executor.dialect)
        try:
            return self._executor.execute(prepared)
        except self._executor.connection.error_types as e:
            raise PersistException(ErrorMessages.INSERT_FAILED.format(table=table, error=e)) from e
