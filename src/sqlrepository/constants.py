# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Constants module for SQLRepository.

This module centralizes all constants, configuration values, and literal strings
used throughout the SQLRepository codebase. No magic values are allowed elsewhere.

:module: constants
:synopsis: Centralized constants and configuration for SQLRepository
:author: SQLRepository Contributors
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


# ============================================================================
# SQL QUERY CONSTANTS
# ============================================================================

class SQLConstants:
    """SQL keywords and operators used by the statement builder."""

    # @@ STEP 1: Define statement keywords
    SELECT: Final[str] = "SELECT"
    FROM: Final[str] = "FROM"
    WHERE: Final[str] = "WHERE"
    INSERT_INTO: Final[str] = "INSERT INTO"
    VALUES: Final[str] = "VALUES"
    UPDATE: Final[str] = "UPDATE"
    SET: Final[str] = "SET"
    DELETE_FROM: Final[str] = "DELETE FROM"
    RETURNING: Final[str] = "RETURNING"
    ORDER_BY: Final[str] = "ORDER BY"
    LIMIT: Final[str] = "LIMIT"
    OFFSET: Final[str] = "OFFSET"
    DISTINCT: Final[str] = "DISTINCT"
    STAR: Final[str] = "*"

    # @@ STEP 2: Define logical operators
    AND: Final[str] = "AND"
    OR: Final[str] = "OR"
    NOT: Final[str] = "NOT"
    IN: Final[str] = "IN"
    NOT_IN: Final[str] = "NOT IN"
    IS_NULL: Final[str] = "IS NULL"
    IS_NOT_NULL: Final[str] = "IS NOT NULL"
    LIKE: Final[str] = "LIKE"
    NOT_LIKE: Final[str] = "NOT LIKE"
    BETWEEN: Final[str] = "BETWEEN"

    # @@ STEP 3: Define comparison operators
    EQ: Final[str] = "="
    NEQ: Final[str] = "<>"
    LT: Final[str] = "<"
    LTE: Final[str] = "<="
    GT: Final[str] = ">"
    GTE: Final[str] = ">="

    # @@ STEP 4: Constant predicates for empty IN lists
    ALWAYS_FALSE: Final[str] = "1 = 0"
    ALWAYS_TRUE: Final[str] = "1 = 1"

    # @@ STEP 5: Formatting
    FIELD_SEPARATOR: Final[str] = ", "
    CLAUSE_SEPARATOR: Final[str] = " "


class OrderDirection(StrEnum):
    """Sort direction for ORDER BY items."""

    ASC = "ASC"
    DESC = "DESC"


# ============================================================================
# DIALECT CONSTANTS
# ============================================================================

class DialectConstants:
    """Canonical dialect tokens and driver name aliases."""

    POSTGRES: Final[str] = "postgres"
    MYSQL: Final[str] = "mysql"
    SQLITE: Final[str] = "sqlite"

    # @@ STEP 1: Driver identifiers renamed by dialect resolution.
    # || Only the PDO-style "pgsql"; everything else is kept as given.
    DRIVER_ALIASES: Final[dict[str, str]] = {
        "pgsql": POSTGRES,
    }

    # DB-API module names, used only to pick rendering rules and connectors
    MODULE_ALIASES: Final[dict[str, str]] = {
        "postgresql": POSTGRES,
        "psycopg": POSTGRES,
        "psycopg2": POSTGRES,
        "sqlite3": SQLITE,
        "pymysql": MYSQL,
        "mysqldb": MYSQL,
    }

    # @@ STEP 2: Bind placeholders
    QMARK_PLACEHOLDER: Final[str] = "?"
    FORMAT_PLACEHOLDER: Final[str] = "%s"

    # @@ STEP 3: Identifier quoting
    DOUBLE_QUOTE: Final[str] = '"'
    BACKTICK: Final[str] = "`"

    # Plain or dotted identifier (schema.table / table.column)
    IDENTIFIER_PATTERN: Final[str] = r"^[A-Za-z_][A-Za-z0-9_$]*(\.[A-Za-z_][A-Za-z0-9_$]*)*$"


# ============================================================================
# PRIMARY KEY CONSTANTS
# ============================================================================

class PrimaryKeyConstants:
    """Primary key generation settings."""

    # First key handed out by the MAX+1 generator on an empty table
    INTEGER_START: Final[int] = 1
    INTEGER_STEP: Final[int] = 1

    # Bounded retry budget for INTEGER inserts colliding on the key
    MAX_INSERT_ATTEMPTS: Final[int] = 3


class DuplicateKeyConstants:
    """Signals used to recognise unique/primary key violations."""

    # SQLSTATE integrity constraint violation (generic) and unique violation (PostgreSQL)
    SQLSTATE_CODES: Final[frozenset[str]] = frozenset({"23000", "23505"})

    # MySQL ER_DUP_ENTRY
    MYSQL_ERROR_CODES: Final[frozenset[int]] = frozenset({1062})

    # Lowercase message fragments; matched case-insensitively
    MESSAGE_MARKERS: Final[tuple[str, ...]] = (
        "duplicate",
        "unique constraint failed",
    )

    # Attribute names drivers use to expose SQLSTATE
    SQLSTATE_ATTRIBUTES: Final[tuple[str, ...]] = ("sqlstate", "pgcode")


# ============================================================================
# CONFIGURATION CONSTANTS
# ============================================================================

class ConfigConstants:
    """Environment variable names for pool configuration."""

    ENV_PREFIX: Final[str] = "SQLREPO_"
    ENV_DRIVER: Final[str] = "DRIVER"
    ENV_DATABASE: Final[str] = "DATABASE"
    ENV_HOST: Final[str] = "HOST"
    ENV_PORT: Final[str] = "PORT"
    ENV_USER: Final[str] = "USER"
    ENV_PASSWORD: Final[str] = "PASSWORD"
    ENV_READER_DATABASES: Final[str] = "READER_DATABASES"
    LIST_SEPARATOR: Final[str] = ","

    DEFAULT_DRIVER: Final[str] = DialectConstants.SQLITE
    MIN_PORT: Final[int] = 1
    MAX_PORT: Final[int] = 65535


class ExecutorRole(StrEnum):
    """Which side of the pool an executor is bound to."""

    WRITER = "writer"
    READER = "reader"


# ============================================================================
# MESSAGES
# ============================================================================

class ErrorMessages:
    """Error message templates."""

    # @@ STEP 1: Insert errors
    EMPTY_INSERT_VALUES: Final[str] = "Cannot insert empty values into {table}"
    MISSING_PROVIDED_PK: Final[str] = "PkStrategy.NONE requires {pk_column} in values for {table}"
    INVALID_PK_TYPE: Final[str] = "Primary key must be int or string for {table}, got {type_name}"
    INSERT_FAILED: Final[str] = "Insert failed for {table}: {error}"
    INSERT_ATTEMPTS_EXHAUSTED: Final[str] = "Insert failed for {table} after {attempts} attempts"
    NO_GENERATED_KEY: Final[str] = "Insert into {table} did not report a generated key"
    INVALID_MAX_ATTEMPTS: Final[str] = "max_insert_attempts must be at least 1, got {value}"
    UNSUPPORTED_PK_STRATEGY: Final[str] = "Unsupported primary key strategy: {strategy!r}"

    # @@ STEP 2: Lookup errors
    RECORD_NOT_FOUND: Final[str] = "No record in {table} with {pk_column} = {id!r}"

    # @@ STEP 3: Builder errors
    INVALID_IDENTIFIER: Final[str] = "Invalid SQL identifier: {!r}"
    MISSING_TABLE: Final[str] = "{statement} statement has no table"
    EMPTY_SET_VALUES: Final[str] = "{statement} statement has no values to set"
    INVALID_LIMIT: Final[str] = "LIMIT/OFFSET must be a non-negative integer, got {!r}"
    INVALID_ORDER_DIRECTION: Final[str] = "Invalid order direction: {!r}"
    INVALID_ORDER_BY_ARGUMENT: Final[str] = "Invalid order_by argument: {!r}"
    INVALID_FILTER_EXPRESSION: Final[str] = "Expected a FilterExpression, got {!r}"
    UNSUPPORTED_QUERY_OBJECT: Final[str] = "Cannot execute query object of type {type_name}"
    EMPTY_COMPOUND: Final[str] = "{operator} requires at least one expression"

    # @@ STEP 4: Connection errors
    UNKNOWN_CONNECTOR: Final[str] = "No connector registered for driver {driver!r}"
    POOL_CLOSED: Final[str] = "Connection pool is closed"


class LoggingConstants:
    """Logging message templates."""

    EXECUTOR_CREATED: Final[str] = "Created {role} executor for dialect {dialect!r}"
    STATEMENT_EXECUTING: Final[str] = "Executing SQL: {sql}"
    INTEGER_PK_GENERATED: Final[str] = "Generated integer key {pk} for {table}.{pk_column}"
    STRING_PK_GENERATED: Final[str] = "Generated string key {pk} for {table}.{pk_column}"
    DUPLICATE_KEY_RETRY: Final[str] = (
        "Duplicate key {pk} on {table}.{pk_column} (attempt {attempt}/{max_attempts}), retrying: {error}"
    )
    INSERT_FAILED: Final[str] = "Insert into {table} failed on attempt {attempt}/{max_attempts}: {error}"
    ROLLBACK_AFTER_ERROR: Final[str] = "Rolled back {name} after failed statement: {error}"
    ROLLBACK_FAILED: Final[str] = "Rollback of {name} failed after {error}: {rollback_error}"
    CONNECTION_OPENED: Final[str] = "Opened {driver} connection {name!r}"
    CONNECTION_CLOSE_FAILED: Final[str] = "Failed to close connection {name!r}: {error}"
