# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
SQLRepository: table-agnostic CRUD over reader/writer connection pools.
"""

from __future__ import annotations

from .config import ConnectionConfig, PoolConfig
from .connection_pool import ConnectionPool, DbConnection, connect_sqlite, get_connector, register_connector
from .constants import OrderDirection
from .crud_handlers import DeleteAllHandler, DeleteHandler, ExistsHandler, FindByIdHandler, UpdateHandler
from .dialect import DialectRules, get_dialect_rules, resolve_dialect
from .duplicate_key import DuplicateKeyClassifier, is_duplicate_key_error
from .exceptions import PersistException, RecordNotFoundException
from .insert_handler import InsertHandler
from .pk_generators import IntegerPkGenerator, StringPkGenerator
from .pk_strategy import PkStrategy
from .query_executor import ExecutionResult, QueryExecutor
from .repository import Repository, RepositoryInterface
from .sql_expressions import FilterExpression, QueryField, and_, col, or_
from .sql_query import Delete, Insert, Query, Update
from .sql_query_builder import PreparedQuery

__version__ = "0.1.0"

__all__ = [
    "ConnectionConfig",
    "PoolConfig",
    "ConnectionPool",
    "DbConnection",
    "connect_sqlite",
    "get_connector",
    "register_connector",
    "OrderDirection",
    "DeleteAllHandler",
    "DeleteHandler",
    "ExistsHandler",
    "FindByIdHandler",
    "UpdateHandler",
    "DialectRules",
    "get_dialect_rules",
    "resolve_dialect",
    "DuplicateKeyClassifier",
    "is_duplicate_key_error",
    "PersistException",
    "RecordNotFoundException",
    "InsertHandler",
    "IntegerPkGenerator",
    "StringPkGenerator",
    "PkStrategy",
    "ExecutionResult",
    "QueryExecutor",
    "Repository",
    "RepositoryInterface",
    "FilterExpression",
    "QueryField",
    "and_",
    "col",
    "or_",
    "Delete",
    "Insert",
    "Query",
    "Update",
    "PreparedQuery",
]
