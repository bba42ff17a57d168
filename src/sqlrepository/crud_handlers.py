# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Pass-through handlers for update, delete, find-by-id and exists.

Each handler builds one statement and runs it on the executor it was created
with; driver errors propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .sql_expressions import QueryField
from .sql_query import Delete, Query, Update
from .query_executor import QueryExecutor

PrimaryKey = Union[int, str]


class UpdateHandler:
    """Updates one row by primary key."""

    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    def __call__(self, table: str, pk_column: str, id: PrimaryKey, values: Mapping[str, Any]) -> bool:
        if not values:
            return True

        prepared = (
            Update()
            .table(table)
            .set(values)
            .where(QueryField(pk_column) == id)
            .sql(self._executor.dialect)
        )
        self._executor.execute(prepared)
        return True


class DeleteHandler:
    """Deletes one row by primary key."""

    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    def __call__(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        prepared = Delete().from_(table).where(QueryField(pk_column) == id).sql(self._executor.dialect)
        self._executor.execute(prepared)
        return True


class DeleteAllHandler:
    """Deletes every row whose primary key is in a list."""

    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    def __call__(self, table: str, pk_column: str, ids: Sequence[PrimaryKey]) -> None:
        if not ids:
            return

        prepared = Delete().from_(table).where(QueryField(pk_column).in_(ids)).sql(self._executor.dialect)
        self._executor.execute(prepared)


class FindByIdHandler:
    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    def __call__(self, table: str, pk_column: str, id: PrimaryKey) -> Optional[Dict[str, Any]]:
        prepared = Query().select("*").from_(table).where(QueryField(pk_column) == id).sql(self._executor.dialect)
        return self._executor.fetch_one(prepared)


class ExistsHandler:
    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    def __call__(self, table: str, pk_column: str, id: PrimaryKey) -> bool:
        prepared = (
            Query()
            .select("1")
            .from_(table)
            .where(QueryField(pk_column) == id)
            .limit(1)
            .sql(self._executor.dialect)
        )
        return self._executor.fetch_one(prepared) is not None
