# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Fluent statement builders with method chaining.

Every builder method returns a new builder; the receiver is never modified,
so a partially built query can be reused as a template.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple, Union

from .constants import ErrorMessages, OrderDirection
from .sql_expressions import FilterExpression, QueryField
from .sql_query_builder import (
    DeleteState,
    InsertState,
    PreparedQuery,
    SelectState,
    SqlQueryBuilder,
    UpdateState,
)


def _coerce_direction(direction: Union[str, OrderDirection]) -> OrderDirection:
    if isinstance(direction, OrderDirection):
        return direction
    try:
        return OrderDirection(str(direction).upper())
    except ValueError:
        raise ValueError(ErrorMessages.INVALID_ORDER_DIRECTION.format(direction)) from None


def _check_filters(expressions: Tuple[Any, ...]) -> None:
    for expression in expressions:
        if not isinstance(expression, FilterExpression):
            raise ValueError(ErrorMessages.INVALID_FILTER_EXPRESSION.format(expression))


def _field_name(item: Union[str, QueryField]) -> str:
    return item.name if isinstance(item, QueryField) else item


class Query:
    """
    SELECT builder.

    Example::

        Query().select("*").from_("users").where(col("status") == "active").order_by("id", "DESC").limit(10)
    """

    def __init__(self, table: Optional[str] = None):
        self._state = SelectState(table=table)

    def _copy_with_state(self, **kwargs) -> Query:
        new_query = Query.__new__(Query)
        new_query._state = self._state.copy(**kwargs)
        return new_query

    def select(self, *fields: Union[str, QueryField]) -> Query:
        """Set the select list; expressions such as ``COUNT(*) AS cnt`` are kept verbatim."""
        return self._copy_with_state(select_fields=[_field_name(f) for f in fields])

    def from_(self, table: str) -> Query:
        return self._copy_with_state(table=table)

    def where(self, *expressions: FilterExpression) -> Query:
        """Add filter expressions; multiple calls are combined with AND."""
        _check_filters(expressions)
        return self._copy_with_state(filters=[*self._state.filters, *expressions])

    filter = where

    def filter_by(self, **kwargs: Any) -> Query:
        """Filter by column equality conditions."""
        return self.where(*(QueryField(name) == value for name, value in kwargs.items()))

    def order_by(self, field: Union[str, QueryField], direction: Union[str, OrderDirection] = OrderDirection.ASC) -> Query:
        if not isinstance(field, (str, QueryField)):
            raise ValueError(ErrorMessages.INVALID_ORDER_BY_ARGUMENT.format(field))
        new_order = [*self._state.order_by, (_field_name(field), _coerce_direction(direction))]
        return self._copy_with_state(order_by=new_order)

    def limit(self, count: int) -> Query:
        return self._copy_with_state(limit_value=count)

    def offset(self, count: int) -> Query:
        return self._copy_with_state(offset_value=count)

    def distinct(self) -> Query:
        return self._copy_with_state(distinct=True)

    def sql(self, dialect: str) -> PreparedQuery:
        """Render for ``dialect``."""
        return SqlQueryBuilder(dialect).build_select(self._state)

    def __repr__(self) -> str:
        return f"Query(table={self._state.table!r}, filters={len(self._state.filters)})"


class Insert:
    """INSERT builder."""

    def __init__(self) -> None:
        self._state = InsertState()

    def _copy_with_state(self, **kwargs) -> Insert:
        new_insert = Insert.__new__(Insert)
        new_insert._state = self._state.copy(**kwargs)
        return new_insert

    def into(self, table: str) -> Insert:
        return self._copy_with_state(table=table)

    def set(self, values: Mapping[str, Any]) -> Insert:
        return self._copy_with_state(values={**self._state.values, **values})

    def returning(self, column: str) -> Insert:
        """Ask the database to return ``column`` of the inserted row."""
        return self._copy_with_state(returning=column)

    def sql(self, dialect: str) -> PreparedQuery:
        return SqlQueryBuilder(dialect).build_insert(self._state)


class Update:
    """UPDATE builder."""

    def __init__(self) -> None:
        self._state = UpdateState()

    def _copy_with_state(self, **kwargs) -> Update:
        new_update = Update.__new__(Update)
        new_update._state = self._state.copy(**kwargs)
        return new_update

    def table(self, table: str) -> Update:
        return self._copy_with_state(table=table)

    def set(self, values: Mapping[str, Any]) -> Update:
        return self._copy_with_state(values={**self._state.values, **values})

    def where(self, *expressions: FilterExpression) -> Update:
        _check_filters(expressions)
        return self._copy_with_state(filters=[*self._state.filters, *expressions])

    def sql(self, dialect: str) -> PreparedQuery:
        return SqlQueryBuilder(dialect).build_update(self._state)


class Delete:
    """DELETE builder."""

    def __init__(self) -> None:
        self._state = DeleteState()

    def _copy_with_state(self, **kwargs) -> Delete:
        new_delete = Delete.__new__(Delete)
        new_delete._state = self._state.copy(**kwargs)
        return new_delete

    def from_(self, table: str) -> Delete:
        return self._copy_with_state(table=table)

    def where(self, *expressions: FilterExpression) -> Delete:
        _check_filters(expressions)
        return self._copy_with_state(filters=[*self._state.filters, *expressions])

    def sql(self, dialect: str) -> PreparedQuery:
        return SqlQueryBuilder(dialect).build_delete(self._state)
