# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Statement state management and SQL builder.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import ErrorMessages, OrderDirection, SQLConstants
from .dialect import DialectRules, get_dialect_rules, is_identifier
from .sql_expressions import FilterExpression, and_


@dataclass(frozen=True)
class PreparedQuery:
    """Parameterized SQL text plus its positional bindings."""
    sql: str
    bindings: Tuple[Any, ...] = ()


class _StateCopyMixin:
    """Copy-on-write support shared by all statement states."""

    _LIST_FIELDS: Tuple[str, ...] = ()
    _DICT_FIELDS: Tuple[str, ...] = ()

    def copy(self, **kwargs):
        """Create a copy with updated fields."""
        new_state = copy.copy(self)
        for key, value in kwargs.items():
            if not hasattr(new_state, key):
                raise ValueError(
                    f"Cannot update non-existent field '{key}' in {type(self).__name__}"
                )
            if key in self._LIST_FIELDS:
                value = list(value) if value else []
            elif key in self._DICT_FIELDS:
                value = dict(value) if value else {}
            setattr(new_state, key, value)
        return new_state


@dataclass
class SelectState(_StateCopyMixin):
    """State for SELECT statements."""
    table: Optional[str] = None
    select_fields: List[str] = field(default_factory=list)
    filters: List[FilterExpression] = field(default_factory=list)
    order_by: List[Tuple[str, OrderDirection]] = field(default_factory=list)
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None
    distinct: bool = False

    _LIST_FIELDS = ("select_fields", "filters", "order_by")


@dataclass
class InsertState(_StateCopyMixin):
    """State for INSERT statements."""
    table: Optional[str] = None
    values: Dict[str, Any] = field(default_factory=dict)
    returning: Optional[str] = None

    _DICT_FIELDS = ("values",)


@dataclass
class UpdateState(_StateCopyMixin):
    """State for UPDATE statements."""
    table: Optional[str] = None
    values: Dict[str, Any] = field(default_factory=dict)
    filters: List[FilterExpression] = field(default_factory=list)

    _LIST_FIELDS = ("filters",)
    _DICT_FIELDS = ("values",)


@dataclass
class DeleteState(_StateCopyMixin):
    """State for DELETE statements."""
    table: Optional[str] = None
    filters: List[FilterExpression] = field(default_factory=list)

    _LIST_FIELDS = ("filters",)


class SqlQueryBuilder:
    """Builds SQL text and bindings from statement state for one dialect."""

    def __init__(self, dialect: str):
        self.rules: DialectRules = get_dialect_rules(dialect)
        self.bindings: List[Any] = []

    def build_select(self, state: SelectState) -> PreparedQuery:
        table = self._require_table(state.table, SQLConstants.SELECT)
        fields = state.select_fields or [SQLConstants.STAR]
        select_list = SQLConstants.FIELD_SEPARATOR.join(self._select_item(f) for f in fields)

        head = SQLConstants.SELECT
        if state.distinct:
            head = f"{head} {SQLConstants.DISTINCT}"
        clauses = [f"{head} {select_list}", f"{SQLConstants.FROM} {self.rules.quote(table)}"]

        where_clause = self._build_where_clause(state.filters)
        if where_clause:
            clauses.append(where_clause)

        if state.order_by:
            order_items = [
                f"{self._select_item(fld)} {direction.value}" for fld, direction in state.order_by
            ]
            clauses.append(f"{SQLConstants.ORDER_BY} {SQLConstants.FIELD_SEPARATOR.join(order_items)}")

        # @@ STEP: LIMIT must precede OFFSET; all supported dialects accept LIMIT n OFFSET m
        if state.limit_value is not None:
            clauses.append(f"{SQLConstants.LIMIT} {self._non_negative(state.limit_value)}")
        if state.offset_value is not None:
            clauses.append(f"{SQLConstants.OFFSET} {self._non_negative(state.offset_value)}")

        return self._prepared(clauses)

    def build_insert(self, state: InsertState) -> PreparedQuery:
        table = self._require_table(state.table, SQLConstants.INSERT_INTO)
        if not state.values:
            raise ValueError(ErrorMessages.EMPTY_SET_VALUES.format(statement=SQLConstants.INSERT_INTO))

        columns = SQLConstants.FIELD_SEPARATOR.join(self.rules.quote(c) for c in state.values)
        placeholders = SQLConstants.FIELD_SEPARATOR.join(self.rules.placeholder for _ in state.values)
        self.bindings.extend(state.values.values())

        clauses = [
            f"{SQLConstants.INSERT_INTO} {self.rules.quote(table)} ({columns})",
            f"{SQLConstants.VALUES} ({placeholders})",
        ]
        if state.returning:
            clauses.append(f"{SQLConstants.RETURNING} {self.rules.quote(state.returning)}")
        return self._prepared(clauses)

    def build_update(self, state: UpdateState) -> PreparedQuery:
        table = self._require_table(state.table, SQLConstants.UPDATE)
        if not state.values:
            raise ValueError(ErrorMessages.EMPTY_SET_VALUES.format(statement=SQLConstants.UPDATE))

        assignments = []
        for column, value in state.values.items():
            assignments.append(f"{self.rules.quote(column)} {SQLConstants.EQ} {self.rules.placeholder}")
            self.bindings.append(value)

        clauses = [
            f"{SQLConstants.UPDATE} {self.rules.quote(table)}",
            f"{SQLConstants.SET} {SQLConstants.FIELD_SEPARATOR.join(assignments)}",
        ]
        where_clause = self._build_where_clause(state.filters)
        if where_clause:
            clauses.append(where_clause)
        return self._prepared(clauses)

    def build_delete(self, state: DeleteState) -> PreparedQuery:
        table = self._require_table(state.table, SQLConstants.DELETE_FROM)
        clauses = [f"{SQLConstants.DELETE_FROM} {self.rules.quote(table)}"]
        where_clause = self._build_where_clause(state.filters)
        if where_clause:
            clauses.append(where_clause)
        return self._prepared(clauses)

    def _build_where_clause(self, filters: List[FilterExpression]) -> str:
        if not filters:
            return ""
        expression = filters[0] if len(filters) == 1 else and_(*filters)
        return f"{SQLConstants.WHERE} {expression.to_sql(self.rules, self.bindings)}"

    def _select_item(self, item: str) -> str:
        # Bare identifiers are quoted; "*" and expressions such as COUNT(*) AS cnt pass through
        if item == SQLConstants.STAR or not is_identifier(item):
            return item
        return self.rules.quote(item)

    def _prepared(self, clauses: List[str]) -> PreparedQuery:
        return PreparedQuery(
            sql=SQLConstants.CLAUSE_SEPARATOR.join(clauses),
            bindings=tuple(self.bindings),
        )

    @staticmethod
    def _require_table(table: Optional[str], statement: str) -> str:
        if not table:
            raise ValueError(ErrorMessages.MISSING_TABLE.format(statement=statement))
        return table

    @staticmethod
    def _non_negative(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(ErrorMessages.INVALID_LIMIT.format(value))
        return value
