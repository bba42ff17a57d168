# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Filter expressions for WHERE clauses.

Expressions render themselves into SQL for a given dialect and append their
bound values to a shared positional bindings list, so placeholders and values
always stay in the same order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Sequence, Tuple

from .constants import ErrorMessages, SQLConstants
from .dialect import DialectRules


class FilterExpression(ABC):
    """Base class for all WHERE predicates."""

    @abstractmethod
    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        """Render the predicate, appending bound values to ``bindings``."""

    def __and__(self, other: FilterExpression) -> CompoundExpression:
        return and_(self, other)

    def __or__(self, other: FilterExpression) -> CompoundExpression:
        return or_(self, other)

    def __invert__(self) -> NotExpression:
        return NotExpression(self)


class ComparisonExpression(FilterExpression):
    """``field <op> value``."""

    def __init__(self, field: str, operator: str, value: Any):
        self.field = field
        self.operator = operator
        self.value = value

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        bindings.append(self.value)
        return f"{rules.quote(self.field)} {self.operator} {rules.placeholder}"

    def __repr__(self) -> str:
        return f"ComparisonExpression({self.field!r} {self.operator} {self.value!r})"


class InListExpression(FilterExpression):
    """``field IN (...)`` / ``field NOT IN (...)``."""

    def __init__(self, field: str, values: Iterable[Any], negated: bool = False):
        self.field = field
        self.values: Tuple[Any, ...] = tuple(values)
        self.negated = negated

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        # @@ STEP: An empty list cannot be rendered as IN (); fold it to a constant predicate
        if not self.values:
            return SQLConstants.ALWAYS_TRUE if self.negated else SQLConstants.ALWAYS_FALSE
        bindings.extend(self.values)
        placeholders = SQLConstants.FIELD_SEPARATOR.join(rules.placeholder for _ in self.values)
        operator = SQLConstants.NOT_IN if self.negated else SQLConstants.IN
        return f"{rules.quote(self.field)} {operator} ({placeholders})"


class NullCheckExpression(FilterExpression):
    """``field IS NULL`` / ``field IS NOT NULL``."""

    def __init__(self, field: str, negated: bool = False):
        self.field = field
        self.negated = negated

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        check = SQLConstants.IS_NOT_NULL if self.negated else SQLConstants.IS_NULL
        return f"{rules.quote(self.field)} {check}"


class BetweenExpression(FilterExpression):
    """``field BETWEEN low AND high`` (inclusive range)."""

    def __init__(self, field: str, low: Any, high: Any):
        self.field = field
        self.low = low
        self.high = high

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        bindings.extend((self.low, self.high))
        return (
            f"{rules.quote(self.field)} {SQLConstants.BETWEEN} "
            f"{rules.placeholder} {SQLConstants.AND} {rules.placeholder}"
        )


class LikeExpression(FilterExpression):
    """``field LIKE pattern`` / ``field NOT LIKE pattern``."""

    def __init__(self, field: str, pattern: str, negated: bool = False):
        self.field = field
        self.pattern = pattern
        self.negated = negated

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        bindings.append(self.pattern)
        operator = SQLConstants.NOT_LIKE if self.negated else SQLConstants.LIKE
        return f"{rules.quote(self.field)} {operator} {rules.placeholder}"


class CompoundExpression(FilterExpression):
    """Conjunction or disjunction of expressions."""

    def __init__(self, operator: str, expressions: Sequence[FilterExpression]):
        if not expressions:
            raise ValueError(ErrorMessages.EMPTY_COMPOUND.format(operator=operator))
        for expression in expressions:
            if not isinstance(expression, FilterExpression):
                raise ValueError(ErrorMessages.INVALID_FILTER_EXPRESSION.format(expression))
        self.operator = operator
        self.expressions: Tuple[FilterExpression, ...] = tuple(expressions)

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        if len(self.expressions) == 1:
            return self.expressions[0].to_sql(rules, bindings)
        parts = [f"({expression.to_sql(rules, bindings)})" for expression in self.expressions]
        return f" {self.operator} ".join(parts)


class NotExpression(FilterExpression):
    """Negation of another expression."""

    def __init__(self, expression: FilterExpression):
        self.expression = expression

    def to_sql(self, rules: DialectRules, bindings: List[Any]) -> str:
        return f"{SQLConstants.NOT} ({self.expression.to_sql(rules, bindings)})"


def and_(*expressions: FilterExpression) -> CompoundExpression:
    return CompoundExpression(SQLConstants.AND, expressions)


def or_(*expressions: FilterExpression) -> CompoundExpression:
    return CompoundExpression(SQLConstants.OR, expressions)


class QueryField:
    """
    Column reference used to build predicates with Python operators.

    ``col("age") >= 18`` or ``col("status").in_(["a", "b"])``. Comparing with
    ``None`` through ``==``/``!=`` produces a NULL check.
    """

    # Operator overloads return expressions, so fields are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other: Any) -> FilterExpression:  # type: ignore[override]
        if other is None:
            return NullCheckExpression(self.name)
        return ComparisonExpression(self.name, SQLConstants.EQ, other)

    def __ne__(self, other: Any) -> FilterExpression:  # type: ignore[override]
        if other is None:
            return NullCheckExpression(self.name, negated=True)
        return ComparisonExpression(self.name, SQLConstants.NEQ, other)

    def __lt__(self, other: Any) -> FilterExpression:
        return ComparisonExpression(self.name, SQLConstants.LT, other)

    def __le__(self, other: Any) -> FilterExpression:
        return ComparisonExpression(self.name, SQLConstants.LTE, other)

    def __gt__(self, other: Any) -> FilterExpression:
        return ComparisonExpression(self.name, SQLConstants.GT, other)

    def __ge__(self, other: Any) -> FilterExpression:
        return ComparisonExpression(self.name, SQLConstants.GTE, other)

    def in_(self, values: Iterable[Any]) -> FilterExpression:
        return InListExpression(self.name, values)

    def not_in(self, values: Iterable[Any]) -> FilterExpression:
        return InListExpression(self.name, values, negated=True)

    def is_null(self) -> FilterExpression:
        return NullCheckExpression(self.name)

    def is_not_null(self) -> FilterExpression:
        return NullCheckExpression(self.name, negated=True)

    def between(self, low: Any, high: Any) -> FilterExpression:
        return BetweenExpression(self.name, low, high)

    def like(self, pattern: str) -> FilterExpression:
        return LikeExpression(self.name, pattern)

    def not_like(self, pattern: str) -> FilterExpression:
        return LikeExpression(self.name, pattern, negated=True)

    def __repr__(self) -> str:
        return f"QueryField({self.name!r})"


def col(name: str) -> QueryField:
    """Shorthand for ``QueryField(name)``."""
    return QueryField(name)
