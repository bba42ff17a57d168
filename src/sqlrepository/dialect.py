# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Dialect resolution and per-dialect rendering rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import DialectConstants, ErrorMessages

_IDENTIFIER_RE = re.compile(DialectConstants.IDENTIFIER_PATTERN)


def resolve_dialect(driver_name: str) -> str:
    """
    Map a driver identifier onto a dialect token.

    ``"pgsql"`` becomes ``"postgres"``. Every other identifier passes through
    unchanged; unsupported drivers fail later when their SQL is executed.
    """
    return DialectConstants.DRIVER_ALIASES.get(driver_name, driver_name)


def canonical_dialect(dialect: str) -> str:
    """Dialect token with DB-API module names (``sqlite3``, ``psycopg2``, ...) folded in."""
    resolved = resolve_dialect(dialect)
    return DialectConstants.MODULE_ALIASES.get(resolved.lower(), resolved)


@dataclass(frozen=True)
class DialectRules:
    """How statements are rendered for one dialect."""

    name: str
    placeholder: str
    quote_char: str
    returning_for_generated_key: bool

    def quote(self, identifier: str) -> str:
        """Validate and quote a plain or dotted identifier."""
        if not isinstance(identifier, str) or not _IDENTIFIER_RE.match(identifier):
            raise ValueError(ErrorMessages.INVALID_IDENTIFIER.format(identifier))
        q = self.quote_char
        return ".".join(f"{q}{part}{q}" for part in identifier.split("."))


_RULES = {
    DialectConstants.POSTGRES: DialectRules(
        name=DialectConstants.POSTGRES,
        placeholder=DialectConstants.FORMAT_PLACEHOLDER,
        quote_char=DialectConstants.DOUBLE_QUOTE,
        returning_for_generated_key=True,
    ),
    DialectConstants.MYSQL: DialectRules(
        name=DialectConstants.MYSQL,
        placeholder=DialectConstants.FORMAT_PLACEHOLDER,
        quote_char=DialectConstants.BACKTICK,
        returning_for_generated_key=False,
    ),
    DialectConstants.SQLITE: DialectRules(
        name=DialectConstants.SQLITE,
        placeholder=DialectConstants.QMARK_PLACEHOLDER,
        quote_char=DialectConstants.DOUBLE_QUOTE,
        returning_for_generated_key=False,
    ),
}


def get_dialect_rules(dialect: str) -> DialectRules:
    """Rules for a dialect token; unknown dialects render like SQLite."""
    rules = _RULES.get(canonical_dialect(dialect))
    if rules is not None:
        return rules
    return DialectRules(
        name=dialect,
        placeholder=DialectConstants.QMARK_PLACEHOLDER,
        quote_char=DialectConstants.DOUBLE_QUOTE,
        returning_for_generated_key=False,
    )


def is_identifier(value: str) -> bool:
    return bool(_IDENTIFIER_RE.match(value))
