# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Primary key generators.
"""

from __future__ import annotations

import uuid
from contextlib import closing
from typing import Any

from .constants import OrderDirection, PrimaryKeyConstants
from .sql_query import Query


class IntegerPkGenerator:
    """
    Next integer key by MAX+1 lookup.

    Two concurrent callers can read the same maximum; the insert handler
    relies on the unique constraint plus a bounded retry to resolve that.
    """

    def generate(self, native: Any, dialect: str, table: str, pk_column: str) -> int:
        """
        Args:
            native: DB-API connection to read the current maximum from
            dialect: Canonical dialect token used to render the lookup
            table: Table name
            pk_column: Primary key column

        Returns:
            1 for an empty table, otherwise the highest key plus one
        """
        prepared = (
            Query()
            .select(pk_column)
            .from_(table)
            .order_by(pk_column, OrderDirection.DESC)
            .limit(1)
            .sql(dialect)
        )
        with closing(native.cursor()) as cursor:
            cursor.execute(prepared.sql, tuple(prepared.bindings))
            row = cursor.fetchone()

        if row is None:
            return PrimaryKeyConstants.INTEGER_START

        current = row[pk_column] if isinstance(row, dict) else row[0]
        return int(current) + PrimaryKeyConstants.INTEGER_STEP


class StringPkGenerator:
    """Random UUID version 4 keys from the operating system's CSPRNG."""

    def generate(self) -> str:
        # uuid4 draws from os.urandom and sets the version and RFC 4122 variant bits
        return str(uuid.uuid4())
