# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Tests for dialect resolution and rendering rules.
"""

from __future__ import annotations

import pytest

from sqlrepository import get_dialect_rules, resolve_dialect
from sqlrepository.dialect import canonical_dialect


class TestResolveDialect:
    """Driver identifier to dialect token mapping."""

    def test_pgsql_becomes_postgres(self):
        assert resolve_dialect("pgsql") == "postgres"

    @pytest.mark.parametrize("driver", ["mysql", "sqlite", "postgres"])
    def test_canonical_names_pass_through(self, driver):
        assert resolve_dialect(driver) == driver

    @pytest.mark.parametrize("driver", ["sqlite3", "postgresql", "psycopg2", "pymysql", "mysqldb"])
    def test_module_names_pass_through(self, driver):
        assert resolve_dialect(driver) == driver

    @pytest.mark.parametrize(
        ("driver", "expected"),
        [("sqlite3", "sqlite"), ("psycopg2", "postgres"), ("pgsql", "postgres"), ("PyMySQL", "mysql"), ("oracle", "oracle")],
    )
    def test_canonical_dialect_folds_module_names(self, driver, expected):
        assert canonical_dialect(driver) == expected

    def test_unknown_driver_passes_through(self):
        assert resolve_dialect("sqlsrv") == "sqlsrv"


class TestDialectRules:
    """Per-dialect placeholder, quoting and generated-key retrieval."""

    def test_sqlite_rules(self):
        rules = get_dialect_rules("sqlite")

        assert rules.placeholder == "?"
        assert rules.quote("users") == '"users"'
        assert rules.returning_for_generated_key is False

    def test_mysql_rules(self):
        rules = get_dialect_rules("mysql")

        assert rules.placeholder == "%s"
        assert rules.quote("db.users") == "`db`.`users`"
        assert rules.returning_for_generated_key is False

    def test_postgres_rules_resolve_aliases(self):
        rules = get_dialect_rules("pgsql")

        assert rules.name == "postgres"
        assert rules.placeholder == "%s"
        assert rules.returning_for_generated_key is True

    def test_module_names_render_with_their_dialect_rules(self):
        assert get_dialect_rules("sqlite3").placeholder == "?"
        assert get_dialect_rules("psycopg2").returning_for_generated_key is True
        assert get_dialect_rules("pymysql").quote("users") == "`users`"

    def test_quote_rejects_injection(self):
        with pytest.raises(ValueError):
            get_dialect_rules("sqlite").quote('users" --')
