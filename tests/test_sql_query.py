# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the fluent statement builders and filter expressions.

Tests cover:
- SELECT rendering: columns, DISTINCT, WHERE, ORDER BY, LIMIT, OFFSET
- INSERT, UPDATE and DELETE rendering
- Placeholder style and identifier quoting per dialect
- Binding order across nested expressions
- Builder immutability and input validation
"""

from __future__ import annotations

import pytest

from sqlrepository import Delete, Insert, OrderDirection, PreparedQuery, Query, Update, and_, col, or_


class TestSelect:
    """SELECT rendering."""

    def test_default_select_is_star(self):
        prepared = Query().from_("users").sql("sqlite")

        assert prepared == PreparedQuery('SELECT * FROM "users"', ())

    def test_table_in_constructor(self):
        assert Query("users").sql("sqlite").sql == 'SELECT * FROM "users"'

    def test_full_select(self):
        prepared = (
            Query()
            .select("id", "name")
            .from_("users")
            .where(col("status") == "active", col("age") > 18)
            .order_by("name")
            .order_by("id", OrderDirection.DESC)
            .limit(10)
            .offset(20)
            .sql("sqlite")
        )

        assert prepared.sql == (
            'SELECT "id", "name" FROM "users" '
            'WHERE ("status" = ?) AND ("age" > ?) '
            'ORDER BY "name" ASC, "id" DESC LIMIT 10 OFFSET 20'
        )
        assert prepared.bindings == ("active", 18)

    def test_chained_where_calls_are_anded(self):
        prepared = Query("t").where(col("a") == 1).where(col("b") == 2).sql("sqlite")

        assert prepared.sql == 'SELECT * FROM "t" WHERE ("a" = ?) AND ("b" = ?)'
        assert prepared.bindings == (1, 2)

    def test_filter_alias_and_filter_by(self):
        prepared = Query("t").filter(col("a") < 5).filter_by(b="x").sql("sqlite")

        assert prepared.sql == 'SELECT * FROM "t" WHERE ("a" < ?) AND ("b" = ?)'
        assert prepared.bindings == (5, "x")

    def test_expressions_in_select_list_pass_through(self):
        prepared = Query().select("COUNT(*) AS cnt").from_("users").sql("sqlite")

        assert prepared.sql == 'SELECT COUNT(*) AS cnt FROM "users"'

    def test_distinct(self):
        assert Query("t").select("name").distinct().sql("sqlite").sql == 'SELECT DISTINCT "name" FROM "t"'

    def test_select_accepts_query_fields(self):
        assert Query("t").select(col("name")).sql("sqlite").sql == 'SELECT "name" FROM "t"'

    def test_dotted_identifiers_are_quoted_per_part(self):
        assert Query("main.users").sql("sqlite").sql == 'SELECT * FROM "main"."users"'

    @pytest.mark.parametrize("direction", ["desc", "DESC", OrderDirection.DESC])
    def test_order_direction_variants(self, direction):
        assert Query("t").order_by("id", direction).sql("sqlite").sql.endswith('ORDER BY "id" DESC')


class TestDialects:
    """Placeholder style and identifier quoting."""

    def test_mysql_uses_format_placeholders_and_backticks(self):
        prepared = Query("users").where(col("id") == 1).sql("mysql")

        assert prepared.sql == "SELECT * FROM `users` WHERE `id` = %s"

    @pytest.mark.parametrize("dialect", ["postgres", "pgsql"])
    def test_postgres_uses_format_placeholders_and_double_quotes(self, dialect):
        prepared = Query("users").where(col("id") == 1).sql(dialect)

        assert prepared.sql == 'SELECT * FROM "users" WHERE "id" = %s'

    def test_unknown_dialect_renders_like_sqlite(self):
        assert Query("users").where(col("id") == 1).sql("oracle").sql == 'SELECT * FROM "users" WHERE "id" = ?'

    def test_insert_returning_on_postgres(self):
        prepared = Insert().into("users").set({"name": "Alice"}).returning("id").sql("postgres")

        assert prepared.sql == 'INSERT INTO "users" ("name") VALUES (%s) RETURNING "id"'
        assert prepared.bindings == ("Alice",)


class TestFilterExpressions:
    """Rendering of individual predicates."""

    def render(self, expression):
        return Query("t").where(expression).sql("sqlite")

    def test_comparison_operators(self):
        cases = [
            (col("a") == 1, '"a" = ?'),
            (col("a") != 1, '"a" <> ?'),
            (col("a") < 1, '"a" < ?'),
            (col("a") <= 1, '"a" <= ?'),
            (col("a") > 1, '"a" > ?'),
            (col("a") >= 1, '"a" >= ?'),
        ]
        for expression, expected in cases:
            prepared = self.render(expression)
            assert prepared.sql == f'SELECT * FROM "t" WHERE {expected}'
            assert prepared.bindings == (1,)

    def test_equality_with_none_is_null_check(self):
        assert self.render(col("a") == None).sql.endswith('WHERE "a" IS NULL')  # noqa: E711
        assert self.render(col("a") != None).sql.endswith('WHERE "a" IS NOT NULL')  # noqa: E711

    def test_in_and_not_in(self):
        prepared = self.render(col("id").in_([1, 2, 3]))
        assert prepared.sql.endswith('WHERE "id" IN (?, ?, ?)')
        assert prepared.bindings == (1, 2, 3)

        assert self.render(col("id").not_in(["x"])).sql.endswith('WHERE "id" NOT IN (?)')

    def test_empty_in_list_folds_to_constant(self):
        in_empty = self.render(col("id").in_([]))
        not_in_empty = self.render(col("id").not_in([]))

        assert in_empty.sql.endswith("WHERE 1 = 0")
        assert in_empty.bindings == ()
        assert not_in_empty.sql.endswith("WHERE 1 = 1")

    def test_between_and_like(self):
        between = self.render(col("age").between(18, 65))
        assert between.sql.endswith('WHERE "age" BETWEEN ? AND ?')
        assert between.bindings == (18, 65)

        assert self.render(col("name").like("A%")).sql.endswith('WHERE "name" LIKE ?')
        assert self.render(col("name").not_like("A%")).sql.endswith('WHERE "name" NOT LIKE ?')

    def test_null_checks_bind_nothing(self):
        prepared = self.render(col("email").is_not_null())

        assert prepared.sql.endswith('WHERE "email" IS NOT NULL')
        assert prepared.bindings == ()

    def test_nested_compound_binding_order(self):
        expression = or_(and_(col("a") == 1, col("b") == 2), ~(col("c") == 3))
        prepared = self.render(expression)

        assert prepared.sql.endswith('WHERE (("a" = ?) AND ("b" = ?)) OR (NOT ("c" = ?))')
        assert prepared.bindings == (1, 2, 3)

    def test_operator_overloads_combine_expressions(self):
        prepared = self.render((col("a") == 1) & (col("b") == 2) | (col("c") == 3))

        assert prepared.sql.endswith('WHERE (("a" = ?) AND ("b" = ?)) OR ("c" = ?)')

    def test_single_element_compound_has_no_parentheses(self):
        assert self.render(and_(col("a") == 1)).sql.endswith('WHERE "a" = ?')

    def test_empty_compound_raises(self):
        with pytest.raises(ValueError):
            and_()

    def test_query_field_is_unhashable(self):
        with pytest.raises(TypeError):
            hash(col("a"))


class TestWriteStatements:
    """INSERT, UPDATE and DELETE rendering."""

    def test_insert(self):
        prepared = Insert().into("users").set({"name": "Alice", "age": 30}).sql("sqlite")

        assert prepared.sql == 'INSERT INTO "users" ("name", "age") VALUES (?, ?)'
        assert prepared.bindings == ("Alice", 30)

    def test_insert_set_merges_values(self):
        prepared = Insert().into("users").set({"name": "Alice"}).set({"age": 30}).sql("mysql")

        assert prepared.sql == "INSERT INTO `users` (`name`, `age`) VALUES (%s, %s)"

    def test_update_binds_set_values_before_filters(self):
        prepared = Update().table("users").set({"name": "Bob", "age": 31}).where(col("id") == 7).sql("sqlite")

        assert prepared.sql == 'UPDATE "users" SET "name" = ?, "age" = ? WHERE "id" = ?'
        assert prepared.bindings == ("Bob", 31, 7)

    def test_delete(self):
        prepared = Delete().from_("users").where(col("id").in_([1, 2])).sql("sqlite")

        assert prepared.sql == 'DELETE FROM "users" WHERE "id" IN (?, ?)'
        assert prepared.bindings == (1, 2)

    def test_delete_without_filter(self):
        assert Delete().from_("users").sql("sqlite").sql == 'DELETE FROM "users"'


class TestImmutabilityAndValidation:
    """Copy-on-write behavior and rejected input."""

    def test_builders_do_not_modify_receiver(self):
        base = Query("users").where(col("status") == "active")
        limited = base.limit(5)
        filtered = base.where(col("age") > 18)

        assert base.sql("sqlite").sql == 'SELECT * FROM "users" WHERE "status" = ?'
        assert limited.sql("sqlite").sql.endswith("LIMIT 5")
        assert filtered.sql("sqlite").bindings == ("active", 18)

    def test_insert_builder_does_not_modify_receiver(self):
        base = Insert().into("users").set({"name": "Alice"})
        base.set({"age": 1})

        assert base.sql("sqlite").bindings == ("Alice",)

    @pytest.mark.parametrize("identifier", ["users; DROP TABLE x", "1abc", "a b", "", 'a"b'])
    def test_invalid_identifiers_are_rejected(self, identifier):
        with pytest.raises(ValueError):
            Query().from_(identifier).sql("sqlite")
        with pytest.raises(ValueError):
            Query("t").where(col(identifier) == 1).sql("sqlite")

    def test_missing_table_raises(self):
        with pytest.raises(ValueError):
            Query().sql("sqlite")

    def test_empty_insert_and_update_values_raise(self):
        with pytest.raises(ValueError):
            Insert().into("t").sql("sqlite")
        with pytest.raises(ValueError):
            Update().table("t").sql("sqlite")

    @pytest.mark.parametrize("value", [-1, 1.5, "10", True])
    def test_invalid_limit_and_offset_raise(self, value):
        with pytest.raises(ValueError):
            Query("t").limit(value).sql("sqlite")
        with pytest.raises(ValueError):
            Query("t").offset(value).sql("sqlite")

    def test_invalid_order_direction_raises(self):
        with pytest.raises(ValueError):
            Query("t").order_by("id", "sideways")

    def test_invalid_order_by_argument_raises(self):
        with pytest.raises(ValueError):
            Query("t").order_by(42)

    def test_non_expression_filter_raises(self):
        with pytest.raises(ValueError):
            Query("t").where("id = 1")
