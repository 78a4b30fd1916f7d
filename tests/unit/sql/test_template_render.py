"""Tests for rendering placeholder templates to escaped SQL."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.project import write_config
from safeglue import SQL, Identifier, QueryTemplate, render
from safeglue.core.exceptions import EscapeError, TemplateError, UnknownDialectError, UnsupportedValueError


def test_string_value_is_quoted_and_escaped() -> None:
    sql = render("SELECT * FROM t WHERE name = {name}", name="O'Brien", dialect="ansi")

    assert sql == "SELECT * FROM t WHERE name = 'O''Brien'"
    assert isinstance(sql, SQL)


def test_injection_attempt_stays_inside_the_literal() -> None:
    payload = "x'; DROP TABLE users; --"

    sql = render("SELECT * FROM users WHERE name = {name}", {"name": payload}, dialect="ansi")

    assert sql == "SELECT * FROM users WHERE name = 'x''; DROP TABLE users; --'"


def test_missing_placeholders_are_all_reported() -> None:
    with pytest.raises(TemplateError) as excinfo:
        render("{a} {b} {c} {a}", {"b": 1}, dialect="ansi")

    err = excinfo.value
    assert err.context["missing"] == ["a", "c"]
    assert str(err) == "Missing value(s) for placeholder(s): a, c"


def test_none_value_is_not_missing() -> None:
    assert render("x = {v}", v=None, dialect="ansi") == "x = NULL"


def test_keyword_values_override_mapping() -> None:
    assert render("{a}", {"a": 1}, a=2, dialect="ansi") == "2"


def test_collapse_renders_comma_separated_literals() -> None:
    sql = render("id IN ({ids*})", ids=[1, 2, 3], dialect="ansi")

    assert sql == "id IN (1, 2, 3)"


def test_collapse_of_empty_list_matches_nothing() -> None:
    assert render("id IN ({ids*})", ids=[], dialect="ansi") == "id IN (NULL)"


def test_identifier_placeholders() -> None:
    sql = render(
        "SELECT {`cols`*} FROM {`tbl`}",
        cols=["id", 'na"me'],
        tbl=("public", "users"),
        dialect="ansi",
    )

    assert sql == 'SELECT "id", "na""me" FROM "public"."users"'


def test_identifier_placeholder_does_not_split_dots() -> None:
    assert render("{`t`}", t="a.b", dialect="ansi") == '"a.b"'
    assert render("{`t`}", t=Identifier("a", "b"), dialect="ansi") == '"a"."b"'


def test_literal_braces() -> None:
    assert render("SELECT '{{}}' AS j, {x}", x=1, dialect="ansi") == "SELECT '{}' AS j, 1"


def test_dotted_names_reach_into_mappings() -> None:
    values = {"user": {"id": 7, "name": "ann"}}

    assert render("{user.id}, {user.name}", values, dialect="ansi") == "7, 'ann'"

    with pytest.raises(TemplateError) as excinfo:
        render("{user.email}", values, dialect="ansi")
    assert excinfo.value.context["missing"] == ["user.email"]


def test_trusted_sql_is_inserted_verbatim() -> None:
    assert render("WHERE {cond}", cond=SQL("1 = 1"), dialect="ansi") == "WHERE 1 = 1"


def test_rendered_fragments_compose() -> None:
    inner = render("id = {id}", id=3, dialect="ansi")

    assert render("SELECT * FROM t WHERE {cond}", cond=inner, dialect="ansi") == "SELECT * FROM t WHERE id = 3"


def test_list_for_single_placeholder_suggests_collapse() -> None:
    with pytest.raises(EscapeError) as excinfo:
        render("id = {ids}", ids=[1, 2], dialect="ansi")

    err = excinfo.value
    assert not isinstance(err, UnsupportedValueError)
    assert str(err).startswith("{ids}: ")
    assert "{name*}" in str(err)
    assert err.context["placeholder"] == "ids"


def test_unsupported_value_keeps_its_type() -> None:
    with pytest.raises(UnsupportedValueError) as excinfo:
        render("{v}", v=object(), dialect="ansi")

    assert excinfo.value.context["placeholder"] == "v"


def test_scalar_for_collapse_placeholder_is_rejected() -> None:
    with pytest.raises(EscapeError):
        render("IN ({ids*})", ids=5, dialect="ansi")


def test_forbidden_character_is_rejected() -> None:
    with pytest.raises(EscapeError) as excinfo:
        render("{s}", s="a\0b", dialect="ansi")

    assert excinfo.value.context["position"] == 1


def test_dialect_changes_quoting() -> None:
    tpl = QueryTemplate("SELECT {`col`} FROM t WHERE flag = {flag}")

    assert tpl.render(col="a", flag=True, dialect="mysql") == "SELECT `a` FROM t WHERE flag = TRUE"
    assert tpl.render(col="a", flag=True, dialect="tsql") == "SELECT [a] FROM t WHERE flag = 1"
    assert tpl.render(col="a", flag=True, dialect="sqlite") == 'SELECT "a" FROM t WHERE flag = 1'


def test_template_dialect_is_the_default_for_render() -> None:
    tpl = QueryTemplate("{`c`}", "mysql")

    assert tpl.render(c="x") == "`x`"
    assert tpl.render(c="x", dialect="ansi") == '"x"'


def test_unknown_dialect() -> None:
    with pytest.raises(UnknownDialectError):
        render("{a}", a=1, dialect="nosuchdb")


def test_template_is_reusable() -> None:
    tpl = QueryTemplate("id = {id}", "ansi")

    assert tpl.render(id=1) == "id = 1"
    assert tpl.render(id=2) == "id = 2"


class TestStrictMode:
    def test_unused_values_are_ignored_by_default(self) -> None:
        assert render("{a}", a=1, b=2, dialect="ansi") == "1"

    def test_strict_reports_unused_values(self) -> None:
        with pytest.raises(TemplateError) as excinfo:
            render("{a}", a=1, b=2, c=3, dialect="ansi", strict=True)

        assert excinfo.value.context["unused"] == ["b", "c"]

    def test_strict_counts_dotted_roots_as_used(self) -> None:
        assert render("{user.id}", user={"id": 1, "extra": 2}, dialect="ansi", strict=True) == "1"

    def test_strict_from_project_config(self, isolated_project: Path) -> None:
        write_config(isolated_project, "render", {"render": {"strict": True}})

        tpl = QueryTemplate("{a}", "ansi", repo_root=isolated_project)
        with pytest.raises(TemplateError):
            tpl.render(a=1, b=2)
        assert tpl.render(a=1, b=2, strict=False) == "1"


def test_default_dialect_from_project_config(isolated_project: Path) -> None:
    write_config(isolated_project, "render", {"render": {"default_dialect": "mysql"}})

    assert render("{`c`}", c="x", repo_root=isolated_project) == "`x`"
