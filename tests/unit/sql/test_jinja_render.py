"""Tests for the Jinja2 rendering engine."""
from __future__ import annotations

import pytest

from safeglue import SQL, render_jinja
from safeglue.core.exceptions import EscapeError, TemplateError, TemplateSyntaxError
from safeglue.core.sql import create_environment


def test_expressions_are_escaped_as_literals() -> None:
    sql = render_jinja(
        "SELECT * FROM {{ t | ident }} WHERE name = {{ name }}",
        {"t": "users", "name": "O'Brien"},
        dialect="ansi",
    )

    assert sql == "SELECT * FROM \"users\" WHERE name = 'O''Brien'"
    assert isinstance(sql, SQL)


def test_inclause_filter() -> None:
    assert render_jinja("id IN ({{ ids | inclause }})", {"ids": [1, 2]}, dialect="ansi") == "id IN (1, 2)"
    assert render_jinja("id IN ({{ ids | inclause }})", {"ids": []}, dialect="ansi") == "id IN (NULL)"


def test_ident_filter_handles_lists_and_qualified_names() -> None:
    assert render_jinja("{{ cols | ident }}", {"cols": ["a", "b"]}, dialect="mysql") == "`a`, `b`"
    assert render_jinja("{{ t | ident }}", {"t": ("s", "t")}, dialect="ansi") == '"s"."t"'


def test_sql_filter_marks_trusted_text() -> None:
    assert render_jinja("WHERE {{ cond | sql }}", {"cond": "1 = 1"}, dialect="ansi") == "WHERE 1 = 1"


def test_none_renders_as_null() -> None:
    assert render_jinja("x = {{ v }}", {"v": None}, dialect="ansi") == "x = NULL"


def test_control_flow() -> None:
    text = (
        "SELECT {{ cols | ident }}\n"
        "FROM t\n"
        "{% if active %}\n"
        "WHERE active = {{ active }}\n"
        "{% endif %}\n"
    )

    assert render_jinja(text, {"cols": ["a", "b"], "active": True}, dialect="sqlite") == (
        'SELECT "a", "b"\nFROM t\nWHERE active = 1\n'
    )
    assert render_jinja(text, {"cols": ["a"], "active": False}, dialect="sqlite") == 'SELECT "a"\nFROM t\n'


def test_for_loop() -> None:
    text = "{% for c in cols %}{{ c | ident }}{% if not loop.last %}, {% endif %}{% endfor %}"

    assert render_jinja(text, {"cols": ["a", "b"]}, dialect="ansi") == '"a", "b"'


def test_dialect_global() -> None:
    assert render_jinja("{% if dialect == 'mysql' %}LIMIT 1{% endif %}", {}, dialect="mysql") == "LIMIT 1"


def test_undefined_value_is_a_template_error() -> None:
    with pytest.raises(TemplateError) as excinfo:
        render_jinja("{{ missing }}", {}, dialect="ansi")
    assert not isinstance(excinfo.value, TemplateSyntaxError)

    with pytest.raises(TemplateError):
        render_jinja("{{ missing | ident }}", {}, dialect="ansi")


def test_syntax_error_is_translated() -> None:
    with pytest.raises(TemplateSyntaxError) as excinfo:
        render_jinja("{% if %}", {}, dialect="ansi")
    assert excinfo.value.context["line"] == 1


def test_escape_errors_propagate() -> None:
    with pytest.raises(EscapeError):
        render_jinja("{{ v }}", {"v": float("nan")}, dialect="ansi")


def test_environment_does_not_html_escape() -> None:
    env = create_environment("ansi")

    assert env.from_string("{{ v }}").render(v="<b>") == "'<b>'"
