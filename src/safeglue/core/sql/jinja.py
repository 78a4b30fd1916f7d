"""Jinja2 rendering with SQL escaping applied to every expression.

Each ``{{ expr }}`` result is escaped as a literal for the target dialect
unless it is already :class:`SQL` (the ``ident``, ``inclause`` and ``sql``
filters return SQL).

    SELECT {{ cols | ident }} FROM {{ table | ident }}
    WHERE owner = {{ owner }} AND id IN ({{ ids | inclause }})
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, StrictUndefined, Undefined, UndefinedError
from jinja2 import TemplateSyntaxError as JinjaSyntaxError

from safeglue.core.exceptions import TemplateError, TemplateSyntaxError

from .dialects import Dialect, get_dialect
from .escaping import collapse, escape_identifier, escape_literal, is_collection
from .values import SQL


def _defined(value: Any) -> Any:
    if isinstance(value, Undefined):
        # StrictUndefined raises UndefinedError on str()
        str(value)
    return value


def create_environment(dialect: Union[str, Dialect, None] = None) -> Environment:
    """Create a Jinja2 environment that escapes output for ``dialect``."""
    target = get_dialect(dialect)

    def _finalize(value: Any) -> str:
        return escape_literal(_defined(value), target)

    def _ident(value: Any) -> SQL:
        value = _defined(value)
        if is_collection(value) and not isinstance(value, tuple):
            return SQL(collapse(value, target, identifier=True))
        return SQL(escape_identifier(value, target))

    def _inclause(value: Any) -> SQL:
        return SQL(collapse(_defined(value), target))

    # Control blocks usually sit on their own lines in SQL files.
    env = Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        finalize=_finalize,
        autoescape=False,
    )
    env.filters["ident"] = _ident
    env.filters["inclause"] = _inclause
    env.filters["sql"] = SQL
    env.globals["dialect"] = target.name
    return env


def render_jinja(
    text: str,
    values: Optional[Mapping[str, Any]] = None,
    *,
    dialect: Union[str, Dialect, None] = None,
) -> SQL:
    """Render a Jinja2 SQL template.

    Raises:
        TemplateSyntaxError: If the Jinja source does not parse.
        TemplateError: If the template references an undefined variable.
        EscapeError: If a value cannot be escaped for the dialect.
    """
    env = create_environment(dialect)
    try:
        template = env.from_string(text)
    except JinjaSyntaxError as exc:
        raise TemplateSyntaxError(
            f"Invalid Jinja template: {exc.message}",
            context={"line": exc.lineno},
        ) from exc
    try:
        return SQL(template.render(**dict(values or {})))
    except UndefinedError as exc:
        raise TemplateError(f"Missing value: {exc.message}", context={"engine": "jinja"}) from exc


__all__ = ["create_environment", "render_jinja"]
