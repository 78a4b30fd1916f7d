"""Escape Python values into SQL text for a given dialect.

Escaping is the last line of defence, not the first: prefer the bound
parameters of your database driver whenever the query shape allows it. These
helpers exist for the cases drivers cannot parameterise (identifiers, IN
lists, generated DDL) and for producing reviewable SQL scripts.
"""
from __future__ import annotations

import datetime
import math
import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Optional

from safeglue.core.exceptions import EscapeError, UnsupportedValueError
from safeglue.core.secrets.secret import Secret

from .dialects import Dialect
from .values import SQL, Identifier


# No database accepts NUL inside a quoted identifier.
_IDENTIFIER_FORBIDDEN = frozenset({"\0"})


def _check_forbidden(text: str, dialect: Dialect, what: str, extra: frozenset = frozenset()) -> None:
    forbidden = set(dialect.forbidden) | extra
    for pos, ch in enumerate(text):
        if ch in forbidden:
            raise EscapeError(
                f"{what} contains character {ch!r} at offset {pos}, "
                f"which cannot be escaped for dialect '{dialect.name}'",
                context={"dialect": dialect.name, "character": repr(ch), "position": pos},
            )


def escape_string(text: str, dialect: Dialect) -> str:
    """Quote ``text`` as a string literal.

    Embedded quote characters are doubled. Dialects with
    ``backslash_escapes`` also double backslashes and apply their
    control-character escapes.
    """
    _check_forbidden(text, dialect, "String value")
    quote = dialect.string_quote
    out = []
    for ch in text:
        if ch == quote:
            out.append(quote + quote)
        elif ch == "\\" and dialect.backslash_escapes:
            out.append("\\\\")
        elif ch in dialect.escapes:
            out.append(dialect.escapes[ch])
        else:
            out.append(ch)
    prefix = dialect.unicode_prefix if dialect.unicode_prefix and not text.isascii() else ""
    return f"{prefix}{quote}{''.join(out)}{quote}"


def _escape_identifier_part(name: str, dialect: Dialect) -> str:
    if name == "":
        raise EscapeError("Identifier must not be empty", context={"dialect": dialect.name})
    _check_forbidden(name, dialect, "Identifier", _IDENTIFIER_FORBIDDEN)
    open_q, close_q = dialect.identifier_quote
    return f"{open_q}{name.replace(close_q, close_q + close_q)}{close_q}"


def escape_identifier(value: Any, dialect: Dialect) -> str:
    """Quote ``value`` as a (possibly qualified) identifier.

    Accepts ``str`` (one identifier, dots are *not* split), ``Identifier``,
    a tuple of parts for a qualified name, or trusted ``SQL``.
    """
    if isinstance(value, SQL):
        return str(value)
    if isinstance(value, tuple):
        try:
            value = Identifier(*value)
        except (TypeError, ValueError) as exc:
            raise EscapeError(
                f"Invalid qualified identifier {value!r}: {exc}",
                context={"dialect": dialect.name},
            ) from exc
    if isinstance(value, Identifier):
        return ".".join(_escape_identifier_part(p, dialect) for p in value.parts)
    if isinstance(value, str):
        return _escape_identifier_part(value, dialect)
    raise UnsupportedValueError(
        f"Cannot use {type(value).__name__} as an SQL identifier",
        context={"dialect": dialect.name, "type": type(value).__name__},
    )


def escape_literal(value: Any, dialect: Dialect) -> str:
    """Render ``value`` as an SQL literal.

    Raises:
        EscapeError: For values that have a type but no safe rendering
            (non-finite numbers, forbidden characters, bare sequences).
        UnsupportedValueError: For values of unsupported types.
    """
    # SQL subclasses str, so it must be checked before str.
    if isinstance(value, SQL):
        return str(value)
    if isinstance(value, Identifier):
        return escape_identifier(value, dialect)
    if isinstance(value, Secret):
        return escape_string(value.reveal(), dialect)
    if value is None:
        return dialect.null
    # bool subclasses int.
    if isinstance(value, bool):
        return dialect.true if value else dialect.false
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EscapeError(
                f"Float value {value!r} has no SQL literal form",
                context={"dialect": dialect.name},
            )
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EscapeError(
                f"Decimal value {value} has no SQL literal form",
                context={"dialect": dialect.name},
            )
        return str(value)
    if isinstance(value, str):
        return escape_string(value, dialect)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return dialect.bytes_format.format(hex=bytes(value).hex().upper())
    # datetime subclasses date.
    if isinstance(value, datetime.datetime):
        return escape_string(value.isoformat(sep=" "), dialect)
    if isinstance(value, (datetime.date, datetime.time)):
        return escape_string(value.isoformat(), dialect)
    if isinstance(value, uuid.UUID):
        return escape_string(str(value), dialect)
    if is_collection(value):
        raise EscapeError(
            f"Got a {type(value).__name__} for a single-value placeholder; "
            "use the collapsing form {name*} to expand a list",
            context={"dialect": dialect.name, "type": type(value).__name__},
        )
    raise UnsupportedValueError(
        f"Cannot render {type(value).__name__} as an SQL literal",
        context={"dialect": dialect.name, "type": type(value).__name__},
    )


def is_collection(value: Any) -> bool:
    """True for list-like values; strings, bytes and mappings do not count."""
    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping, Identifier)):
        return False
    return isinstance(value, Iterable)


def collapse(
    values: Any,
    dialect: Dialect,
    *,
    identifier: bool = False,
    name: Optional[str] = None,
) -> str:
    """Render a collection as a comma-separated list.

    An empty collection of literals renders as the dialect's NULL so that
    ``IN ({ids*})`` stays valid and matches nothing.
    """
    if not is_collection(values):
        raise EscapeError(
            f"Placeholder {{{name or '?'}*}} expects a list of values, got {type(values).__name__}",
            context={"dialect": dialect.name, "placeholder": name, "type": type(values).__name__},
        )
    items = list(values)
    if identifier:
        if not items:
            raise EscapeError(
                f"Placeholder {{`{name or '?'}`*}} expects at least one identifier",
                context={"dialect": dialect.name, "placeholder": name},
            )
        return ", ".join(escape_identifier(item, dialect) for item in items)
    if not items:
        return dialect.null
    return ", ".join(escape_literal(item, dialect) for item in items)


__all__ = [
    "collapse",
    "escape_identifier",
    "escape_literal",
    "escape_string",
    "is_collection",
]
