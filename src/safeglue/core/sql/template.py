"""Placeholder templates that render to escaped SQL.

Syntax:

    {name}        value rendered as an escaped literal
    {name*}       list collapsed into "v1, v2, ..." of literals
    {`name`}      value rendered as a quoted identifier
    {`name`*}     list collapsed into comma-separated identifiers
    {{ and }}     literal braces

Names may be dotted (``{user.id}``) to reach into nested mappings.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from safeglue.core.exceptions import EscapeError, TemplateError, TemplateSyntaxError

from .dialects import Dialect, get_dialect
from .escaping import collapse, escape_identifier, escape_literal
from .values import SQL

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")

LITERAL = "literal"
IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Placeholder:
    name: str
    kind: str = LITERAL
    collapse: bool = False
    position: int = 0

    @property
    def root(self) -> str:
        """Top-level key looked up in the values mapping."""
        return self.name.split(".", 1)[0]

    def source(self) -> str:
        """Canonical template spelling of this placeholder."""
        inner = f"`{self.name}`" if self.kind == IDENTIFIER else self.name
        return "{" + inner + ("*" if self.collapse else "") + "}"


Segment = Union[str, Placeholder]


def _parse_placeholder(body: str, position: int) -> Placeholder:
    inner = body.strip()
    if not inner:
        raise TemplateSyntaxError("Empty placeholder", position=position)

    is_collapse = inner.endswith("*")
    if is_collapse:
        inner = inner[:-1].rstrip()

    kind = LITERAL
    if inner.startswith("`"):
        if len(inner) < 2 or not inner.endswith("`"):
            raise TemplateSyntaxError(
                f"Unterminated identifier placeholder {{{body}}}", position=position
            )
        inner = inner[1:-1].strip()
        kind = IDENTIFIER

    if not _NAME_RE.fullmatch(inner):
        raise TemplateSyntaxError(
            f"Invalid placeholder name {inner!r}",
            position=position,
            context={"placeholder": inner},
        )
    return Placeholder(name=inner, kind=kind, collapse=is_collapse, position=position)


def parse_template(text: str) -> List[Segment]:
    """Split ``text`` into literal text and :class:`Placeholder` segments.

    Raises:
        TemplateSyntaxError: On an unclosed ``{``, a stray ``}``, an empty
            placeholder or an invalid placeholder name.
    """
    segments: List[Segment] = []
    buf: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "{":
            if text.startswith("{{", i):
                buf.append("{")
                i += 2
                continue
            end = text.find("}", i + 1)
            nested = text.find("{", i + 1)
            if end == -1 or (nested != -1 and nested < end):
                raise TemplateSyntaxError("Unclosed placeholder", position=i)
            placeholder = _parse_placeholder(text[i + 1 : end], i)
            if buf:
                segments.append("".join(buf))
                buf = []
            segments.append(placeholder)
            i = end + 1
            continue
        if ch == "}":
            if text.startswith("}}", i):
                buf.append("}")
                i += 2
                continue
            raise TemplateSyntaxError(
                "Single '}' is not allowed; write '}}' for a literal brace", position=i
            )
        buf.append(ch)
        i += 1
    if buf:
        segments.append("".join(buf))
    return segments


_MISSING = object()


def _lookup(values: Mapping[str, Any], name: str) -> Any:
    cur: Any = values
    for part in name.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return _MISSING
        cur = cur[part]
    return cur


class QueryTemplate:
    """A parsed template, reusable across renders.

    Example:
        >>> tpl = QueryTemplate("SELECT * FROM {`table`} WHERE id IN ({ids*})", dialect="ansi")
        >>> print(tpl.render({"table": "users", "ids": [1, 2]}))
        SELECT * FROM "users" WHERE id IN (1, 2)
    """

    def __init__(
        self,
        text: str,
        dialect: Union[str, Dialect, None] = None,
        *,
        repo_root: Optional[Path] = None,
    ) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Template text must be str, got {type(text).__name__}")
        self.text = text
        self.dialect = dialect
        self.repo_root = repo_root
        self.segments: Tuple[Segment, ...] = tuple(parse_template(text))

    def __repr__(self) -> str:
        return f"QueryTemplate({self.text!r})"

    @property
    def fields(self) -> Tuple[Placeholder, ...]:
        """Every placeholder occurrence, in template order."""
        return tuple(s for s in self.segments if isinstance(s, Placeholder))

    @property
    def placeholders(self) -> List[str]:
        """Unique placeholder names in order of first appearance."""
        seen: Dict[str, None] = {}
        for field in self.fields:
            seen.setdefault(field.name, None)
        return list(seen)

    def _resolve_strict(self, strict: Optional[bool]) -> bool:
        if strict is not None:
            return strict
        from safeglue.core.config.domains import RenderConfig

        return RenderConfig(repo_root=self.repo_root).strict

    def render(
        self,
        values: Optional[Mapping[str, Any]] = None,
        *,
        dialect: Union[str, Dialect, None] = None,
        strict: Optional[bool] = None,
        **kwargs: Any,
    ) -> SQL:
        """Render the template with escaped ``values``.

        Keyword arguments are merged over ``values``.

        Raises:
            TemplateError: If any placeholder has no value, or (strict mode)
                if values are supplied that the template never uses.
            EscapeError: If a value cannot be escaped for the dialect.
        """
        mapping: Dict[str, Any] = dict(values or {})
        mapping.update(kwargs)

        fields = self.fields
        missing = sorted({f.name for f in fields if _lookup(mapping, f.name) is _MISSING})
        if missing:
            raise TemplateError(
                f"Missing value(s) for placeholder(s): {', '.join(missing)}",
                context={"missing": missing},
            )

        if self._resolve_strict(strict):
            used = {f.root for f in fields}
            unused = sorted(k for k in mapping if k not in used)
            if unused:
                raise TemplateError(
                    f"Unused value(s) supplied: {', '.join(unused)}",
                    context={"unused": unused},
                )

        target = get_dialect(dialect if dialect is not None else self.dialect, repo_root=self.repo_root)

        parts: List[str] = []
        for segment in self.segments:
            if isinstance(segment, str):
                parts.append(segment)
                continue
            value = _lookup(mapping, segment.name)
            try:
                if segment.collapse:
                    parts.append(
                        collapse(value, target, identifier=segment.kind == IDENTIFIER, name=segment.name)
                    )
                elif segment.kind == IDENTIFIER:
                    parts.append(escape_identifier(value, target))
                else:
                    parts.append(escape_literal(value, target))
            except EscapeError as exc:
                ctx = dict(exc.context)
                ctx["placeholder"] = segment.name
                raise type(exc)(f"{segment.source()}: {exc}", context=ctx) from exc

        logger.debug(
            "Rendered template with %d placeholder(s) for dialect %s", len(fields), target.name
        )
        return SQL("".join(parts))


def render(
    text: str,
    values: Optional[Mapping[str, Any]] = None,
    *,
    dialect: Union[str, Dialect, None] = None,
    strict: Optional[bool] = None,
    repo_root: Optional[Path] = None,
    **kwargs: Any,
) -> SQL:
    """Parse and render ``text`` in one call."""
    return QueryTemplate(text, dialect, repo_root=repo_root).render(values, strict=strict, **kwargs)


__all__ = [
    "IDENTIFIER",
    "LITERAL",
    "Placeholder",
    "QueryTemplate",
    "Segment",
    "parse_template",
    "render",
]
