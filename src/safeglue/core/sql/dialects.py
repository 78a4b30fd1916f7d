"""SQL dialect definitions.

A dialect captures the quoting rules of one target grammar: how string
literals and identifiers are delimited, which characters need escape
sequences, which cannot be represented at all, and how NULL, booleans and
binary values are spelled.

Bundled dialects live in ``safeglue.data/config/dialects.yaml``; projects can
add or override dialects under the ``dialects`` config key. Every definition
is validated against ``schemas/dialect.yaml``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from safeglue.core.exceptions import ConfigError, UnknownDialectError
from safeglue.core.schemas import SchemaValidationError, validate_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dialect:
    name: str
    string_quote: str = "'"
    identifier_quote: Tuple[str, str] = ('"', '"')
    null: str = "NULL"
    true: str = "TRUE"
    false: str = "FALSE"
    backslash_escapes: bool = False
    escapes: Mapping[str, str] = field(default_factory=dict, hash=False)
    forbidden: frozenset[str] = frozenset({"\0"})
    bytes_format: str = "X'{hex}'"
    unicode_prefix: str = ""
    aliases: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, name: str, definition: Mapping[str, Any]) -> "Dialect":
        """Build a dialect from a config mapping.

        Raises:
            ConfigError: If ``definition`` does not match the dialect schema.
        """
        try:
            validate_payload(dict(definition), "dialect")
        except SchemaValidationError as exc:
            raise ConfigError(
                f"Invalid dialect '{name}': {exc}", context={"dialect": name}
            ) from exc

        kwargs: Dict[str, Any] = {"name": str(name).lower()}
        for key in ("string_quote", "null", "true", "false", "bytes_format", "unicode_prefix"):
            if key in definition:
                kwargs[key] = str(definition[key])
        if "identifier_quote" in definition:
            open_q, close_q = definition["identifier_quote"]
            kwargs["identifier_quote"] = (str(open_q), str(close_q))
        if "backslash_escapes" in definition:
            kwargs["backslash_escapes"] = bool(definition["backslash_escapes"])
        if "escapes" in definition:
            kwargs["escapes"] = {str(k): str(v) for k, v in (definition["escapes"] or {}).items()}
        if "forbidden" in definition:
            kwargs["forbidden"] = frozenset(str(c) for c in (definition["forbidden"] or []))
        if "aliases" in definition:
            kwargs["aliases"] = tuple(str(a).lower() for a in (definition["aliases"] or []))
        return cls(**kwargs)

    def describe(self) -> Dict[str, Any]:
        """JSON-friendly summary (used by ``safeglue dialects``)."""
        return {
            "name": self.name,
            "aliases": list(self.aliases),
            "string_quote": self.string_quote,
            "identifier_quote": list(self.identifier_quote),
            "null": self.null,
            "true": self.true,
            "false": self.false,
            "backslash_escapes": self.backslash_escapes,
            "escapes": {repr(k)[1:-1]: v for k, v in sorted(self.escapes.items())},
            "forbidden": sorted(repr(c)[1:-1] for c in self.forbidden),
            "bytes_format": self.bytes_format,
            "unicode_prefix": self.unicode_prefix,
        }


ANSI = Dialect(name="ansi", aliases=("standard", "sql"))


def _build_dialects(repo_root: Path) -> Tuple[Dict[str, Dialect], Dict[str, Dialect]]:
    from safeglue.core.config.domains import DialectsConfig

    definitions = DialectsConfig(repo_root=repo_root).definitions
    dialects: Dict[str, Dialect] = {}
    for name, definition in sorted(definitions.items()):
        dialects[name] = Dialect.from_mapping(name, definition)
    if "ansi" not in dialects:
        dialects["ansi"] = ANSI
    logger.debug("Loaded %d SQL dialects: %s", len(dialects), ", ".join(sorted(dialects)))
    return dialects, _index(dialects)


def _cached_dialects(repo_root: Optional[Path]) -> Tuple[Dict[str, Dialect], Dict[str, Dialect]]:
    from safeglue.core.config.cache import get_cached_derived

    return get_cached_derived("dialects", _build_dialects, repo_root)


def load_dialects(repo_root: Optional[Path] = None) -> Dict[str, Dialect]:
    """Load every configured dialect keyed by canonical name."""
    return dict(_cached_dialects(repo_root)[0])


def _index(dialects: Mapping[str, Dialect]) -> Dict[str, Dialect]:
    index: Dict[str, Dialect] = {}
    for dialect in dialects.values():
        for alias in dialect.aliases:
            index.setdefault(alias, dialect)
    # Canonical names win over aliases.
    index.update(dialects)
    return index


def get_dialect(
    dialect: Union[str, Dialect, None] = None,
    *,
    repo_root: Optional[Path] = None,
) -> Dialect:
    """Resolve ``dialect`` to a :class:`Dialect`.

    ``None`` selects ``render.default_dialect``. Names are matched
    case-insensitively against canonical names and aliases.

    Raises:
        UnknownDialectError: If the name matches nothing.
    """
    if isinstance(dialect, Dialect):
        return dialect

    if dialect is None:
        from safeglue.core.config.domains import RenderConfig

        dialect = RenderConfig(repo_root=repo_root).default_dialect

    key = str(dialect).strip().lower()
    dialects, index = _cached_dialects(repo_root)
    found = index.get(key)
    if found is None:
        raise UnknownDialectError(
            f"Unknown SQL dialect '{dialect}'. Known dialects: {', '.join(sorted(dialects))}",
            context={"dialect": str(dialect), "known": sorted(dialects)},
        )
    return found


__all__ = ["ANSI", "Dialect", "get_dialect", "load_dialects"]
