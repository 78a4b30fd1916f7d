"""Shared CLI utility functions.

Common helpers used across CLI commands to reduce duplication and ensure
consistent behavior.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from safeglue.core.exceptions import SafeglueError
from safeglue.core.utils.io import read_structured
from safeglue.core.utils.merge import deep_merge
from safeglue.core.utils.paths import resolve_project_root


class CLIUsageError(SafeglueError):
    """Raised when command-line input is incomplete or malformed."""


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from args or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


def read_template_source(args: argparse.Namespace) -> str:
    """Return template text from ``--file`` or the TEMPLATE positional.

    Raises:
        CLIUsageError: If neither (or both) are given.
    """
    path = getattr(args, "file", None)
    text = getattr(args, "template", None)
    if path and text is not None:
        raise CLIUsageError("Pass either TEMPLATE or --file, not both")
    if path == "-":
        return sys.stdin.read()
    if path:
        return Path(path).read_text(encoding="utf-8")
    if text is None:
        raise CLIUsageError("No template given; pass TEMPLATE or --file")
    return text


def _nest(name: str, value: Any) -> Dict[str, Any]:
    parts = [p for p in name.split(".") if p]
    if not parts:
        raise CLIUsageError(f"Invalid value name: {name!r}")
    out: Any = value
    for part in reversed(parts):
        out = {part: out}
    return out


def _split_assignment(raw: str, flag: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise CLIUsageError(f"{flag} expects NAME=VALUE, got {raw!r}")
    return name.strip(), value


def parse_assignments(
    pairs: Optional[Iterable[str]] = None,
    json_pairs: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """Build a values mapping from ``--set`` and ``--set-json`` options.

    ``--set`` values stay strings; ``--set-json`` values are parsed as JSON.
    Dotted names nest (``--set user.name=ann``).
    """
    values: Dict[str, Any] = {}
    for raw in pairs or []:
        name, value = _split_assignment(raw, "--set")
        values = deep_merge(values, _nest(name, value))
    for raw in json_pairs or []:
        name, value = _split_assignment(raw, "--set-json")
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            raise CLIUsageError(f"--set-json {name}: invalid JSON ({exc.msg})") from exc
        values = deep_merge(values, _nest(name, parsed))
    return values


def load_values(args: argparse.Namespace, repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Merge ``--values`` file, ``--set``/``--set-json`` and ``--set-secret`` options."""
    values: Dict[str, Any] = {}
    values_file = getattr(args, "values", None)
    if values_file:
        try:
            data = read_structured(Path(values_file))
        except yaml.YAMLError as exc:
            raise CLIUsageError(f"Values file is not valid YAML: {values_file} ({exc})") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise CLIUsageError(f"Values file must contain a mapping: {values_file}")
        values = data

    values = deep_merge(
        values,
        parse_assignments(getattr(args, "set", None), getattr(args, "set_json", None)),
    )

    secret_pairs = getattr(args, "set_secret", None) or []
    if secret_pairs:
        from safeglue.core.secrets import SecretStore

        store = SecretStore(repo_root=repo_root)
        for raw in secret_pairs:
            name, secret_name = _split_assignment(raw, "--set-secret")
            values = deep_merge(values, _nest(name, store.get(secret_name.strip())))
    return values


__all__ = [
    "CLIUsageError",
    "get_repo_root",
    "load_values",
    "parse_assignments",
    "read_template_source",
]
