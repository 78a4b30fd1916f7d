"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include a fingerprint of ``SAFEGLUE_*`` environment
variables and project config file mtimes so edits are picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}
_derived_cache: Dict[str, Any] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        from safeglue.core.utils.paths import resolve_project_root

        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(d: Path) -> list[tuple[str, int, int]]:
    from safeglue.core.utils.io import iter_yaml_files

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(root: Path) -> str:
    from safeglue.core.utils.paths import get_project_config_dir

    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith("SAFEGLUE_"))
    project_dir = get_project_config_dir(root)
    files = [
        _fingerprint_dir(project_dir / "config"),
        _fingerprint_dir(project_dir / "config.local"),
    ]
    digest = hashlib.sha256(repr((env_items, files)).encode("utf-8")).hexdigest()[:16]
    return f"{root}:{digest}"


def get_cached_config(repo_root: Optional[Path] = None, *, validate: bool = True) -> Dict[str, Any]:
    """Return the merged config for ``repo_root``, loading it on first use."""
    root = _normalize_repo_root(repo_root)
    key = _cache_key(root) + (":validated" if validate else ":raw")
    cached = _config_cache.get(key)
    if cached is not None:
        return cached

    from .manager import ConfigManager

    cfg = ConfigManager(root).load_config(validate=validate)
    _config_cache[key] = cfg
    return cfg


def clear_config_cache() -> None:
    """Drop every cached config (used by tests and after config writes)."""
    _config_cache.clear()
    _derived_cache.clear()


def get_cached_derived(name: str, builder: Callable[[Path], Any], repo_root: Optional[Path] = None) -> Any:
    """Return ``builder(root)``, cached until the merged config for ``root`` changes."""
    root = _normalize_repo_root(repo_root)
    key = f"{name}:{_cache_key(root)}"
    if key not in _derived_cache:
        _derived_cache[key] = builder(root)
    return _derived_cache[key]


def is_cached(repo_root: Optional[Path] = None) -> bool:
    root = _normalize_repo_root(repo_root)
    prefix = _cache_key(root)
    return any(k.startswith(prefix) for k in _config_cache)


__all__ = ["get_cached_config", "get_cached_derived", "clear_config_cache", "is_cached"]
