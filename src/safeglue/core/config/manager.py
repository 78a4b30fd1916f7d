"""
safeglue configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from safeglue.core.exceptions import ConfigError
from safeglue.core.schemas import SchemaValidationError, validate_payload
from safeglue.core.utils.io import iter_yaml_files, read_yaml
from safeglue.core.utils.merge import deep_merge as _deep_merge
from safeglue.core.utils.paths import (
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    resolve_project_root,
)
from safeglue.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SAFEGLUE_"
# Env names under the config prefix that are not config overrides.
RESERVED_ENV_PREFIXES: Tuple[str, ...] = (PROJECT_ROOT_ENV, "SAFEGLUE_SECRET_")


class ConfigManager:
    """Load, merge, and validate safeglue configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: SAFEGLUE_<section>__<key>
    2. Project-local config: .safeglue/config.local/*.yaml (alphabetical order, uncommitted)
    3. Project config: .safeglue/config/*.yaml (alphabetical order)
    4. Bundled defaults: safeglue.data/config/*.yaml (alphabetical order)
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root).expanduser().resolve() if repo_root else resolve_project_root()

        project_dir = get_project_config_dir(self.repo_root)
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = project_dir / "config"
        self.project_local_config_dir = project_dir / "config.local"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping: {path}",
                context={"path": str(path)},
            )
        return data

    def config_dirs(self) -> List[Path]:
        """Config directories in merge order (lowest priority first)."""
        return [self.core_config_dir, self.project_config_dir, self.project_local_config_dir]

    def _merge_directory(self, base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
        cfg = base
        for path in iter_yaml_files(directory):
            logger.debug("Merging config file %s", path)
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # -- environment overrides -------------------------------------------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int, object]]:
        if not raw:
            return []
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[Union[str, int, object]] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": f"{ENV_PREFIX}{raw}"},
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, int, object]], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            if any(key.startswith(reserved) for reserved in RESERVED_ENV_PREFIXES):
                continue
            raw = key[len(ENV_PREFIX) :]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int, object]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path[:-1]):
            nxt = path[i + 1]
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise ConfigError("Invalid path: list index/APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigError("Path traverses non-dict container")
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(str(part).lower(), part)
            if key_to_use not in cur:
                cur[key_to_use] = [] if (isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER) else {}
            cur = cur[key_to_use]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigError("APPEND requires list")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigError("Index assignment requires list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise ConfigError("Key assignment requires dict")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            cur[lower_map.get(str(leaf).lower(), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool = False) -> Dict[str, Any]:
        """Apply ``SAFEGLUE_*`` overrides to ``cfg`` in place and return it."""
        for path, value, raw in self._iter_env_overrides(strict=strict):
            try:
                self._set_nested(cfg, path, value)
            except ConfigError:
                if strict:
                    raise
                logger.warning("Ignoring env override %s%s: incompatible path", ENV_PREFIX, raw)
        return cfg

    # -- public API -------------------------------------------------------

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the fully merged configuration.

        Raises:
            ConfigError: If a layer is invalid or the result fails schema validation.
        """
        cfg: Dict[str, Any] = {}
        for directory in self.config_dirs():
            cfg = self._merge_directory(cfg, directory)

        cfg = copy.deepcopy(cfg)
        self.apply_env_overrides(cfg, strict=True)

        if validate:
            try:
                validate_payload(cfg, "config")
            except SchemaValidationError as exc:
                raise ConfigError(str(exc), context={"repo_root": str(self.repo_root)}) from exc
        return cfg

    def get_all(self) -> Dict[str, Any]:
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-notation key (e.g. ``render.default_dialect``)."""
        cur: Any = self.get_all()
        for part in [p for p in key.split(".") if p]:
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX", "RESERVED_ENV_PREFIXES"]
