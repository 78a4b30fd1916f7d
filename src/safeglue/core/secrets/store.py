"""Secret lookup from the environment and an uncommitted project file.

Lookup order for a name such as ``db-password``:
1. ``SAFEGLUE_SECRET_DB_PASSWORD`` (prefix from ``secrets.env_prefix``)
2. ``db-password`` in ``.safeglue/secrets.local.yaml`` (``secrets.file``)

The secrets file must never be committed; keep it in ``.gitignore``.
"""
from __future__ import annotations

import logging
import os
import re
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Optional

from safeglue.core.exceptions import SecretNotFoundError
from safeglue.core.utils.io import read_yaml

from .secret import Secret

logger = logging.getLogger(__name__)

_NOT_GIVEN = object()


def env_var_name(name: str, prefix: str) -> str:
    """Map a secret name to its environment variable."""
    return prefix + re.sub(r"[-.\s]", "_", name).upper()


class SecretStore:
    """Read-only view over the configured secret sources."""

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        env_prefix: Optional[str] = None,
        file_path: Optional[Path] = None,
    ) -> None:
        if env_prefix is None or file_path is None:
            from safeglue.core.config.domains import SecretsConfig

            cfg = SecretsConfig(repo_root=repo_root)
            env_prefix = cfg.env_prefix if env_prefix is None else env_prefix
            file_path = cfg.file_path if file_path is None else file_path
        self.env_prefix = env_prefix
        self.file_path = Path(file_path)

    @cached_property
    def _file_secrets(self) -> Dict[str, str]:
        data = read_yaml(self.file_path, default={}, raise_on_error=False)
        if not isinstance(data, dict):
            logger.warning("Ignoring secrets file %s: expected a mapping", self.file_path)
            return {}
        out: Dict[str, str] = {}
        for key, value in data.items():
            if value is None or isinstance(value, (dict, list)):
                logger.warning("Ignoring secret %r in %s: expected a scalar value", key, self.file_path)
                continue
            out[str(key)] = str(value)
        return out

    def _lookup(self, name: str) -> Optional[str]:
        env_value = os.environ.get(env_var_name(name, self.env_prefix))
        if env_value is not None:
            return env_value
        return self._file_secrets.get(name)

    def get(self, name: str, default: Any = _NOT_GIVEN) -> Any:
        """Return the secret ``name`` wrapped in :class:`Secret`.

        Raises:
            SecretNotFoundError: If no source has ``name`` and no default is given.
        """
        value = self._lookup(name)
        if value is None:
            if default is not _NOT_GIVEN:
                return default
            raise SecretNotFoundError(
                f"Secret '{name}' not found. Set {env_var_name(name, self.env_prefix)} "
                f"or add it to {self.file_path}",
                context={"name": name},
            )
        logger.debug("Resolved secret %s", name)
        return Secret(value, name=name)

    def has(self, name: str) -> bool:
        return self._lookup(name) is not None

    def source_of(self, name: str) -> Optional[str]:
        """Which source provides ``name``: ``"env"``, ``"file"`` or None."""
        if env_var_name(name, self.env_prefix) in os.environ:
            return "env"
        if name in self._file_secrets:
            return "file"
        return None

    def names(self) -> List[str]:
        """Names available from the file plus env vars under the prefix.

        A variable that maps back to a file name is reported under the file
        spelling. Other environment-provided names are reported lower-cased
        with ``_`` separators.
        """
        found = {env_var_name(n, self.env_prefix): n for n in self._file_secrets}
        if self.env_prefix:
            for key in os.environ:
                if key.startswith(self.env_prefix) and len(key) > len(self.env_prefix):
                    found.setdefault(key, key[len(self.env_prefix) :].lower())
        return sorted(set(found.values()))

    def known_values(self) -> List[str]:
        """Every secret value currently resolvable, for log redaction."""
        return [v for v in (self._lookup(n) for n in self.names()) if v]


__all__ = ["SecretStore", "env_var_name"]
