"""Domain-specific configuration for secret lookup."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from safeglue.core.utils.paths import get_project_config_dir

from ..base import BaseDomainConfig


class SecretsConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "secrets"

    @cached_property
    def env_prefix(self) -> str:
        return str(self.section.get("env_prefix", "SAFEGLUE_SECRET_") or "")

    @cached_property
    def file_path(self) -> Path:
        """Secrets file, resolved relative to ``.safeglue/`` unless absolute."""
        raw = str(self.section.get("file", "secrets.local.yaml") or "secrets.local.yaml")
        path = Path(raw).expanduser()
        if path.is_absolute():
            return path
        return get_project_config_dir(self.repo_root) / path


__all__ = ["SecretsConfig"]
