"""Domain-specific configuration for safeglue logging.

This config controls:
- The stdlib logging level
- An optional log file (stderr otherwise)
- Redaction of credentials and secret values in log records
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING") or "WARNING").upper()

    @cached_property
    def path(self) -> Optional[Path]:
        raw = str(self.section.get("path", "") or "").strip()
        if not raw:
            return None
        p = Path(raw).expanduser()
        return p if p.is_absolute() else self.repo_root / p

    @cached_property
    def redaction_enabled(self) -> bool:
        red = self.section.get("redaction") or {}
        return bool(red.get("enabled", True))

    @cached_property
    def redaction_replacement(self) -> str:
        red = self.section.get("redaction") or {}
        return str(red.get("replacement", "[REDACTED]") or "[REDACTED]")

    @cached_property
    def redaction_patterns(self) -> list[str]:
        red = self.section.get("redaction") or {}
        pats = red.get("patterns") or []
        if not isinstance(pats, list):
            return []
        return [str(p) for p in pats if p is not None and str(p).strip()]


__all__ = ["LoggingConfig"]
