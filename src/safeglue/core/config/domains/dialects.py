"""Domain-specific configuration for SQL dialect definitions."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class DialectsConfig(BaseDomainConfig):
    """Raw dialect definitions (bundled + project overrides), keyed by name."""

    def _config_section(self) -> str:
        return "dialects"

    @cached_property
    def definitions(self) -> Dict[str, Dict[str, Any]]:
        return {
            str(name).lower(): dict(definition or {})
            for name, definition in self.section.items()
        }


__all__ = ["DialectsConfig"]
