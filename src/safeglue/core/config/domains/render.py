"""Domain-specific configuration for template rendering."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class RenderConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "render"

    @cached_property
    def default_dialect(self) -> str:
        return str(self.section.get("default_dialect", "ansi") or "ansi")

    @cached_property
    def strict(self) -> bool:
        return bool(self.section.get("strict", False))

    @cached_property
    def engine(self) -> str:
        return str(self.section.get("engine", "glue") or "glue")


__all__ = ["RenderConfig"]
