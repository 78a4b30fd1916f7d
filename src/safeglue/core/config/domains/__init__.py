"""Typed accessors for each config section."""

from .dialects import DialectsConfig
from .logging import LoggingConfig
from .render import RenderConfig
from .secrets import SecretsConfig

__all__ = ["DialectsConfig", "LoggingConfig", "RenderConfig", "SecretsConfig"]
