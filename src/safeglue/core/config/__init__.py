"""Layered configuration for safeglue."""

from .base import BaseDomainConfig
from .cache import clear_config_cache, get_cached_config, get_cached_derived
from .manager import ConfigManager

__all__ = ["BaseDomainConfig", "ConfigManager", "clear_config_cache", "get_cached_config", "get_cached_derived"]
