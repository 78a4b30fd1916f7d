from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from safeglue.core.secrets.redaction import REDACTED, RedactingFilter

_SAFEGLUE_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    redaction_patterns: Iterable[str] = (),
    redact_values: Iterable[str] = (),
    replacement: str = REDACTED,
    redaction_enabled: bool = True,
) -> logging.Handler:
    """Install the safeglue handler on the ``safeglue`` logger.

    Writes to ``log_path`` when given, stderr otherwise. Idempotent per
    process: calling again replaces the previously installed handler.
    """
    global _SAFEGLUE_HANDLER, _CONFIGURED_TARGET

    logger = logging.getLogger("safeglue")
    logger.setLevel(_level_from_name(level))

    if _SAFEGLUE_HANDLER is not None:
        logger.removeHandler(_SAFEGLUE_HANDLER)
        _SAFEGLUE_HANDLER.close()
        _SAFEGLUE_HANDLER = None

    if log_path is not None:
        resolved = Path(log_path).resolve()
        resolved.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(resolved, encoding="utf-8")
        _CONFIGURED_TARGET = str(resolved)
    else:
        handler = logging.StreamHandler(sys.stderr)
        _CONFIGURED_TARGET = "<stderr>"

    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if redaction_enabled:
        handler.addFilter(
            RedactingFilter(patterns=redaction_patterns, values=redact_values, replacement=replacement)
        )
    logger.addHandler(handler)

    _SAFEGLUE_HANDLER = handler
    return handler


def configure_from_config(repo_root: Optional[Path] = None, *, level: Optional[str] = None) -> logging.Handler:
    """Configure logging from the ``logging`` config section.

    Secret values resolvable through :class:`SecretStore` are added to the
    redaction set.
    """
    from safeglue.core.config.domains import LoggingConfig
    from safeglue.core.secrets.store import SecretStore

    cfg = LoggingConfig(repo_root=repo_root)
    values = SecretStore(repo_root=repo_root).known_values() if cfg.redaction_enabled else []
    return configure_stdlib_logging(
        level=level or cfg.level,
        log_path=cfg.path,
        redaction_patterns=cfg.redaction_patterns,
        redact_values=values,
        replacement=cfg.redaction_replacement,
        redaction_enabled=cfg.redaction_enabled,
    )


def configured_target() -> str | None:
    return _CONFIGURED_TARGET


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _SAFEGLUE_HANDLER, _CONFIGURED_TARGET
    if _SAFEGLUE_HANDLER is not None:
        logging.getLogger("safeglue").removeHandler(_SAFEGLUE_HANDLER)
        _SAFEGLUE_HANDLER.close()
    logging.getLogger("safeglue").setLevel(logging.NOTSET)
    _SAFEGLUE_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = [
    "configure_stdlib_logging",
    "configure_from_config",
    "configured_target",
    "reset_stdlib_logging_for_tests",
]
