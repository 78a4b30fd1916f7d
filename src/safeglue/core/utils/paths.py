"""Project root and config directory resolution.

Resolution priority:
1. ``SAFEGLUE_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the current directory containing ``.safeglue/``
3. The current directory
"""
from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT_ENV = "SAFEGLUE_PROJECT_ROOT"
PROJECT_CONFIG_DIR_NAME = ".safeglue"


class SafegluePathError(ValueError):
    """Raised when the project root cannot be resolved."""


def resolve_project_root() -> Path:
    """Resolve the project root directory.

    Raises:
        SafegluePathError: If ``SAFEGLUE_PROJECT_ROOT`` points at a missing
            path or at the ``.safeglue`` directory itself.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        path = Path(env_root).expanduser().resolve()
        if not path.exists():
            raise SafegluePathError(f"{PROJECT_ROOT_ENV} points at missing path: {path}")
        if path.name == PROJECT_CONFIG_DIR_NAME:
            raise SafegluePathError(
                f"{PROJECT_ROOT_ENV} points to {PROJECT_CONFIG_DIR_NAME} directory: {path}. "
                "It must point to the project root."
            )
        return path

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_CONFIG_DIR_NAME).is_dir():
            return candidate
    return cwd


def get_project_config_dir(repo_root: Path | None = None) -> Path:
    """Return ``<repo_root>/.safeglue`` (not created)."""
    root = Path(repo_root) if repo_root is not None else resolve_project_root()
    return root / PROJECT_CONFIG_DIR_NAME


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR_NAME",
    "SafegluePathError",
    "resolve_project_root",
    "get_project_config_dir",
]
