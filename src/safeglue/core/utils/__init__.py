"""Generic helpers shared across safeglue (no domain imports)."""

from .io import iter_yaml_files, read_structured, read_yaml
from .merge import deep_merge, merge_arrays
from .paths import get_project_config_dir, resolve_project_root

__all__ = [
    "iter_yaml_files",
    "read_structured",
    "read_yaml",
    "deep_merge",
    "merge_arrays",
    "get_project_config_dir",
    "resolve_project_root",
]
