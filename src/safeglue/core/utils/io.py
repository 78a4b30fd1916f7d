"""YAML/JSON file helpers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import yaml


def iter_yaml_files(directory: Path) -> Iterator[Path]:
    """Yield ``*.yaml``/``*.yml`` files in ``directory`` in alphabetical order."""
    d = Path(directory)
    if not d.is_dir():
        return
    files = [p for p in d.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}]
    yield from sorted(files, key=lambda p: p.name)


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Examples:
        >>> config = read_yaml(Path("config.yaml"), default={})
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def read_structured(path: Path) -> Any:
    """Read a JSON or YAML document, chosen by file suffix.

    Raises on missing files or invalid content.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


__all__ = ["iter_yaml_files", "read_yaml", "read_structured"]
