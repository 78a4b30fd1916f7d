"""
safeglue config show command.

SUMMARY: Show current configuration

Prints the merged configuration (bundled defaults, project files, local
files and SAFEGLUE_* environment overrides), optionally narrowed to one
dot-notation key.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, List

import yaml

from safeglue.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from safeglue.core.config import ConfigManager
from safeglue.core.exceptions import SafeglueError

SUMMARY = "Show current configuration"

_MISSING = object()


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Configuration key to show (e.g., 'render.default_dialect')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _scalar(value: Any) -> str:
    if isinstance(value, str) and not value.isprintable():
        return repr(value)
    return str(value)


def _table_lines(value: Any, depth: int = 1) -> List[str]:
    """Indented ``key: value`` lines; flat lists stay on one line."""
    pad = "  " * depth
    if isinstance(value, dict):
        lines: List[str] = []
        for key, item in value.items():
            if isinstance(item, dict) and item:
                lines.append(f"{pad}{_scalar(key)}:")
                lines.extend(_table_lines(item, depth + 1))
            else:
                lines.append(f"{pad}{_scalar(key)}: {_inline(item)}")
        return lines
    return [f"{pad}{_inline(value)}"]


def _inline(value: Any) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(repr(v) if isinstance(v, str) else _inline(v) for v in value) + "]"
    if isinstance(value, dict):
        return "{}" if not value else yaml.safe_dump(value, default_flow_style=True).strip()
    return _scalar(value)


def _yaml_dump(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()


def _nested(key: str, value: Any) -> Any:
    for part in reversed([p for p in key.split(".") if p]):
        value = {part: value}
    return value


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    output_format = "json" if formatter.json_mode else args.format

    try:
        manager = ConfigManager(get_repo_root(args))

        if args.key:
            value = manager.get(args.key, _MISSING)
            if value is _MISSING:
                formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="config_key_missing")
                return 1
            if output_format == "json":
                formatter.json_output({args.key: value})
            elif output_format == "yaml":
                formatter.text(_yaml_dump(_nested(args.key, value)))
            else:
                formatter.text(f"{args.key}:")
                formatter.text("\n".join(_table_lines(value)))
            return 0

        config = manager.get_all()
        if output_format == "json":
            formatter.json_output(config)
        elif output_format == "yaml":
            formatter.text(_yaml_dump(config))
        else:
            for section in sorted(config):
                formatter.text(f"[{section}]")
                formatter.text("\n".join(_table_lines(config[section])))
                formatter.text("")
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
