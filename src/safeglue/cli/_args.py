"""Common CLI argument registration utilities.

Reusable argument registration functions to reduce duplication across CLI
commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for project root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path (where .safeglue/ lives)",
    )


def add_dialect_arg(parser: argparse.ArgumentParser) -> None:
    """Add --dialect option (defaults to render.default_dialect)."""
    parser.add_argument(
        "--dialect",
        "-d",
        help="Target SQL dialect or alias (default: render.default_dialect from config)",
    )


def add_engine_arg(parser: argparse.ArgumentParser) -> None:
    """Add --engine option selecting the template syntax."""
    parser.add_argument(
        "--engine",
        choices=["glue", "jinja"],
        help="Template syntax: glue placeholders or Jinja2 (default: render.engine from config)",
    )


def add_template_source_args(parser: argparse.ArgumentParser) -> None:
    """Add TEMPLATE positional and --file option."""
    parser.add_argument(
        "template",
        nargs="?",
        help="Template text (use --file to read it from a file)",
    )
    parser.add_argument(
        "--file",
        "-f",
        help="Read the template from FILE ('-' for stdin)",
    )


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dialect_arg",
    "add_engine_arg",
    "add_template_source_args",
]
