"""
safeglue dialects command.

SUMMARY: List the configured SQL dialects
"""

from __future__ import annotations

import argparse
import sys

from safeglue.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from safeglue.core.config.domains import RenderConfig
from safeglue.core.exceptions import SafeglueError
from safeglue.core.sql import load_dialects

SUMMARY = "List the configured SQL dialects"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        dialects = load_dialects(repo_root)
        default = RenderConfig(repo_root=repo_root).default_dialect.lower()

        if formatter.json_mode:
            formatter.json_output(
                {
                    "default": default,
                    "dialects": [d.describe() for _, d in sorted(dialects.items())],
                }
            )
            return 0

        for name, dialect in sorted(dialects.items()):
            marker = "*" if name == default or default in dialect.aliases else " "
            open_q, close_q = dialect.identifier_quote
            aliases = f" (aliases: {', '.join(dialect.aliases)})" if dialect.aliases else ""
            formatter.text(
                f"{marker} {name}{aliases}: string {dialect.string_quote}...{dialect.string_quote}, "
                f"identifier {open_q}...{close_q}, true={dialect.true}, false={dialect.false}"
            )
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="dialects_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
