"""
safeglue config validate command.

SUMMARY: Validate configuration and dialect definitions
"""

from __future__ import annotations

import argparse
import sys

from safeglue.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from safeglue.core.config import ConfigManager
from safeglue.core.exceptions import SafeglueError
from safeglue.core.sql import get_dialect, load_dialects

SUMMARY = "Validate configuration and dialect definitions"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        manager = ConfigManager(repo_root)
        manager.load_config(validate=True)
        dialects = load_dialects(repo_root)
        default = get_dialect(None, repo_root=repo_root)

        formatter.success(
            {
                "repo_root": str(manager.repo_root),
                "dialects": sorted(dialects),
                "default_dialect": default.name,
            },
            f"Configuration is valid ({len(dialects)} dialects, default: {default.name})",
        )
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="config_invalid")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
