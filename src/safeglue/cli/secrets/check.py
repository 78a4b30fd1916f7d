"""
safeglue secrets check command.

SUMMARY: Check that a secret is available

Exits 0 when the secret resolves, 1 otherwise. The value is never printed.
"""

from __future__ import annotations

import argparse
import sys

from safeglue.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from safeglue.core.exceptions import SafeglueError
from safeglue.core.secrets import SecretStore

SUMMARY = "Check that a secret is available"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Secret name (e.g. db-password)")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = SecretStore(repo_root=get_repo_root(args))
        store.get(args.name)
        formatter.success(
            {"name": args.name, "available": True, "source": store.source_of(args.name)},
            f"{args.name}: available ({store.source_of(args.name)})",
        )
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="secret_not_found")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
