"""
safeglue secrets list command.

SUMMARY: List available secret names (never values)
"""

from __future__ import annotations

import argparse
import sys

from safeglue.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from safeglue.core.exceptions import SafeglueError
from safeglue.core.secrets import SecretStore

SUMMARY = "List available secret names (never values)"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = SecretStore(repo_root=get_repo_root(args))
        entries = [{"name": name, "source": store.source_of(name)} for name in store.names()]

        if formatter.json_mode:
            formatter.json_output({"secrets": entries, "file": str(store.file_path), "env_prefix": store.env_prefix})
        elif not entries:
            formatter.text(f"No secrets found (env prefix {store.env_prefix}, file {store.file_path})")
        else:
            for entry in entries:
                formatter.text(f"{entry['name']}\t{entry['source']}")
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="secrets_list_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
