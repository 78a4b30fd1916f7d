"""
Command-line entry point for safeglue.

Commands are discovered from the package layout:

- ``cli/commands/<name>.py`` becomes ``safeglue <name>``
- ``cli/<domain>/<name>.py`` becomes ``safeglue <domain> <name>``

Each command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from safeglue.core.exceptions import SafeglueError

logger = logging.getLogger(__name__)

CLI_DIR = Path(__file__).parent
ROOT_COMMANDS_DIR = "commands"

CommandInfo = Dict[str, Any]


def _command_modules(directory: Path) -> list[str]:
    return sorted(p.stem for p in directory.glob("*.py") if not p.name.startswith("_"))


def _command_info(module: Any, default_summary: str) -> CommandInfo:
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> Dict[str, Path]:
    """Map each command group directory (``config``, ``secrets``) to its path."""
    domains: Dict[str, Path] = {}
    for item in sorted(CLI_DIR.iterdir()):
        if not item.is_dir() or item.name.startswith("_") or item.name == ROOT_COMMANDS_DIR:
            continue
        if _command_modules(item):
            domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> Dict[str, CommandInfo]:
    """Top-level commands under ``cli/commands``."""
    commands_dir = CLI_DIR / ROOT_COMMANDS_DIR
    if not commands_dir.is_dir():
        return {}
    return {
        name: _command_info(importlib.import_module(f"safeglue.cli.{ROOT_COMMANDS_DIR}.{name}"), name)
        for name in _command_modules(commands_dir)
    }


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> Dict[str, CommandInfo]:
    """Commands inside one domain directory, keyed by command name."""
    return {
        name: _command_info(importlib.import_module(f"safeglue.cli.{domain}.{name}"), f"{domain} {name}")
        for name in _command_modules(CLI_DIR / domain)
    }


def _add_command(subparsers: Any, name: str, info: CommandInfo) -> None:
    # Module names use underscores; the command line uses dashes.
    primary = name.replace("_", "-")
    cmd_parser = subparsers.add_parser(
        primary,
        aliases=[name] if primary != name else [],
        help=info["summary"],
    )
    if info["register_args"]:
        info["register_args"](cmd_parser)
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with every discovered command registered."""
    parser = argparse.ArgumentParser(
        prog="safeglue",
        description="safeglue - escape-by-default SQL templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr (or the configured log file)",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="commands",
        description="Available commands",
        metavar="<command>",
    )

    for name, info in sorted(discover_root_commands().items()):
        _add_command(subparsers, name, info)

    for domain in discover_domains():
        commands = discover_commands(domain)
        domain_parser = subparsers.add_parser(domain, help=f"{domain.title()} commands")
        domain_parser.set_defaults(_domain_parser=domain_parser)
        domain_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain} commands",
            metavar="<command>",
        )
        for name, info in sorted(commands.items()):
            _add_command(domain_subparsers, name, info)

    return parser


def _get_version() -> str:
    from safeglue import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    """Configure logging from project config, falling back to stderr defaults."""
    from safeglue.core.stdlib_logging import configure_from_config, configure_stdlib_logging

    level = "DEBUG" if getattr(args, "verbose", False) else None
    repo_root = Path(args.repo_root).expanduser().resolve() if getattr(args, "repo_root", None) else None
    try:
        configure_from_config(repo_root, level=level)
    except (SafeglueError, OSError, ValueError) as exc:
        configure_stdlib_logging(level=level or "WARNING")
        logger.warning("Using default logging; could not load logging config: %s", exc)


def main(argv: list[str] | None = None) -> int:
    """Parse ``argv`` (default ``sys.argv[1:]``), run the command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if not args.domain:
        parser.print_help()
        return 0

    handler = getattr(args, "_func", None)
    if handler is None:
        # A domain with no subcommand: show that domain's help.
        args._domain_parser.print_help()
        return 0

    _configure_logging(args)

    try:
        return int(handler(args) or 0)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
