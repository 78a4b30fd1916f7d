"""
safeglue render command.

SUMMARY: Render a SQL template with escaped values

Values come from a YAML/JSON file (--values), NAME=VALUE pairs (--set, kept
as strings), NAME=JSON pairs (--set-json) and secrets (--set-secret
NAME=SECRET). Later sources win.
"""

from __future__ import annotations

import argparse
import sys

from safeglue.cli import (
    CLIUsageError,
    OutputFormatter,
    add_dialect_arg,
    add_engine_arg,
    add_json_flag,
    add_repo_root_flag,
    add_template_source_args,
    get_repo_root,
    load_values,
    read_template_source,
)
from safeglue.core.config.domains import RenderConfig
from safeglue.core.exceptions import SafeglueError
from safeglue.core.sql import QueryTemplate, get_dialect, render_jinja

SUMMARY = "Render a SQL template with escaped values"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_template_source_args(parser)
    parser.add_argument(
        "--set",
        action="append",
        metavar="NAME=VALUE",
        help="Bind a string value (repeatable)",
    )
    parser.add_argument(
        "--set-json",
        action="append",
        metavar="NAME=JSON",
        help="Bind a JSON value, e.g. ids=[1,2,3] (repeatable)",
    )
    parser.add_argument(
        "--set-secret",
        action="append",
        metavar="NAME=SECRET",
        help="Bind a value looked up from the secret store (repeatable)",
    )
    parser.add_argument(
        "--values",
        metavar="FILE",
        help="YAML or JSON file with a mapping of values",
    )
    parser.add_argument(
        "--strict",
        action="store_const",
        const=True,
        default=None,
        help="Fail when values are supplied that the template never uses (glue engine only)",
    )
    add_dialect_arg(parser)
    add_engine_arg(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Render the template and print the SQL."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        text = read_template_source(args)
        values = load_values(args, repo_root=repo_root)
        dialect = get_dialect(args.dialect, repo_root=repo_root)
        engine = args.engine or RenderConfig(repo_root=repo_root).engine
        if engine == "jinja" and args.strict:
            raise CLIUsageError("--strict applies to the glue engine only")

        if engine == "jinja":
            sql = render_jinja(text, values, dialect=dialect)
        else:
            sql = QueryTemplate(text, dialect, repo_root=repo_root).render(values, strict=args.strict)

        if formatter.json_mode:
            formatter.json_output({"sql": str(sql), "dialect": dialect.name, "engine": engine})
        else:
            formatter.text(str(sql))
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="render_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
