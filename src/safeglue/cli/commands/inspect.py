"""
safeglue inspect command.

SUMMARY: List the placeholders a template references

Useful for checking which values a template needs before rendering it.
"""

from __future__ import annotations

import argparse
import sys

from jinja2 import TemplateError as JinjaTemplateError
from jinja2 import meta

from safeglue.cli import (
    OutputFormatter,
    add_engine_arg,
    add_json_flag,
    add_repo_root_flag,
    add_template_source_args,
    get_repo_root,
    read_template_source,
)
from safeglue.core.config.domains import RenderConfig
from safeglue.core.exceptions import SafeglueError, TemplateSyntaxError
from safeglue.core.sql import ANSI, QueryTemplate, create_environment

SUMMARY = "List the placeholders a template references"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_template_source_args(parser)
    add_engine_arg(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _jinja_variables(text: str) -> list[str]:
    # Compiling the AST needs the ident/inclause/sql filters registered.
    env = create_environment(ANSI)
    try:
        return sorted(meta.find_undeclared_variables(env.parse(text)))
    except JinjaTemplateError as exc:
        raise TemplateSyntaxError(
            f"Invalid Jinja template: {exc.message}",
            context={"line": getattr(exc, "lineno", None)},
        ) from exc


def main(args: argparse.Namespace) -> int:
    """Print placeholder names (and kinds for glue templates)."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        text = read_template_source(args)
        engine = args.engine or RenderConfig(repo_root=repo_root).engine

        if engine == "jinja":
            names = _jinja_variables(text)
            if formatter.json_mode:
                formatter.json_output({"engine": engine, "names": names})
            else:
                for name in names:
                    formatter.text(name)
            return 0

        template = QueryTemplate(text, repo_root=repo_root)
        fields = [
            {
                "name": f.name,
                "kind": f.kind,
                "collapse": f.collapse,
                "position": f.position,
            }
            for f in template.fields
        ]
        if formatter.json_mode:
            formatter.json_output({"engine": engine, "names": template.placeholders, "placeholders": fields})
        else:
            for f in template.fields:
                suffix = " (list)" if f.collapse else ""
                formatter.text(f"{f.name}\t{f.kind}{suffix}\t@{f.position}")
        return 0

    except (SafeglueError, OSError, ValueError) as e:
        formatter.error(e, error_code="inspect_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
