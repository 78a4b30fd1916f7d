"""Safe SQL text construction: templates, escaping and dialects."""

from .dialects import ANSI, Dialect, get_dialect, load_dialects
from .escaping import collapse, escape_identifier, escape_literal, escape_string, is_collection
from .jinja import create_environment, render_jinja
from .template import Placeholder, QueryTemplate, parse_template, render
from .values import SQL, Identifier

__all__ = [
    "ANSI",
    "Dialect",
    "get_dialect",
    "load_dialects",
    "collapse",
    "escape_identifier",
    "escape_literal",
    "escape_string",
    "is_collection",
    "create_environment",
    "render_jinja",
    "Placeholder",
    "QueryTemplate",
    "parse_template",
    "render",
    "SQL",
    "Identifier",
]
