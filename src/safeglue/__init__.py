"""
safeglue - escape-by-default SQL templates

Render SQL text from templates with named placeholders. Every value is
escaped for the target dialect, so string interpolation never becomes an
injection vector. Prefer your driver's bound parameters where you can; reach
for safeglue where you can't (identifiers, IN lists, generated scripts).
"""

__version__ = "0.3.0"

from safeglue.core.exceptions import (
    EscapeError,
    SafeglueError,
    SecretNotFoundError,
    TemplateError,
    TemplateSyntaxError,
    UnknownDialectError,
    UnsupportedValueError,
)
from safeglue.core.secrets import Secret, SecretStore
from safeglue.core.sql import SQL, Identifier, QueryTemplate, get_dialect, render, render_jinja

__all__ = [
    "__version__",
    "EscapeError",
    "SafeglueError",
    "SecretNotFoundError",
    "TemplateError",
    "TemplateSyntaxError",
    "UnknownDialectError",
    "UnsupportedValueError",
    "Secret",
    "SecretStore",
    "SQL",
    "Identifier",
    "QueryTemplate",
    "get_dialect",
    "render",
    "render_jinja",
]
