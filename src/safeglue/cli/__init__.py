"""
safeglue CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (config/, secrets/) and top-level commands under commands/.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_dialect_arg,
    add_engine_arg,
    add_template_source_args,
)
from ._utils import (
    CLIUsageError,
    get_repo_root,
    load_values,
    parse_assignments,
    read_template_source,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_dialect_arg",
    "add_engine_arg",
    "add_template_source_args",
    # Utilities
    "CLIUsageError",
    "get_repo_root",
    "load_values",
    "parse_assignments",
    "read_template_source",
]
