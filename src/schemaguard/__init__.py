"""schemaguard — API schema drift monitor.

Compares two OpenAPI/Swagger descriptions and classifies every change as
breaking or non-breaking for API consumers.
"""

from .differ import DiffResult, compare, diff_specs
from .exceptions import InvalidSpecError, SchemaGuardError, SpecNotFoundError, SpecParseError
from .lint import lint_spec
from .parser.openapi import get_endpoints, load_spec, parse_spec_text
from .parser.refs import resolve_ref, resolve_schema
from .reporter import format_diff, format_lint
from .rules import Change, ChangeKind, Rule

__version__ = "0.1.0"
__all__ = [
    "Change",
    "ChangeKind",
    "DiffResult",
    "InvalidSpecError",
    "Rule",
    "SchemaGuardError",
    "SpecNotFoundError",
    "SpecParseError",
    "compare",
    "diff_specs",
    "format_diff",
    "format_lint",
    "get_endpoints",
    "lint_spec",
    "load_spec",
    "parse_spec_text",
    "resolve_ref",
    "resolve_schema",
]
