"""Exceptions raised while loading OpenAPI descriptions.

The comparison engine itself never raises; only loading a description
from disk or text can fail.
"""


class SchemaGuardError(Exception):
    """Base exception for schemaguard errors."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.message = message
        self.source = source


class SpecNotFoundError(SchemaGuardError):
    """Raised when a spec file cannot be read."""

    def __init__(self, source: str, reason: str = ""):
        message = f"Cannot read spec: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, source)


class SpecParseError(SchemaGuardError):
    """Raised when a spec is not valid YAML/JSON or not a mapping."""

    def __init__(self, source: str, reason: str = ""):
        message = f"Failed to parse spec: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, source)
        self.reason = reason


class InvalidSpecError(SchemaGuardError):
    """Raised when a parsed document carries no openapi/swagger marker."""

    def __init__(self, source: str):
        super().__init__(
            f"Not a valid OpenAPI spec (missing openapi/swagger version): {source}",
            source,
        )
