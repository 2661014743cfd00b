"""Detect which OpenAPI convention a parsed document follows."""

from typing import Any


def detect_version(doc: Any) -> str | None:
    """Detect the version marker of a parsed document.

    Returns: 'openapi' (3.x), 'swagger' (2.0), or None.
    """
    if not isinstance(doc, dict):
        return None
    if doc.get("openapi"):
        return "openapi"
    if doc.get("swagger"):
        return "swagger"
    return None
