"""Quality checks for a single OpenAPI description."""

from schemaguard.parser.base import Description
from schemaguard.parser.openapi import get_endpoints


def lint_spec(doc: Description) -> list[str]:
    """Return human-readable quality issues, empty when the spec is clean."""
    issues = []

    info = doc.get("info")
    info = info if isinstance(info, dict) else {}
    if not info.get("title"):
        issues.append("Missing info.title")
    if not info.get("version"):
        issues.append("Missing info.version")

    paths = doc.get("paths")
    if not isinstance(paths, dict) or not paths:
        issues.append("No paths defined")

    for endpoint, op in get_endpoints(doc).items():
        if not op.get("responses"):
            issues.append(f"{endpoint}: No responses defined")
        if not op.get("operationId"):
            issues.append(f"{endpoint}: Missing operationId")
        if not op.get("summary") and not op.get("description"):
            issues.append(f"{endpoint}: Missing summary/description")

    components = doc.get("components")
    components = components if isinstance(components, dict) else {}
    if not components.get("securitySchemes") and not doc.get("security"):
        issues.append("No security schemes defined")

    return issues
