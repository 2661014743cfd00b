"""Local ``$ref`` resolution within a single description."""

import logging

from .base import Description, Schema

logger = logging.getLogger(__name__)


def resolve_ref(doc: Description, ref: str) -> Schema | None:
    """Return the node ``ref`` points at, or None if it does not resolve.

    Only same-document references (``#/...``) are supported. Any missing
    segment along the way yields None; there is no partial resolution.
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        logger.debug("Unsupported $ref: %r", ref)
        return None

    current = doc
    for part in ref[2:].split("/"):
        # JSON pointer escaping
        part = part.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, dict) and part.isdigit() and int(part) in current:
            # YAML loads bare status codes as ints
            current = current[int(part)]
        else:
            logger.debug("Unresolved $ref: %s (missing %r)", ref, part)
            return None

    if not isinstance(current, dict):
        return None
    return current


def resolve_schema(doc: Description, schema: Schema | None) -> Schema | None:
    """Dereference ``schema`` by exactly one level if it is a ``$ref``."""
    if not isinstance(schema, dict):
        return None
    if "$ref" in schema:
        return resolve_ref(doc, schema["$ref"])
    return schema
