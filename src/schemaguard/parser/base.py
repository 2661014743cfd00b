"""Data models for parsed OpenAPI documents.

Descriptions themselves stay plain dicts as loaded from YAML/JSON; schemas
point at each other through ``$ref`` strings into that same dict, so the
graph may be cyclic without any object cycles. Only the pieces that are
compared by identity get a model.
"""

from typing import Any

from pydantic import BaseModel

Description = dict[str, Any]
Schema = dict[str, Any]

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options", "trace")
JSON_MEDIA_TYPE = "application/json"


class Param(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    param_type: str | None = None  # schema.type, when declared

    @property
    def key(self) -> str:
        """Composite identity used to match parameters across versions."""
        return f"{self.location}:{self.name}"
