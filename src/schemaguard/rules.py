"""Breaking change rule definitions for OpenAPI spec diffing.

Each rule is a symbolic tag; whether a change is breaking is decided where
the change is emitted, not looked up from the rule.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ChangeKind(str, Enum):
    BREAKING = "breaking"
    NON_BREAKING = "non-breaking"
    INFO = "info"


class Rule(str, Enum):
    # Breaking changes
    ENDPOINT_REMOVED = "endpoint-removed"
    METHOD_REMOVED = "method-removed"  # reserved; endpoint keys include the method
    REQUIRED_PARAM_ADDED = "required-param-added"
    PARAM_REMOVED = "param-removed"
    REQUEST_FIELD_REQUIRED = "request-field-made-required"
    FIELD_TYPE_CHANGED = "field-type-changed"
    RESPONSE_FIELD_REMOVED = "response-field-removed"
    ENUM_VALUE_REMOVED = "enum-value-removed"
    AUTH_CHANGED = "auth-requirement-changed"
    RESPONSE_CODE_REMOVED = "response-code-removed"

    # Non-breaking changes
    ENDPOINT_ADDED = "endpoint-added"
    OPTIONAL_PARAM_ADDED = "optional-param-added"
    RESPONSE_FIELD_ADDED = "response-field-added"
    ENUM_VALUE_ADDED = "enum-value-added"
    DESCRIPTION_CHANGED = "description-changed"
    RESPONSE_CODE_ADDED = "response-code-added"
    DEPRECATED = "deprecated"


class Change(BaseModel):
    """A single classified difference between two specs."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    path: str  # e.g. "GET /pets > response 200.total"
    message: str
    rule: Rule

    @property
    def is_breaking(self) -> bool:
        return self.kind is ChangeKind.BREAKING
