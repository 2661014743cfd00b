"""OpenAPI spec diff engine — detects breaking vs non-breaking changes.

Walks two descriptions side by side: endpoints first, then per-operation
parameters, request body and responses, recursing into payload schemas,
and finally the declared security schemes. Every difference becomes a
Change in discovery order.
"""

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from schemaguard.parser.base import Description, Schema
from schemaguard.parser.openapi import get_endpoints, json_schema, parse_parameters
from schemaguard.parser.refs import resolve_schema
from schemaguard.rules import Change, ChangeKind, Rule

logger = logging.getLogger(__name__)

# Bounds recursion through cyclic $refs. Nesting deeper than this is not
# compared at all, so changes below it go unreported.
MAX_DEPTH = 10

Context = Literal["request", "response"]


class DiffResult(BaseModel):
    """Outcome of comparing two specs."""

    model_config = ConfigDict(frozen=True)

    changes: list[Change] = Field(default_factory=list, exclude=True)
    breaking: list[Change] = Field(default_factory=list)
    non_breaking: list[Change] = Field(default_factory=list, serialization_alias="nonBreaking")
    total_changes: int = Field(0, serialization_alias="totalChanges")
    has_breaking_changes: bool = Field(False, serialization_alias="hasBreakingChanges")

    @classmethod
    def from_changes(cls, changes: list[Change]) -> "DiffResult":
        breaking = [c for c in changes if c.kind is ChangeKind.BREAKING]
        non_breaking = [c for c in changes if c.kind is not ChangeKind.BREAKING]
        return cls(
            changes=list(changes),
            breaking=breaking,
            non_breaking=non_breaking,
            total_changes=len(changes),
            has_breaking_changes=bool(breaking),
        )


def compare(old: Description, new: Description) -> DiffResult:
    """Compare two parsed specs and classify every difference."""
    return SpecDiffer(old, new).run()


diff_specs = compare


class SpecDiffer:
    """Single-use comparison of one (old, new) description pair."""

    def __init__(self, old: Description, new: Description):
        self.old = old if isinstance(old, dict) else {}
        self.new = new if isinstance(new, dict) else {}
        self.changes: list[Change] = []

    def run(self) -> DiffResult:
        self._diff_endpoints()
        self._diff_security()
        logger.debug("Found %d change(s)", len(self.changes))
        return DiffResult.from_changes(self.changes)

    def _add(self, kind: ChangeKind, path: str, message: str, rule: Rule) -> None:
        self.changes.append(Change(kind=kind, path=path, message=message, rule=rule))

    def _breaking(self, path: str, message: str, rule: Rule) -> None:
        self._add(ChangeKind.BREAKING, path, message, rule)

    def _non_breaking(self, path: str, message: str, rule: Rule) -> None:
        self._add(ChangeKind.NON_BREAKING, path, message, rule)

    # -- endpoints -------------------------------------------------------

    def _diff_endpoints(self) -> None:
        old_endpoints = get_endpoints(self.old)
        new_endpoints = get_endpoints(self.new)
        logger.debug("Comparing %d old vs %d new endpoints", len(old_endpoints), len(new_endpoints))

        for endpoint in old_endpoints:
            if endpoint not in new_endpoints:
                self._breaking(endpoint, f"Endpoint removed: {endpoint}", Rule.ENDPOINT_REMOVED)

        for endpoint in new_endpoints:
            if endpoint not in old_endpoints:
                self._non_breaking(endpoint, f"Endpoint added: {endpoint}", Rule.ENDPOINT_ADDED)

        for endpoint, old_op in old_endpoints.items():
            new_op = new_endpoints.get(endpoint)
            if new_op is not None:
                self._diff_operation(endpoint, old_op, new_op)

    def _diff_operation(self, endpoint: str, old_op: dict, new_op: dict) -> None:
        if not old_op.get("deprecated") and new_op.get("deprecated"):
            self._non_breaking(endpoint, f"Endpoint deprecated: {endpoint}", Rule.DEPRECATED)

        self._diff_parameters(endpoint, old_op, new_op)
        self._diff_request_body(endpoint, old_op, new_op)
        self._diff_responses(endpoint, old_op, new_op)

        # only whether the text differs matters, not how
        description_changed = old_op.get("description") != new_op.get("description")
        summary_changed = old_op.get("summary") != new_op.get("summary")
        if description_changed or summary_changed:
            self._non_breaking(endpoint, f"Description/summary changed for {endpoint}", Rule.DESCRIPTION_CHANGED)

    def _diff_parameters(self, endpoint: str, old_op: dict, new_op: dict) -> None:
        old_params = {p.key: p for p in parse_parameters(old_op.get("parameters"))}
        new_params = {p.key: p for p in parse_parameters(new_op.get("parameters"))}

        for key, param in old_params.items():
            if key not in new_params:
                self._breaking(
                    f"{endpoint} > param {param.name}",
                    f"Parameter removed: {param.name} ({param.location})",
                    Rule.PARAM_REMOVED,
                )

        for key, param in new_params.items():
            if key in old_params:
                continue
            if param.required:
                self._breaking(
                    f"{endpoint} > param {param.name}",
                    f"Required parameter added: {param.name} ({param.location})",
                    Rule.REQUIRED_PARAM_ADDED,
                )
            else:
                self._non_breaking(
                    f"{endpoint} > param {param.name}",
                    f"Optional parameter added: {param.name} ({param.location})",
                    Rule.OPTIONAL_PARAM_ADDED,
                )

        for key, old_param in old_params.items():
            new_param = new_params.get(key)
            if new_param is None or not old_param.param_type or not new_param.param_type:
                continue
            if old_param.param_type != new_param.param_type:
                self._breaking(
                    f"{endpoint} > param {old_param.name}",
                    f"Parameter type changed: {old_param.name} "
                    f"({old_param.param_type} → {new_param.param_type})",
                    Rule.FIELD_TYPE_CHANGED,
                )

    def _diff_request_body(self, endpoint: str, old_op: dict, new_op: dict) -> None:
        old_raw = json_schema(old_op.get("requestBody"))
        new_raw = json_schema(new_op.get("requestBody"))
        if old_raw is None and new_raw is None:
            return

        old_schema = resolve_schema(self.old, old_raw)
        new_schema = resolve_schema(self.new, new_raw)
        if old_schema is not None and new_schema is not None:
            self.diff_schema(f"{endpoint} > requestBody", old_schema, new_schema, "request")

    def _diff_responses(self, endpoint: str, old_op: dict, new_op: dict) -> None:
        old_responses = _responses(old_op)
        new_responses = _responses(new_op)

        for code in old_responses:
            if code not in new_responses:
                self._breaking(
                    f"{endpoint} > response {code}",
                    f"Response code removed: {code}",
                    Rule.RESPONSE_CODE_REMOVED,
                )

        for code in new_responses:
            if code not in old_responses:
                self._non_breaking(
                    f"{endpoint} > response {code}",
                    f"Response code added: {code}",
                    Rule.RESPONSE_CODE_ADDED,
                )

        for code, old_response in old_responses.items():
            if code not in new_responses:
                continue
            old_schema = resolve_schema(self.old, json_schema(old_response))
            new_schema = resolve_schema(self.new, json_schema(new_responses[code]))
            if old_schema is not None and new_schema is not None:
                self.diff_schema(f"{endpoint} > response {code}", old_schema, new_schema, "response")

    # -- schemas ---------------------------------------------------------

    def diff_schema(self, path: str, old: Schema, new: Schema, context: Context, depth: int = 0) -> None:
        """Recursively compare two resolved schemas at ``path``."""
        if depth > MAX_DEPTH:
            logger.debug("Max depth (%d) reached at %s, not descending", MAX_DEPTH, path)
            return

        old_type, new_type = old.get("type"), new.get("type")
        if old_type and new_type and old_type != new_type:
            self._breaking(path, f"Type changed: {old_type} → {new_type}", Rule.FIELD_TYPE_CHANGED)
            return

        old_enum, new_enum = old.get("enum"), new.get("enum")
        if isinstance(old_enum, list) and isinstance(new_enum, list):
            old_keys = {_enum_key(v) for v in old_enum}
            new_keys = {_enum_key(v) for v in new_enum}
            for value in _unique(v for v in old_enum if _enum_key(v) not in new_keys):
                self._breaking(path, f"Enum value removed: {_literal(value)}", Rule.ENUM_VALUE_REMOVED)
            for value in _unique(v for v in new_enum if _enum_key(v) not in old_keys):
                self._non_breaking(path, f"Enum value added: {_literal(value)}", Rule.ENUM_VALUE_ADDED)

        old_props = _mapping(old.get("properties"))
        new_props = _mapping(new.get("properties"))
        old_required = _names(old.get("required"))
        new_required = _names(new.get("required"))

        for prop in old_props:
            # request fields may disappear freely
            if prop not in new_props and context == "response":
                self._breaking(f"{path}.{prop}", f"Response field removed: {prop}", Rule.RESPONSE_FIELD_REMOVED)

        for prop in new_props:
            if prop in old_props:
                continue
            if context == "request" and prop in new_required:
                self._breaking(
                    f"{path}.{prop}", f"Required request field added: {prop}", Rule.REQUEST_FIELD_REQUIRED
                )
            elif context == "response":
                self._non_breaking(f"{path}.{prop}", f"Response field added: {prop}", Rule.RESPONSE_FIELD_ADDED)

        if context == "request":
            for prop in new_required:
                if prop not in old_required and prop in old_props:
                    self._breaking(f"{path}.{prop}", f"Field made required: {prop}", Rule.REQUEST_FIELD_REQUIRED)

        for prop, old_prop in old_props.items():
            if prop not in new_props:
                continue
            old_prop_schema = resolve_schema(self.old, old_prop)
            new_prop_schema = resolve_schema(self.new, new_props[prop])
            if old_prop_schema is not None and new_prop_schema is not None:
                self.diff_schema(f"{path}.{prop}", old_prop_schema, new_prop_schema, context, depth + 1)

    # -- security --------------------------------------------------------

    def _diff_security(self) -> None:
        old_schemes = ",".join(sorted(_security_schemes(self.old)))
        new_schemes = ",".join(sorted(_security_schemes(self.new)))

        if old_schemes != new_schemes:
            self._breaking(
                "security",
                f"Security schemes changed: [{old_schemes}] → [{new_schemes}]",
                Rule.AUTH_CHANGED,
            )


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _names(value: Any) -> list[str]:
    """Required property names, in declaration order, without duplicates."""
    if not isinstance(value, list):
        return []
    return list(dict.fromkeys(v for v in value if isinstance(v, str)))


def _enum_key(value: Any) -> str:
    # JSON text keeps true apart from 1 and works for objects and arrays
    return json.dumps(value, sort_keys=True, default=str)


def _unique(values) -> list:
    seen: dict[str, Any] = {}
    for v in values:
        seen.setdefault(_enum_key(v), v)
    return list(seen.values())


def _literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _responses(op: dict) -> dict[str, Any]:
    # YAML turns bare status codes into ints
    return {str(code): resp for code, resp in _mapping(op.get("responses")).items()}


def _security_schemes(doc: Description) -> list[str]:
    schemes = _mapping(_mapping(doc.get("components")).get("securitySchemes"))
    return [str(name) for name in schemes]
