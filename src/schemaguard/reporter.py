"""Output formatting — human-readable and JSON reporters."""

import json
from typing import Literal

from schemaguard.differ import DiffResult
from schemaguard.rules import Change

OutputFormat = Literal["human", "json"]

RULE_WIDTH = 50


def format_diff(result: DiffResult, fmt: OutputFormat = "human") -> str:
    """Render a DiffResult as text or as a JSON document."""
    if fmt == "json":
        return json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)
    return _format_human(result)


def _format_human(result: DiffResult) -> str:
    if result.total_changes == 0:
        return "No changes detected between specs."

    lines = [f"Found {result.total_changes} change(s):", ""]

    if result.breaking:
        lines.append(f"BREAKING CHANGES ({len(result.breaking)}):")
        lines.append("-" * RULE_WIDTH)
        lines.extend(_format_changes(result.breaking))

    if result.non_breaking:
        lines.append(f"NON-BREAKING CHANGES ({len(result.non_breaking)}):")
        lines.append("-" * RULE_WIDTH)
        lines.extend(_format_changes(result.non_breaking))

    lines.append("-" * RULE_WIDTH)
    lines.append("")
    if result.has_breaking_changes:
        lines.append(f"{len(result.breaking)} breaking change(s) detected — deployment blocked.")
    else:
        lines.append("All changes are non-breaking — safe to deploy.")

    return "\n".join(lines)


def _format_changes(changes: list[Change]) -> list[str]:
    lines = []
    for change in changes:
        lines.append(f"  [{change.rule.value}]")
        lines.append(f"     {change.message}")
        lines.append(f"     at: {change.path}")
        lines.append("")
    return lines


def format_lint(issues: list[str], fmt: OutputFormat = "human") -> str:
    """Render lint issues as text or as a JSON document."""
    if fmt == "json":
        return json.dumps(
            {"issues": issues, "count": len(issues), "valid": not issues},
            indent=2,
            ensure_ascii=False,
        )

    if not issues:
        return "Spec is valid — no issues found."

    lines = [f"Found {len(issues)} issue(s):", ""]
    lines.extend(f"  • {issue}" for issue in issues)
    return "\n".join(lines)
