"""CLI entry point for schemaguard.

Exit codes: 0 = ok, 1 = breaking changes / lint issues, 2 = spec could not be loaded.
"""

import logging
import sys
from pathlib import Path

import click

from schemaguard import __version__
from schemaguard.differ import compare
from schemaguard.exceptions import SchemaGuardError
from schemaguard.lint import lint_spec
from schemaguard.parser.base import Description
from schemaguard.parser.openapi import load_spec
from schemaguard.reporter import format_diff, format_lint

EXIT_FAILED = 1
EXIT_ERROR = 2

_spec_path = click.Path(exists=True, dir_okay=False, path_type=Path)
_format_option = click.option(
    "-f",
    "--format",
    "fmt",
    default="human",
    envvar="SCHEMAGUARD_FORMAT",
    show_envvar=True,
    type=click.Choice(["human", "json"]),
    help="Output format.",
)


def _load(path: Path) -> Description:
    """Load a spec, turning load errors into exit code 2."""
    try:
        return load_spec(path)
    except SchemaGuardError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(__version__, prog_name="schemaguard")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """schemaguard — detect breaking changes between OpenAPI specs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("old_spec", type=_spec_path)
@click.argument("new_spec", type=_spec_path)
@_format_option
@click.option(
    "--fail-on-breaking/--no-fail-on-breaking",
    default=True,
    help="Exit with code 1 if breaking changes are found.",
)
def diff(old_spec: Path, new_spec: Path, fmt: str, fail_on_breaking: bool):
    """Compare two OpenAPI specs and report breaking vs non-breaking changes."""
    old = _load(old_spec)
    new = _load(new_spec)
    result = compare(old, new)

    click.echo(format_diff(result, fmt))

    if fail_on_breaking and result.has_breaking_changes:
        sys.exit(EXIT_FAILED)


@main.command()
@click.option("-s", "--spec", "spec_path", required=True, type=_spec_path, help="Path to current OpenAPI spec.")
@click.option("-b", "--baseline", required=True, type=_spec_path, help="Path to baseline OpenAPI spec.")
@_format_option
def ci(spec_path: Path, baseline: Path, fmt: str):
    """CI mode: compare spec against baseline, fail on breaking changes."""
    baseline_spec = _load(baseline)
    current_spec = _load(spec_path)
    result = compare(baseline_spec, current_spec)

    click.echo(format_diff(result, fmt))

    if result.has_breaking_changes:
        click.echo("\nCI check FAILED — breaking changes detected.")
        sys.exit(EXIT_FAILED)
    elif result.total_changes > 0:
        click.echo("\nCI check PASSED — changes are non-breaking.")
    else:
        click.echo("\nCI check PASSED — no changes detected.")


@main.command()
@click.argument("spec_path", type=_spec_path)
@_format_option
def lint(spec_path: Path, fmt: str):
    """Validate OpenAPI spec quality."""
    spec = _load(spec_path)
    issues = lint_spec(spec)

    click.echo(format_lint(issues, fmt))

    if issues:
        sys.exit(EXIT_FAILED)
