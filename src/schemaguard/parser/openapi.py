"""OpenAPI / Swagger document loading and endpoint extraction.

Loads OpenAPI 3.x and Swagger 2.0 documents from YAML or JSON and flattens
their ``paths`` into ``"METHOD /path"`` keyed operations.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from schemaguard.exceptions import InvalidSpecError, SpecNotFoundError, SpecParseError

from .base import HTTP_METHODS, JSON_MEDIA_TYPE, Description, Param, Schema
from .detect import detect_version

logger = logging.getLogger(__name__)


def load_spec(file_path: Path | str) -> Description:
    """Load an OpenAPI/Swagger file into a description dict."""
    file_path = Path(file_path)
    logger.debug("Loading spec %s", file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SpecNotFoundError(str(file_path), str(e)) from e

    fmt = "json" if file_path.suffix.lower() == ".json" else "yaml"
    return parse_spec_text(text, source=str(file_path), fmt=fmt)


def parse_spec_text(text: str, source: str = "<string>", fmt: str | None = None) -> Description:
    """Parse raw YAML/JSON text into a description dict.

    ``fmt`` is 'json' or 'yaml'; YAML is used when omitted since it also
    accepts JSON documents.
    """
    try:
        if fmt == "json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecParseError(source, str(e)) from e

    if not doc:
        raise SpecParseError(source, "empty document")
    if not isinstance(doc, dict):
        raise SpecParseError(source, "top level is not a mapping")
    if detect_version(doc) is None:
        raise InvalidSpecError(source)

    return doc


def get_endpoints(doc: Description) -> dict[str, dict]:
    """Map every ``"METHOD /path"`` in the document to its operation.

    Keys follow document path order, then HTTP_METHODS order.
    """
    endpoints: dict[str, dict] = {}
    paths = doc.get("paths")
    if not isinstance(paths, dict):
        return endpoints

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                endpoints[f"{method.upper()} {path}"] = operation

    return endpoints


def parse_parameters(params: Any) -> list[Param]:
    """Convert a raw ``parameters`` list into Param models."""
    if not isinstance(params, list):
        return []

    result = []
    for p in params:
        if not isinstance(p, dict):
            continue
        schema = p.get("schema")
        param_type = schema.get("type") if isinstance(schema, dict) else None
        result.append(
            Param(
                name=str(p.get("name", "")),
                location=str(p.get("in", "query")),
                required=bool(p.get("required", False)),
                param_type=param_type if isinstance(param_type, str) else None,
            )
        )
    return result


def json_schema(container: Any) -> Schema | None:
    """Return the JSON media schema of a request body or response, if any."""
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    return schema if isinstance(schema, dict) else None
