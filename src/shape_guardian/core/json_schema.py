"""JSON Schema and OpenAPI projection of schemas."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from .schema import OPAQUE_JSON_SCHEMA, Schema

OPENAPI_VERSION = "3.1.0"


def to_json_schema(schema: Schema[Any]) -> Dict[str, Any]:
    """Project a schema onto a JSON Schema dictionary."""
    return schema.json_schema()


def is_opaque(projection: Dict[str, Any]) -> bool:
    """True for the marker emitted by schemas that cannot be described."""
    return projection == OPAQUE_JSON_SCHEMA


def _document(schemas: Dict[str, Any], title: str, version: str) -> Dict[str, Any]:
    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version},
        "paths": {},
        "components": {"schemas": schemas},
    }


def to_openapi_document(
    name: str,
    schema: Schema[Any] | Dict[str, Any],
    *,
    title: str = "API",
    version: str = "1.0.0",
) -> Dict[str, Any]:
    """Wrap one schema in an OpenAPI 3.1 document under ``#/components/schemas/{name}``."""
    return to_openapi_document_multi([(name, schema)], title=title, version=version)


def to_openapi_document_multi(
    schemas: Iterable[Tuple[str, Schema[Any] | Dict[str, Any]]],
    *,
    title: str = "API",
    version: str = "1.0.0",
) -> Dict[str, Any]:
    components: Dict[str, Any] = {}
    for name, schema in schemas:
        components[name] = schema.json_schema() if isinstance(schema, Schema) else schema
    return _document(components, title, version)
