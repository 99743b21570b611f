"""
OpenAPI Document Helpers

Build, load and summarize the OpenAPI document served by the application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from blogapi.docs.openapi_metadata import (
    OPENAPI_CONTACT,
    OPENAPI_DESCRIPTION,
    OPENAPI_LICENSE,
    OPENAPI_SECURITY_SCHEMES,
    OPENAPI_TAGS,
    servers,
)
from blogapi.services.analytics import build_tag_index

logger = structlog.get_logger()

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")

OpenAPIDocument = dict[str, Any]


class SpecLoadError(Exception):
    """Raised when an external OpenAPI file cannot be loaded."""


def load_spec_file(path: str | Path) -> OpenAPIDocument:
    """
    Load an OpenAPI document from a YAML or JSON file.

    Raises:
        SpecLoadError: If the file is missing, unparsable, or not a mapping
    """
    spec_path = Path(path)
    try:
        document = yaml.safe_load(spec_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise SpecLoadError(f"Failed to load OpenAPI specification from {spec_path}: {e}") from e

    if not isinstance(document, dict):
        raise SpecLoadError(f"OpenAPI specification {spec_path} is not a mapping")

    logger.info(
        "OpenAPI specification loaded",
        path=str(spec_path),
        title=document.get("info", {}).get("title"),
        paths=len(document.get("paths") or {}),
    )
    return document


def install_openapi(app: FastAPI, server_url: str, spec_path: str | None = None) -> None:
    """
    Replace ``app.openapi`` with a cached builder.

    With ``spec_path`` the external document is served verbatim; otherwise the
    generated schema is enriched with contact, license, servers and security
    schemes.
    """
    external = load_spec_file(spec_path) if spec_path else None

    def custom_openapi() -> OpenAPIDocument:
        if app.openapi_schema:
            return app.openapi_schema

        if external is not None:
            app.openapi_schema = external
            return app.openapi_schema

        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=OPENAPI_DESCRIPTION,
            routes=app.routes,
            tags=OPENAPI_TAGS,
            servers=servers(server_url),
            contact=OPENAPI_CONTACT,
            license_info=OPENAPI_LICENSE,
        )
        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {}).update(OPENAPI_SECURITY_SCHEMES)
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


def to_yaml(document: OpenAPIDocument) -> str:
    """Serialize the document as YAML, keeping key order."""
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


def iter_operations(document: OpenAPIDocument) -> list[tuple[str, str, dict[str, Any]]]:
    """Flatten ``paths`` into ``(path, method, operation)`` triples."""
    operations = []
    for path, item in (document.get("paths") or {}).items():
        for method, operation in item.items():
            if method in HTTP_METHODS and isinstance(operation, dict):
                operations.append((path, method, operation))
    return operations


def spec_statistics(document: OpenAPIDocument) -> dict[str, Any]:
    """Count paths, operations, tags, servers and security schemes."""
    operations = iter_operations(document)
    tags = list(build_tag_index(operations, lambda op: op[2].get("tags")))
    info = document.get("info") or {}
    return {
        "apiTitle": info.get("title"),
        "version": info.get("version"),
        "description": info.get("description"),
        "statistics": {
            "totalPaths": len(document.get("paths") or {}),
            "totalOperations": len(operations),
            "totalTags": len(tags),
            "tags": tags,
            "servers": len(document.get("servers") or []),
            "securitySchemes": len(
                (document.get("components") or {}).get("securitySchemes") or {}
            ),
        },
    }


def spec_paths(document: OpenAPIDocument) -> dict[str, Any]:
    """List every path with its methods and operation summaries."""
    paths = []
    for path, item in (document.get("paths") or {}).items():
        methods = [m for m in item if m in HTTP_METHODS]
        paths.append(
            {
                "path": path,
                "methods": methods,
                "operations": [
                    {
                        "method": method.upper(),
                        "summary": item[method].get("summary"),
                        "tags": item[method].get("tags") or [],
                    }
                    for method in methods
                ],
            }
        )
    return {"totalPaths": len(paths), "paths": paths}


def spec_tag_index(document: OpenAPIDocument) -> dict[str, Any]:
    """Group operations by tag with per-tag operation counts."""
    index = build_tag_index(iter_operations(document), lambda op: op[2].get("tags"))
    return {
        "tags": [
            {
                "name": tag,
                "operationCount": len(operations),
                "operations": [
                    {
                        "path": path,
                        "method": method.upper(),
                        "operationId": operation.get("operationId"),
                        "summary": operation.get("summary"),
                    }
                    for path, method, operation in operations
                ],
            }
            for tag, operations in index.items()
        ]
    }


def spec_version(document: OpenAPIDocument) -> dict[str, Any]:
    """Info block and servers of the document."""
    info = document.get("info") or {}
    return {
        "title": info.get("title"),
        "version": info.get("version"),
        "description": info.get("description"),
        "contact": info.get("contact"),
        "license": info.get("license"),
        "servers": document.get("servers") or [],
    }
