"""
Documentation Endpoints

Serve the OpenAPI document as JSON/YAML and expose spec analytics.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from blogapi.config import settings
from blogapi.docs.spec import spec_paths, spec_statistics, spec_tag_index, spec_version, to_yaml

router = APIRouter()


def _document(request: Request) -> dict[str, Any]:
    return request.app.openapi()


def _endpoint_map() -> dict[str, Any]:
    return {
        "docs": settings.DOCS_URL,
        "jsonSpec": settings.SPEC_JSON_PATH,
        "yamlSpec": settings.SPEC_YAML_PATH,
        "health": "/health",
        "stats": "/api/stats",
        "paths": "/api/paths",
        # /api/tags is the article tag index; operations by tag live under /api/spec/tags
        "specTags": "/api/spec/tags",
        "articleTags": "/api/tags",
        "version": "/api/version",
    }


async def spec_json(request: Request) -> JSONResponse:
    """OpenAPI document as JSON."""
    return JSONResponse(content=_document(request))


async def spec_yaml(request: Request) -> Response:
    """OpenAPI document as YAML."""
    return Response(content=to_yaml(_document(request)), media_type="application/yaml")


router.add_api_route(
    settings.SPEC_JSON_PATH,
    spec_json,
    methods=["GET"],
    summary="OpenAPI document (JSON)",
)
router.add_api_route(
    settings.SPEC_YAML_PATH,
    spec_yaml,
    methods=["GET"],
    summary="OpenAPI document (YAML)",
    responses={200: {"content": {"application/yaml": {}}}},
)


@router.get("/api/stats", summary="API statistics")
async def api_stats(request: Request) -> dict[str, Any]:
    """Path, operation, tag, server and security scheme counts."""
    return {**spec_statistics(_document(request)), "endpoints": _endpoint_map()}


@router.get("/api/paths", summary="API paths")
async def api_paths(request: Request) -> dict[str, Any]:
    """Every documented path with its operations."""
    return spec_paths(_document(request))


@router.get("/api/spec/tags", summary="Operations by tag")
async def api_spec_tags(request: Request) -> dict[str, Any]:
    """Documented operations grouped by tag."""
    return spec_tag_index(_document(request))


@router.get("/api/version", summary="API version")
async def api_version(request: Request) -> dict[str, Any]:
    """Info block and servers of the served document."""
    return {
        **spec_version(_document(request)),
        "lastUpdated": datetime.now(UTC).isoformat(),
    }


@router.get("/api/info", summary="API information")
async def api_info(request: Request) -> dict[str, Any]:
    """Service information, endpoint map and live collection counts."""
    info = _document(request).get("info") or {}
    return {
        "name": info.get("title"),
        "version": info.get("version"),
        "description": info.get("description"),
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "articles": "/api/articles",
            "users": "/api/users",
            "analytics": "/api/analytics",
            "search": "/api/search",
            "docs": settings.DOCS_URL,
            "spec": {"json": settings.SPEC_JSON_PATH, "yaml": settings.SPEC_YAML_PATH},
            "health": "/health",
        },
        "stats": request.app.state.repository.counts(),
    }


@router.get("/", summary="Root")
async def root(request: Request) -> dict[str, Any]:
    """Entry point linking to the documentation."""
    return {
        "message": f"{settings.API_TITLE} Server",
        "version": (_document(request).get("info") or {}).get("version"),
        "documentation": settings.DOCS_URL,
        "api": {
            "info": "/api/info",
            "spec": {"json": settings.SPEC_JSON_PATH, "yaml": settings.SPEC_YAML_PATH},
            "health": "/health",
        },
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(UTC).isoformat(),
    }
