"""
Tests for OpenAPI documentation and spec endpoints.

Validates the generated schema, the JSON/YAML spec endpoints and the spec
analytics endpoints.
"""

from __future__ import annotations

import json

import pytest
import yaml
from fastapi import FastAPI

from blogapi.docs.spec import (
    SpecLoadError,
    install_openapi,
    iter_operations,
    load_spec_file,
    spec_paths,
    spec_statistics,
    spec_tag_index,
)

SAMPLE_DOCUMENT = {
    "openapi": "3.0.3",
    "info": {"title": "Sample", "version": "2.0.0", "description": "Sample API"},
    "servers": [{"url": "http://localhost:3003"}],
    "paths": {
        "/items": {
            "get": {"operationId": "listItems", "summary": "List", "tags": ["items"]},
            "post": {"operationId": "createItem", "summary": "Create", "tags": ["items", "write"]},
            "parameters": [],
        },
        "/health": {"get": {"summary": "Health"}},
    },
    "components": {"securitySchemes": {"BearerAuth": {"type": "http", "scheme": "bearer"}}},
}


@pytest.fixture
def schema(client):
    """Served OpenAPI document."""
    return client.get("/spec.json").json()


class TestOpenAPISchema:
    """Tests for the generated OpenAPI document."""

    def test_info(self, schema):
        """Test title, version, contact and license."""
        assert schema["openapi"].startswith("3.")
        assert schema["info"]["title"] == "Blog API"
        assert schema["info"]["version"] == "1.0.0"
        assert schema["info"]["license"]["name"] == "MIT"
        assert "Rate Limiting" in schema["info"]["description"]

    def test_servers(self, schema):
        """Test the advertised server."""
        assert schema["servers"][0]["url"] == "http://localhost:3003"

    def test_bearer_security_scheme(self, schema):
        """Test the bearer security scheme."""
        bearer = schema["components"]["securitySchemes"]["BearerAuth"]
        assert bearer["type"] == "http"
        assert bearer["scheme"] == "bearer"
        assert bearer["bearerFormat"] == "JWT"

    def test_paths(self, schema):
        """Test that blog and documentation paths are documented."""
        for path in (
            "/api/articles",
            "/api/articles/{article_id}",
            "/api/articles/{article_id}/comments",
            "/api/users/profile",
            "/api/analytics",
            "/api/search",
            "/api/tags",
            "/spec.json",
            "/spec.yaml",
            "/health",
        ):
            assert path in schema["paths"], path
        assert "/metrics" not in schema["paths"]

    def test_tags(self, schema):
        """Test tag metadata and operation tagging."""
        names = [tag["name"] for tag in schema["tags"]]
        assert names == [
            "articles",
            "comments",
            "users",
            "analytics",
            "search",
            "documentation",
            "health",
        ]
        assert schema["paths"]["/api/search"]["get"]["tags"] == ["search"]
        assert schema["paths"]["/api/articles"]["post"]["tags"] == ["articles"]

    def test_protected_operations_declare_security(self, schema):
        """Test that authenticated operations reference the bearer scheme."""
        post = schema["paths"]["/api/articles"]["post"]
        assert {"BearerAuth": []} in post["security"]
        assert "security" not in schema["paths"]["/api/articles"]["get"]

    def test_error_responses_documented(self, schema):
        """Test that error codes and examples are documented."""
        responses = schema["paths"]["/api/articles"]["post"]["responses"]
        assert {"201", "400", "401", "429"} <= set(responses)
        example = responses["429"]["content"]["application/json"]["example"]
        assert example["error"] == "Too Many Requests"

    def test_request_examples(self, schema):
        """Test that the article body carries named examples."""
        body = schema["paths"]["/api/articles"]["post"]["requestBody"]
        examples = body["content"]["application/json"]["examples"]
        assert set(examples) == {"draft", "published"}


class TestSpecEndpoints:
    """Tests for the JSON and YAML document endpoints."""

    def test_yaml_matches_json(self, client, schema):
        """Test that both serializations carry the same document."""
        response = client.get("/spec.yaml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/yaml")
        assert yaml.safe_load(response.text) == schema

    def test_openapi_json_alias(self, client, schema):
        """Test that the framework schema URL serves the same document."""
        assert client.get("/openapi.json").json() == schema

    def test_swagger_ui(self, client):
        """Test the interactive documentation pages."""
        docs = client.get("/docs")
        redoc = client.get("/redoc")

        assert docs.status_code == 200
        assert "swagger-ui" in docs.text.lower()
        assert redoc.status_code == 200


class TestSpecAnalyticsEndpoints:
    """Tests for /api/stats, /api/paths, /api/spec/tags and /api/version."""

    def test_stats(self, client, schema):
        """Test document statistics."""
        data = client.get("/api/stats").json()

        assert data["apiTitle"] == "Blog API"
        assert data["version"] == "1.0.0"
        stats = data["statistics"]
        assert stats["totalPaths"] == len(schema["paths"])
        assert stats["totalOperations"] == len(iter_operations(schema))
        assert "articles" in stats["tags"]
        assert stats["servers"] == 1
        assert stats["securitySchemes"] == 1
        assert data["endpoints"]["jsonSpec"] == "/spec.json"
        assert data["endpoints"]["specTags"] == "/api/spec/tags"
        assert data["endpoints"]["articleTags"] == "/api/tags"
        assert "tags" not in data["endpoints"]

    def test_paths(self, client, schema):
        """Test the path listing."""
        data = client.get("/api/paths").json()

        assert data["totalPaths"] == len(schema["paths"])
        articles = next(p for p in data["paths"] if p["path"] == "/api/articles")
        assert articles["methods"] == ["get", "post"]
        assert [op["method"] for op in articles["operations"]] == ["GET", "POST"]
        assert articles["operations"][0]["summary"] == "List articles"

    def test_spec_tags(self, client):
        """Test operations grouped by tag."""
        tags = {t["name"]: t for t in client.get("/api/spec/tags").json()["tags"]}

        articles = tags["articles"]
        assert articles["operationCount"] == 4
        assert {"path": "/api/articles", "method": "POST"}.items() <= articles["operations"][1].items()
        assert tags["search"]["operationCount"] == 1

    def test_version(self, client):
        """Test version information."""
        data = client.get("/api/version").json()

        assert data["title"] == "Blog API"
        assert data["version"] == "1.0.0"
        assert data["license"]["name"] == "MIT"
        assert data["servers"][0]["url"] == "http://localhost:3003"
        assert "lastUpdated" in data

    def test_info(self, client, auth_headers):
        """Test API information with live counts."""
        client.post(
            "/api/articles", json={"title": "New", "content": "Body"}, headers=auth_headers
        )

        data = client.get("/api/info").json()

        assert data["name"] == "Blog API"
        assert data["endpoints"]["articles"] == "/api/articles"
        assert data["stats"] == {"totalArticles": 2, "totalUsers": 1, "totalComments": 1}

    def test_root(self, client):
        """Test the root entry point."""
        data = client.get("/").json()

        assert data["message"] == "Blog API Server"
        assert data["documentation"] == "/docs"
        assert data["api"]["spec"] == {"json": "/spec.json", "yaml": "/spec.yaml"}


class TestSpecHelpers:
    """Tests for document loading and summarizing."""

    def test_statistics(self):
        """Test counting over a hand-written document."""
        stats = spec_statistics(SAMPLE_DOCUMENT)["statistics"]

        assert stats == {
            "totalPaths": 2,
            "totalOperations": 3,
            "totalTags": 2,
            "tags": ["items", "write"],
            "servers": 1,
            "securitySchemes": 1,
        }

    def test_paths_skip_non_operation_keys(self):
        """Test that path-level keys such as parameters are not methods."""
        paths = spec_paths(SAMPLE_DOCUMENT)["paths"]

        assert paths[0]["methods"] == ["get", "post"]
        assert paths[1]["operations"][0]["tags"] == []

    def test_tag_index(self):
        """Test grouping operations by tag."""
        tags = spec_tag_index(SAMPLE_DOCUMENT)["tags"]

        assert [(t["name"], t["operationCount"]) for t in tags] == [("items", 2), ("write", 1)]
        assert tags[1]["operations"] == [
            {"path": "/items", "method": "POST", "operationId": "createItem", "summary": "Create"}
        ]

    def test_load_yaml_file(self, tmp_path):
        """Test loading a YAML document."""
        path = tmp_path / "openapi.yaml"
        path.write_text(yaml.safe_dump(SAMPLE_DOCUMENT))

        assert load_spec_file(path) == SAMPLE_DOCUMENT

    def test_load_json_file(self, tmp_path):
        """Test that JSON documents load through the YAML parser."""
        path = tmp_path / "openapi.json"
        path.write_text(json.dumps(SAMPLE_DOCUMENT))

        assert load_spec_file(path) == SAMPLE_DOCUMENT

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises SpecLoadError."""
        with pytest.raises(SpecLoadError):
            load_spec_file(tmp_path / "missing.yaml")

    def test_load_non_mapping(self, tmp_path):
        """Test that a non-mapping document is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(SpecLoadError, match="not a mapping"):
            load_spec_file(path)

    def test_external_document_served_verbatim(self, tmp_path):
        """Test that an external spec file replaces the generated schema."""
        path = tmp_path / "openapi.yaml"
        path.write_text(yaml.safe_dump(SAMPLE_DOCUMENT))
        app = FastAPI()

        install_openapi(app, server_url="http://example.test", spec_path=str(path))

        assert app.openapi() == SAMPLE_DOCUMENT
