"""
Documentation utilities for the blog API.

Provides OpenAPI metadata, request examples, spec loading and spec analytics.
"""

from __future__ import annotations

__all__ = ["openapi_examples", "openapi_metadata", "spec"]
