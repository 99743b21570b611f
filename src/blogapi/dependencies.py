"""
Request Dependencies

FastAPI dependencies resolving per-application state.
"""

from __future__ import annotations

from fastapi import Request

from blogapi.services.repository import BlogRepository


def get_repository(request: Request) -> BlogRepository:
    """Repository owned by the application serving this request."""
    return request.app.state.repository
