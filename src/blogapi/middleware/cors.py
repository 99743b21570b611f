"""
CORS Middleware

Cross-Origin Resource Sharing configuration for browser clients of the API.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogapi.config import settings


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the blog API.

    Allows credentialed cross-origin requests from the configured origins.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        expose_headers=["X-Trace-ID", "X-Request-ID", "X-Response-Time", "Retry-After"],
    )
