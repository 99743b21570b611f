"""
Blog API Configuration

Environment-based configuration management for the blog API server.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class BlogAPISettings(BaseSettings):
    """Blog API configuration loaded from environment variables."""

    # Application
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=3003, description="Server port")
    ENVIRONMENT: str = Field(default="development", description="Deployment environment name")

    # Service identity
    SERVICE_NAME: str = Field(default="custom-blog-api", description="Service identifier reported by health checks")
    API_TITLE: str = Field(default="Blog API", description="OpenAPI document title")
    API_VERSION: str = Field(default="1.0.0", description="API version")
    SERVER_URL: str = Field(default="http://localhost:3003", description="Public server URL advertised in the OpenAPI document")

    # Documentation
    DOCS_URL: str | None = Field(default="/docs", description="Swagger UI path (None disables it)")
    REDOC_URL: str | None = Field(default="/redoc", description="ReDoc path (None disables it)")
    SPEC_JSON_PATH: str = Field(default="/spec.json", description="OpenAPI JSON endpoint")
    SPEC_YAML_PATH: str = Field(default="/spec.yaml", description="OpenAPI YAML endpoint")
    SPEC_PATH: str | None = Field(
        default=None,
        description="Optional OpenAPI YAML/JSON file served instead of the generated schema",
    )

    # CORS Configuration
    ALLOWED_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3003"],
        description="Allowed CORS origins"
    )

    # Compression
    COMPRESSION_ENABLED: bool = Field(default=True, description="Enable gzip response compression")
    COMPRESSION_MIN_SIZE: int = Field(default=1024, description="Minimum body size in bytes to compress")
    COMPRESSION_LEVEL: int = Field(default=6, description="gzip compression level 1-9")

    # Security Headers
    SECURITY_HEADERS_ENABLED: bool = Field(default=True, description="Enable security headers")
    SECURITY_HSTS_ENABLED: bool = Field(default=True, description="Send Strict-Transport-Security")
    SECURITY_HSTS_MAX_AGE: int = Field(default=15552000, description="HSTS max-age in seconds (180 days)")
    SECURITY_X_FRAME_OPTIONS: str = Field(default="SAMEORIGIN", description="X-Frame-Options value")
    SECURITY_CSP_ENABLED: bool = Field(default=True, description="Send Content-Security-Policy")
    SECURITY_CSP_POLICY: str = Field(
        default=(
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com https://cdn.jsdelivr.net; "
            "font-src 'self' https://fonts.gstatic.com; "
            "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "img-src 'self' data: https:"
        ),
        description="Content-Security-Policy value"
    )
    SECURITY_REFERRER_POLICY: str = Field(default="no-referrer", description="Referrer-Policy value")
    SECURITY_PERMISSIONS_POLICY: str | None = Field(
        default="geolocation=(), microphone=(), camera=()",
        description="Permissions-Policy value"
    )
    SECURITY_CUSTOM_HEADERS: dict[str, str] = Field(default={}, description="Extra response headers")

    # Monitoring
    ENABLE_METRICS: bool = Field(default=True, description="Enable Prometheus metrics")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable rate limiting")
    RATE_LIMIT_PATH_PREFIX: str = Field(default="/api", description="Path prefix subject to rate limiting")
    RATE_LIMIT_MAX_REQUESTS: int = Field(default=100, description="Requests allowed per window per client")
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=900, description="Rate limit window in seconds (15 minutes)")
    RATE_LIMIT_CLEANUP_INTERVAL: int = Field(
        default=100,
        description="Sweep expired client histories every N admission checks"
    )
    RATE_LIMIT_TRUST_PROXY_HEADERS: bool = Field(
        default=False,
        description="Use X-Forwarded-For / X-Real-IP as the client key"
    )

    # Pagination defaults
    ARTICLES_PAGE_SIZE: int = Field(default=10, description="Default page size for article listings")
    COMMENTS_PAGE_SIZE: int = Field(default=20, description="Default page size for comment listings")
    SEARCH_RESULT_LIMIT: int = Field(default=20, description="Default per-type search result limit")

    # Demo data
    SEED_DEMO_DATA: bool = Field(default=True, description="Populate collections with demo records")

    model_config = {
        "env_file": ".env",
        "env_prefix": "BLOG_API_",
        "case_sensitive": True,
        "extra": "ignore",
    }


# Global settings instance
settings = BlogAPISettings()
