"""
Blog API Documentation Server

FastAPI application serving a mock blog API together with its OpenAPI
documentation. Provides JSON/YAML spec endpoints, interactive docs, spec
statistics, in-memory article/comment/user collections, and the usual
middleware stack (CORS, compression, security headers, rate limiting).
"""

__version__ = "1.0.0"
