"""
Authentication for the blog API.

Demo bearer-token dependencies. Tokens are not verified: any bearer token of
sufficient length maps to the demo writer account.
"""

from blogapi.auth.dependencies import get_optional_user, require_auth

__all__ = ["get_optional_user", "require_auth"]
