# src/subsocial_reader/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import posts_router, profiles_router, spaces_router

__all__ = [
    "posts_router",
    "profiles_router",
    "spaces_router",
]
