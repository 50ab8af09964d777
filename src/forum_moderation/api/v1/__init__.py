"""Version 1 API endpoints."""

from .endpoints import forums_router, topics_router, users_router

__all__ = [
    "forums_router",
    "topics_router",
    "users_router",
]
