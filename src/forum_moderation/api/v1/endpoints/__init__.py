"""API endpoint modules for version 1."""

from .forums import router as forums_router
from .topics import router as topics_router
from .users import router as users_router

__all__ = [
    "forums_router",
    "topics_router",
    "users_router",
]
