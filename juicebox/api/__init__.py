"""API layer - FastAPI endpoints."""

from .posts import router as posts_router
from .tags import router as tags_router
from .users import router as users_router

__all__ = [
    "posts_router",
    "tags_router",
    "users_router",
]
