"""Service layer with business logic."""

from .post import PostService
from .tag import TagService
from .user import UserService

__all__ = [
    "PostService",
    "TagService",
    "UserService",
]
