"""Repository layer for data access."""

from .base import BaseRepository, dialect_insert
from .post import PostRepository
from .post_tag import PostTagRepository
from .tag import TagRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "dialect_insert",
    "PostRepository",
    "PostTagRepository",
    "TagRepository",
    "UserRepository",
]
