"""SQLAlchemy models for Juicebox."""

from .base import Base
from .post import Post
from .post_tag import post_tags
from .tag import Tag
from .user import User

__all__ = [
    "Base",
    "User",
    "Post",
    "Tag",
    "post_tags",
]
