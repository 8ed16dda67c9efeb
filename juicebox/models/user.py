"""User model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class User(Base):
    """
    Автор постов.

    Пароль хранится как есть (без хэширования) и никогда не попадает
    в публичные ответы API.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="author", order_by="Post.id"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
