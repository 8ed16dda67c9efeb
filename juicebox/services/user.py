"""User service with business logic."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from ..core.config import settings
from ..core.database import atomic
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..models import User
from ..repositories import UserRepository
from .post import PostService

logger = get_logger(__name__)

# Поля, которые можно менять через update_user
UPDATABLE_FIELDS = frozenset({"username", "password", "name", "location", "active"})


class UserService:
    """
    Сервис для работы с пользователями.

    TODO: хэшировать пароль перед сохранением (сейчас хранится как есть).
    """

    def __init__(self, db: AsyncSession, post_service: PostService | None = None):
        """Инициализация сервиса."""
        self.db = db
        self.user_repo = UserRepository(db)
        self.post_service = post_service or PostService(db)

    async def create_user(
        self, username: str, password: str, name: str, location: str
    ) -> User | None:
        """
        Создать пользователя.

        Returns:
            Созданный пользователь или None, если username уже занят

        Конфликт username - это не ошибка: вызывающий код должен
        проверить результат на None.
        """
        async with atomic(self.db, settings.ATOMIC_MUTATIONS):
            user = await self.user_repo.create_if_absent(
                username=username, password=password, name=name, location=location
            )

        if user is None:
            logger.info("Username already taken", extra={"username": username})
        else:
            logger.info("User created", extra={"user_id": user.id, "username": username})
        return user

    async def update_user(self, user_id: int, **fields: Any) -> User | None:
        """
        Обновить поля пользователя.

        Args:
            user_id: ID пользователя
            **fields: username, password, name, location, active

        Returns:
            Обновлённый пользователь или None, если полей нет (no-op)

        Raises:
            NotFoundError: Если пользователя нет
            ValueError: Если передано неизвестное поле
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        if not fields:
            return None

        user = await self.user_repo.update(user_id, **fields)
        if not user:
            raise NotFoundError("User", user_id)

        logger.info("User updated", extra={"user_id": user_id, "fields": sorted(fields)})
        return user

    async def list_users(self) -> list[User]:
        """Получить всех пользователей."""
        return await self.user_repo.get_all()

    async def get_user(self, user_id: int) -> User:
        """
        Получить пользователя вместе с его постами.

        Посты собираются через PostService.list_posts_by_author,
        то есть каждый пост полный (автор + теги).

        Raises:
            NotFoundError: Если пользователя нет
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        posts = await self.post_service.list_posts_by_author(user_id)
        # Кладём посты в relationship без отметки об изменении
        set_committed_value(user, "posts", posts)
        return user
