"""Tag service with business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Post, Tag
from ..repositories import TagRepository
from .post import PostService


class TagService:
    """
    Сервис для работы с тегами.

    Теги создаются лениво (при создании/обновлении поста),
    здесь - чтение и выборка постов по тегу.
    """

    def __init__(self, db: AsyncSession, post_service: PostService | None = None):
        """Инициализация сервиса."""
        self.db = db
        self.tag_repo = TagRepository(db)
        self.post_service = post_service or PostService(db)

    async def register_tags(self, names: list[str]) -> list[Tag]:
        """
        Получить канонические записи тегов, создав недостающие.

        Повторный вызов с теми же именами возвращает те же ID.
        """
        return await self.tag_repo.register(names)

    async def list_tags(self) -> list[Tag]:
        """Получить все теги (по имени)."""
        return await self.tag_repo.get_all()

    async def list_posts_by_tag(self, tag_name: str, active_only: bool = False) -> list[Post]:
        """
        Получить все посты с тегом.

        Неизвестный тег - это пустой список, а не ошибка.
        Неактивные посты отсекаются ещё в запросе ID (active_only=True),
        до сборки агрегатов.
        """
        return await self.post_service.list_posts_by_tag(tag_name, active_only=active_only)
