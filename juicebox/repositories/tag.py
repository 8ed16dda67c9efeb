"""Tag repository: the registry of canonical tag records."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Tag
from .base import BaseRepository

logger = get_logger(__name__)


class TagRepository(BaseRepository[Tag]):
    """
    Репозиторий для работы с тегами.

    Теги создаются лениво при первом упоминании и никогда не удаляются.
    Имя тега уникально - для каждого имени есть ровно одна каноническая запись.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Tag, db)

    async def get_all(self) -> list[Tag]:
        """
        Получить все теги, отсортированные по имени.

        SQL эквивалент:
            SELECT * FROM tags ORDER BY name;
        """
        result = await self.db.execute(select(Tag).order_by(Tag.name))
        return list(result.scalars().all())

    async def register(self, names: list[str]) -> list[Tag]:
        """
        Гарантировать, что все теги существуют, и вернуть их канонические записи.

        Args:
            names: Список имён тегов (может содержать дубликаты)

        Returns:
            По одной записи Tag на каждое уникальное имя
            (и уже существовавшие, и только что созданные)

        Конфликт по уникальному имени (тег уже есть или его только что
        создал параллельный запрос) - это не ошибка, а "уже существует".

        SQL эквивалент:
            INSERT INTO tags (name) VALUES (...), (...)
            ON CONFLICT (name) DO NOTHING;

            SELECT * FROM tags WHERE name IN (...);

        Пример:
            tags = await repo.register(["#happy", "#happy", "#youcandoanything"])
            # -> [Tag(name='#happy'), Tag(name='#youcandoanything')]
        """
        if not names:
            return []

        # Убираем дубликаты, сохраняя порядок первого появления
        unique_names = list(dict.fromkeys(names))

        stmt = (
            self.upsert(Tag)
            .values([{"name": name} for name in unique_names])
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await self.db.execute(stmt)

        result = await self.db.execute(select(Tag).where(Tag.name.in_(unique_names)))
        tags = list(result.scalars().all())

        logger.debug(
            "Tags registered",
            extra={"requested": len(unique_names), "resolved": len(tags)},
        )
        return tags
