"""Post-Tag repository: links between posts and tags."""

from collections.abc import Iterable

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Tag, post_tags
from .base import dialect_insert

logger = get_logger(__name__)


class PostTagRepository:
    """
    Репозиторий для таблицы связей post_tags.

    Связи не имеют собственной сущности и меняются только
    при создании/обновлении поста.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def link(self, post_id: int, tags: Iterable[Tag]) -> None:
        """
        Привязать теги к посту.

        Уже существующие связи не трогаются (ON CONFLICT DO NOTHING).
        Все связи вставляются одним запросом: вызов завершается,
        только когда обработана каждая пара.

        SQL эквивалент:
            INSERT INTO post_tags (post_id, tag_id) VALUES ({post_id}, 1), ({post_id}, 2)
            ON CONFLICT (post_id, tag_id) DO NOTHING;
        """
        tag_ids = list(dict.fromkeys(tag.id for tag in tags))
        if not tag_ids:
            return

        stmt = (
            dialect_insert(self.db, post_tags)
            .values([{"post_id": post_id, "tag_id": tag_id} for tag_id in tag_ids])
            .on_conflict_do_nothing(index_elements=["post_id", "tag_id"])
        )
        await self.db.execute(stmt)

    async def reconcile(self, post_id: int, desired_tags: Iterable[Tag]) -> None:
        """
        Привести набор тегов поста ровно к desired_tags.

        1. Удаляем связи с тегами, которых нет в новом наборе
        2. Добавляем недостающие связи через link()

        Пустой desired_tags снимает с поста все теги.

        SQL эквивалент:
            DELETE FROM post_tags
            WHERE post_id = {post_id} AND tag_id NOT IN ({desired_ids});
        """
        desired_tags = list(desired_tags)
        desired_ids = {tag.id for tag in desired_tags}

        stmt = delete(post_tags).where(post_tags.c.post_id == post_id)
        if desired_ids:
            stmt = stmt.where(post_tags.c.tag_id.notin_(desired_ids))
        result = await self.db.execute(stmt)

        await self.link(post_id, desired_tags)

        logger.debug(
            "Post tags reconciled",
            extra={"post_id": post_id, "removed": result.rowcount, "desired": len(desired_ids)},
        )
