"""Post repository with aggregate queries."""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Post, Tag, post_tags
from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """
    Репозиторий для работы с постами.

    "Полный" пост (агрегат) = строка поста + автор + теги.
    Сборка агрегата - это три запроса:
    - SELECT поста
    - SELECT IN для автора
    - SELECT IN для тегов через post_tags
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Post, db)

    def _full_query(self) -> Select:
        # populate_existing: связи в post_tags меняются напрямую (Core),
        # поэтому уже загруженные в сессию коллекции нужно перечитать
        return (
            select(Post)
            .options(selectinload(Post.author), selectinload(Post.tags))
            .execution_options(populate_existing=True)
        )

    async def get_by_id_full(self, id: int) -> Post | None:
        """
        Получить пост вместе с автором и тегами.

        Args:
            id: ID поста

        Returns:
            Пост со связями или None

        Использование:
            post = await repo.get_by_id_full(1)
            print(post.author.username)  # без дополнительного запроса
            print([t.name for t in post.tags])
        """
        result = await self.db.execute(self._full_query().where(Post.id == id))
        return result.scalar_one_or_none()

    async def get_by_ids_full(self, ids: list[int]) -> list[Post]:
        """
        Получить несколько полных постов за один проход (batched).

        SQL эквивалент:
            SELECT * FROM posts WHERE id IN ({ids}) ORDER BY id;
            + SELECT IN для авторов и тегов всех постов сразу
        """
        if not ids:
            return []

        result = await self.db.execute(
            self._full_query().where(Post.id.in_(ids)).order_by(Post.id)
        )
        return list(result.scalars().all())

    async def get_ids(self) -> list[int]:
        """
        Получить ID всех постов.

        SQL эквивалент:
            SELECT id FROM posts ORDER BY id;
        """
        result = await self.db.execute(select(Post.id).order_by(Post.id))
        return list(result.scalars().all())

    async def get_ids_by_author(self, author_id: int) -> list[int]:
        """
        Получить ID постов автора.

        SQL эквивалент:
            SELECT id FROM posts WHERE author_id = {author_id} ORDER BY id;
        """
        result = await self.db.execute(
            select(Post.id).where(Post.author_id == author_id).order_by(Post.id)
        )
        return list(result.scalars().all())

    async def get_ids_by_tag_name(self, tag_name: str, active_only: bool = False) -> list[int]:
        """
        Получить ID постов с определённым тегом.

        Args:
            tag_name: Название тега
            active_only: Только активные посты

        SQL эквивалент:
            SELECT posts.id
            FROM posts
            JOIN post_tags ON posts.id = post_tags.post_id
            JOIN tags ON tags.id = post_tags.tag_id
            WHERE tags.name = {tag_name} [AND posts.active];
        """
        query = (
            select(Post.id)
            .join(post_tags, Post.id == post_tags.c.post_id)
            .join(Tag, Tag.id == post_tags.c.tag_id)
            .where(Tag.name == tag_name)
            .order_by(Post.id)
        )
        if active_only:
            query = query.where(Post.active.is_(True))

        result = await self.db.execute(query)
        return list(result.scalars().all())
