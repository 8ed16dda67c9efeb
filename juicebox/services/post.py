"""Post service: aggregate reads and tag-synchronizing writes."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import atomic
from ..core.exceptions import DataIntegrityError, NotFoundError
from ..core.logging import get_logger
from ..models import Post
from ..repositories import PostRepository, PostTagRepository, TagRepository

logger = get_logger(__name__)


class PostService:
    """
    Сервис для работы с постами.

    Любая мутация заканчивается чтением полного агрегата
    (пост + автор + теги), поэтому вызывающий код всегда видит пост
    в собранном виде.

    Цепочка при создании/обновлении:
        TagRepository.register -> PostTagRepository.link/reconcile -> get_post
    """

    def __init__(
        self,
        db: AsyncSession,
        atomic_mutations: bool | None = None,
        list_strategy: str | None = None,
    ):
        """
        Инициализация сервиса.

        Args:
            db: Асинхронная сессия
            atomic_mutations: Оборачивать мутации в транзакцию
                (по умолчанию settings.ATOMIC_MUTATIONS)
            list_strategy: "batched" или "per_post"
                (по умолчанию settings.POST_LIST_STRATEGY)
        """
        self.db = db
        self.post_repo = PostRepository(db)
        self.tag_repo = TagRepository(db)
        self.post_tag_repo = PostTagRepository(db)
        self.atomic_mutations = (
            settings.ATOMIC_MUTATIONS if atomic_mutations is None else atomic_mutations
        )
        self.list_strategy = list_strategy or settings.POST_LIST_STRATEGY
        if self.list_strategy not in ("batched", "per_post"):
            raise ValueError(f"Unknown post list strategy: {self.list_strategy}")

    # =========================================================================
    # READ
    # =========================================================================

    async def get_post(self, post_id: int) -> Post:
        """
        Получить полный пост по ID.

        Raises:
            NotFoundError: Если поста нет
            DataIntegrityError: Если автор поста не найден
        """
        post = await self.post_repo.get_by_id_full(post_id)
        if not post:
            raise NotFoundError("Post", post_id)
        return self._check_author(post)

    async def list_posts(self) -> list[Post]:
        """Получить все посты (полные)."""
        return await self._assemble(await self.post_repo.get_ids())

    async def list_posts_by_author(self, user_id: int) -> list[Post]:
        """Получить все посты автора (полные). Пустой список, если постов нет."""
        return await self._assemble(await self.post_repo.get_ids_by_author(user_id))

    async def list_posts_by_tag(self, tag_name: str, active_only: bool = False) -> list[Post]:
        """Получить все посты с тегом tag_name (полные). active_only - без скрытых постов."""
        post_ids = await self.post_repo.get_ids_by_tag_name(tag_name, active_only=active_only)
        return await self._assemble(post_ids)

    async def _assemble(self, post_ids: list[int]) -> list[Post]:
        """
        Собрать агрегаты для списка ID.

        batched - один запрос на все посты (+ SELECT IN для авторов и тегов)
        per_post - отдельная сборка каждого поста через get_post()

        Ошибка при сборке любого поста - ошибка всего списка.
        """
        if self.list_strategy == "per_post":
            return [await self.get_post(post_id) for post_id in post_ids]

        posts = await self.post_repo.get_by_ids_full(post_ids)
        return [self._check_author(post) for post in posts]

    @staticmethod
    def _check_author(post: Post) -> Post:
        # Пост без автора - это нарушение целостности, а не частичный результат
        if post.author is None:
            raise DataIntegrityError(
                f"Author {post.author_id} of post {post.id} cannot be resolved"
            )
        return post

    # =========================================================================
    # WRITE
    # =========================================================================

    async def create_post(
        self,
        author_id: int,
        title: str,
        content: str,
        tags: list[str] | None = None,
    ) -> Post:
        """
        Создать пост и привязать к нему теги.

        Args:
            author_id: ID автора
            title: Заголовок
            content: Текст поста
            tags: Названия тегов (несуществующие будут созданы)

        Returns:
            Полный пост (автор + теги)

        Все шаги выполняются в одной транзакции (если включено
        ATOMIC_MUTATIONS): при ошибке привязки тегов пост не останется
        в БД без тегов, а пост с несуществующим автором не останется вовсе.

        Raises:
            DataIntegrityError: Если автор поста не найден
            sqlalchemy.exc.SQLAlchemyError: Ошибка хранилища на любом шаге
        """
        async with atomic(self.db, self.atomic_mutations):
            post = await self.post_repo.create(
                Post(author_id=author_id, title=title, content=content)
            )

            if tags:
                tag_list = await self.tag_repo.register(tags)
                await self.post_tag_repo.link(post.id, tag_list)

            # Сборка агрегата - последний шаг мутации: автор не найден -> откат поста
            full_post = await self.get_post(post.id)

        logger.info(
            "Post created",
            extra={"post_id": post.id, "author_id": author_id, "tag_count": len(tags or [])},
        )
        return full_post

    async def update_post(
        self,
        post_id: int,
        title: str | None = None,
        content: str | None = None,
        active: bool | None = None,
        tags: list[str] | None = None,
    ) -> Post:
        """
        Обновить пост.

        Args:
            post_id: ID поста
            title: Новый заголовок
            content: Новый текст
            active: Активен ли пост
            tags: Новый набор тегов.
                None - теги не трогаем,
                [] - снять все теги,
                ["#a", "#b"] - теги станут ровно такими

        Returns:
            Полный пост после всех изменений

        Raises:
            NotFoundError: Если поста нет

        Если ничего не передано - возвращает текущий пост без изменений.
        """
        updates: dict[str, Any] = {}
        if title is not None:
            updates["title"] = title
        if content is not None:
            updates["content"] = content
        if active is not None:
            updates["active"] = active

        if not updates and tags is None:
            return await self.get_post(post_id)

        async with atomic(self.db, self.atomic_mutations):
            if updates:
                post = await self.post_repo.update(post_id, **updates)
            else:
                post = await self.post_repo.get_by_id(post_id)
            if not post:
                raise NotFoundError("Post", post_id)

            if tags is not None:
                tag_list = await self.tag_repo.register(tags)
                await self.post_tag_repo.reconcile(post_id, tag_list)

            full_post = await self.get_post(post_id)

        logger.info(
            "Post updated",
            extra={
                "post_id": post_id,
                "fields": sorted(updates),
                "tags": None if tags is None else len(tags),
            },
        )
        return full_post
