"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base

# TypeVar для Generic класса - позволяет работать с любой моделью
ModelType = TypeVar("ModelType", bound=Base)


def dialect_insert(db: AsyncSession, target: Any):
    """
    Dialect-specific INSERT, поддерживающий ON CONFLICT.

    Args:
        db: Асинхронная сессия (по ней определяем диалект)
        target: Модель или таблица

    Returns:
        Insert конструкция PostgreSQL или SQLite

    Пример:
        stmt = dialect_insert(db, Tag).values(name="#happy").on_conflict_do_nothing(
            index_elements=["name"]
        )
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(target)
    if dialect == "sqlite":
        return sqlite.insert(target)
    raise NotImplementedError(f"ON CONFLICT is not supported for dialect '{dialect}'")


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий с CRUD операциями.

    Сессия передаётся снаружи (из get_db или теста), репозиторий
    никогда не создаёт подключение сам.

    Пример использования:
        user_repo = BaseRepository[User](User, db_session)
        user = await user_repo.get_by_id(1)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """
        Инициализация репозитория.

        Args:
            model: Класс модели SQLAlchemy (например, User, Post)
            db: Асинхронная сессия базы данных
        """
        self.model = model
        self.db = db

    def upsert(self, target: Any):
        """Dialect-specific INSERT bound to this repository's session."""
        return dialect_insert(self.db, target)

    async def create(self, obj: ModelType) -> ModelType:
        """
        Создать новую запись в БД.

        Args:
            obj: Экземпляр модели для сохранения

        Returns:
            Созданный объект с заполненным ID
        """
        self.db.add(obj)
        await self.db.flush()  # flush() отправляет в БД, но не commit
        await self.db.refresh(obj)  # refresh() подтягивает ID и defaults из БД
        return obj

    async def get_by_id(self, id: int) -> ModelType | None:
        """
        Получить объект по ID.

        SQL эквивалент:
            SELECT * FROM table WHERE id = {id} LIMIT 1;
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """
        Получить все записи (по возрастанию ID).

        SQL эквивалент:
            SELECT * FROM table ORDER BY id;
        """
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def update(self, id: int, **kwargs: Any) -> ModelType | None:
        """
        Обновить запись по ID.

        Args:
            id: Первичный ключ записи
            **kwargs: Поля для обновления (title="Новый заголовок", active=False)

        Returns:
            Обновлённый объект или None, если не найден

        SQL эквивалент:
            UPDATE table SET field1=value1, field2=value2 WHERE id={id};
        """
        obj = await self.get_by_id(id)
        if not obj:
            return None

        # Обновляем только переданные поля
        for key, value in kwargs.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        await self.db.flush()
        await self.db.refresh(obj)
        return obj
