"""User repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Репозиторий для работы с пользователями."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_if_absent(
        self, username: str, password: str, name: str, location: str
    ) -> User | None:
        """
        Создать пользователя, если username ещё свободен.

        Returns:
            Новый пользователь или None, если username уже занят
            (существующая запись не меняется)

        SQL эквивалент:
            INSERT INTO users (username, password, name, location)
            VALUES (...)
            ON CONFLICT (username) DO NOTHING
            RETURNING *;
        """
        stmt = (
            self.upsert(User)
            .values(username=username, password=password, name=name, location=location)
            .on_conflict_do_nothing(index_elements=["username"])
            .returning(User)
        )
        result = await self.db.scalars(stmt)
        return result.one_or_none()
