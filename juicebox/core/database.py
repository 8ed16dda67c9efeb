"""Database connection, session management and transaction scopes."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    Включить проверку FOREIGN KEY для нового SQLite соединения.

    SQLite не проверяет внешние ключи, пока это не включено явно,
    и тогда posts.author_id может ссылаться на несуществующего пользователя.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Create async engine
# For SQLite, use StaticPool to avoid greenlet issues
# For PostgreSQL, use NullPool
if "sqlite" in settings.DATABASE_URL:
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=StaticPool,  # SQLite requires StaticPool for async
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
else:
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=NullPool,
    )

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


@asynccontextmanager
async def atomic(db: AsyncSession, enabled: bool = True) -> AsyncIterator[AsyncSession]:
    """
    Транзакционная граница для многошаговой мутации.

    Если транзакция ещё не открыта - открываем её (commit в конце блока).
    Если сессия уже внутри транзакции (например, get_db или тест) -
    используем SAVEPOINT, чтобы откатить только шаги этой мутации.

    Args:
        db: Асинхронная сессия
        enabled: False - без транзакции, шаги только делают flush

    Пример:
        async with atomic(db):
            post = await post_repo.create(post)
            await post_tag_repo.link(post.id, tags)
    """
    if not enabled:
        yield db
        await db.flush()
        return

    if db.in_transaction():
        async with db.begin_nested():
            yield db
    else:
        async with db.begin():
            yield db


async def init_db():
    """Initialize database (create all tables)."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def drop_db():
    """Drop all tables (use with caution!)."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped")
