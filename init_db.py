"""
Скрипт для инициализации базы данных.

Создаёт все таблицы напрямую через SQLAlchemy (без Alembic миграций).
Флаг --reset сначала удаляет существующие таблицы.
"""

import asyncio
import sys

from juicebox.core.database import drop_db, init_db


async def main(reset: bool = False):
    """Создать все таблицы."""
    if reset:
        print("Удаление таблиц...")
        await drop_db()
    print("Создание таблиц...")
    await init_db()
    print("✓ Таблицы созданы успешно!")


if __name__ == "__main__":
    asyncio.run(main(reset="--reset" in sys.argv))
