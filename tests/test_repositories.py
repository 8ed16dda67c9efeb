"""
Тесты для Repository Layer.

Проверяем:
- Реестр тегов: идемпотентное создание, дубликаты, канонические ID
- Связи пост-тег: link без дубликатов, reconcile до точного набора
- Сборку полного поста (автор + теги)
- Создание пользователя с конфликтом username
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from juicebox.models import Post, Tag, post_tags
from juicebox.repositories import (
    PostRepository,
    PostTagRepository,
    TagRepository,
    UserRepository,
)


async def _count(db, table) -> int:
    result = await db.execute(select(func.count()).select_from(table))
    return result.scalar_one()


async def _create_post(db, author_id: int, title: str = "First Post") -> Post:
    return await PostRepository(db).create(
        Post(author_id=author_id, title=title, content="This is my first post.")
    )


# ============================================================================
# TAG REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_register_empty_list(test_db):
    """Test: пустой список - пустой результат, в БД ничего не создаётся."""
    repo = TagRepository(test_db)

    tags = await repo.register([])

    assert tags == []
    assert await _count(test_db, Tag) == 0


@pytest.mark.asyncio
async def test_register_creates_tags(test_db):
    """Test: регистрация новых тегов."""
    repo = TagRepository(test_db)

    tags = await repo.register(["#happy", "#youcandoanything"])

    assert {t.name for t in tags} == {"#happy", "#youcandoanything"}
    assert all(t.id is not None for t in tags)
    assert await _count(test_db, Tag) == 2


@pytest.mark.asyncio
async def test_register_is_idempotent(test_db):
    """Test: повторная регистрация возвращает те же ID."""
    repo = TagRepository(test_db)

    first = await repo.register(["#happy", "#worst-day-ever"])
    second = await repo.register(["#happy", "#worst-day-ever"])

    assert {t.name: t.id for t in first} == {t.name: t.id for t in second}
    assert await _count(test_db, Tag) == 2


@pytest.mark.asyncio
async def test_register_duplicate_names_in_one_call(test_db):
    """Test: дубликат внутри одного вызова - одна запись."""
    repo = TagRepository(test_db)

    tags = await repo.register(["#happy", "#happy"])

    assert len(tags) == 1
    assert tags[0].name == "#happy"


@pytest.mark.asyncio
async def test_register_unions_existing_and_new(test_db):
    """Test: результат = уже существующие + новые теги."""
    repo = TagRepository(test_db)

    existing = await repo.register(["#happy"])
    tags = await repo.register(["#happy", "#catmandoeverything"])

    by_name = {t.name: t.id for t in tags}
    assert set(by_name) == {"#happy", "#catmandoeverything"}
    assert by_name["#happy"] == existing[0].id


@pytest.mark.asyncio
async def test_get_all_tags_sorted_by_name(test_db):
    """Test: список тегов отсортирован по имени."""
    repo = TagRepository(test_db)
    await repo.register(["#youcandoanything", "#happy", "#worst-day-ever"])

    tags = await repo.get_all()

    assert [t.name for t in tags] == ["#happy", "#worst-day-ever", "#youcandoanything"]


# ============================================================================
# POST-TAG REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_link_is_idempotent(test_db, albert):
    """Test: повторная привязка того же тега - не ошибка и не дубликат."""
    post = await _create_post(test_db, albert.id)
    tags = await TagRepository(test_db).register(["#happy", "#youcandoanything"])
    repo = PostTagRepository(test_db)

    await repo.link(post.id, tags)
    await repo.link(post.id, tags)

    assert await _count(test_db, post_tags) == 2


@pytest.mark.asyncio
async def test_link_empty_does_nothing(test_db, albert):
    """Test: пустой набор тегов - связей нет."""
    post = await _create_post(test_db, albert.id)

    await PostTagRepository(test_db).link(post.id, [])

    assert await _count(test_db, post_tags) == 0


@pytest.mark.asyncio
async def test_reconcile_to_exact_set(test_db, albert):
    """Test: после reconcile у поста ровно desired набор тегов."""
    post = await _create_post(test_db, albert.id)
    tag_repo = TagRepository(test_db)
    repo = PostTagRepository(test_db)
    await repo.link(post.id, await tag_repo.register(["#happy", "#youcandoanything"]))

    await repo.reconcile(post.id, await tag_repo.register(["#happy", "#worst-day-ever"]))

    full = await PostRepository(test_db).get_by_id_full(post.id)
    assert {t.name for t in full.tags} == {"#happy", "#worst-day-ever"}


@pytest.mark.asyncio
async def test_reconcile_empty_removes_all(test_db, albert):
    """Test: reconcile с пустым набором снимает все теги."""
    post = await _create_post(test_db, albert.id)
    tag_repo = TagRepository(test_db)
    repo = PostTagRepository(test_db)
    await repo.link(post.id, await tag_repo.register(["#happy", "#youcandoanything"]))

    await repo.reconcile(post.id, [])

    full = await PostRepository(test_db).get_by_id_full(post.id)
    assert full.tags == []
    # Сами теги не удаляются
    assert await _count(test_db, Tag) == 2


@pytest.mark.asyncio
async def test_reconcile_does_not_touch_other_posts(test_db, albert):
    """Test: reconcile меняет связи только своего поста."""
    first = await _create_post(test_db, albert.id, title="First")
    second = await _create_post(test_db, albert.id, title="Second")
    tags = await TagRepository(test_db).register(["#happy"])
    repo = PostTagRepository(test_db)
    await repo.link(first.id, tags)
    await repo.link(second.id, tags)

    await repo.reconcile(first.id, [])

    full = await PostRepository(test_db).get_by_id_full(second.id)
    assert [t.name for t in full.tags] == ["#happy"]


# ============================================================================
# POST REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_get_by_id_full_loads_author_and_tags(test_db, albert):
    """Test: полный пост содержит автора и теги."""
    post = await _create_post(test_db, albert.id)
    tags = await TagRepository(test_db).register(["#happy"])
    await PostTagRepository(test_db).link(post.id, tags)

    full = await PostRepository(test_db).get_by_id_full(post.id)

    assert full.author.username == "albert"
    assert [t.name for t in full.tags] == ["#happy"]
    assert full.active is True


@pytest.mark.asyncio
async def test_get_by_id_full_not_found(test_db):
    """Test: несуществующий пост - None."""
    assert await PostRepository(test_db).get_by_id_full(999) is None


@pytest.mark.asyncio
async def test_get_ids_by_author_and_tag(test_db, albert, sandra):
    """Test: выборка ID по автору и по тегу."""
    first = await _create_post(test_db, albert.id, title="First")
    second = await _create_post(test_db, sandra.id, title="Second")
    tag_repo = TagRepository(test_db)
    link_repo = PostTagRepository(test_db)
    await link_repo.link(first.id, await tag_repo.register(["#happy"]))
    await link_repo.link(second.id, await tag_repo.register(["#happy", "#worst-day-ever"]))
    repo = PostRepository(test_db)

    assert await repo.get_ids() == [first.id, second.id]
    assert await repo.get_ids_by_author(sandra.id) == [second.id]
    assert await repo.get_ids_by_tag_name("#happy") == [first.id, second.id]
    assert await repo.get_ids_by_tag_name("#worst-day-ever") == [second.id]
    assert await repo.get_ids_by_tag_name("#unknown") == []


@pytest.mark.asyncio
async def test_get_by_ids_full_batched(test_db, albert, sandra):
    """Test: пакетная загрузка полных постов."""
    first = await _create_post(test_db, albert.id, title="First")
    second = await _create_post(test_db, sandra.id, title="Second")
    await PostTagRepository(test_db).link(
        second.id, await TagRepository(test_db).register(["#happy"])
    )

    posts = await PostRepository(test_db).get_by_ids_full([second.id, first.id])

    assert [p.id for p in posts] == [first.id, second.id]
    assert [p.author.username for p in posts] == ["albert", "sandra"]
    assert [[t.name for t in p.tags] for p in posts] == [[], ["#happy"]]
    assert await PostRepository(test_db).get_by_ids_full([]) == []


@pytest.mark.asyncio
async def test_get_ids_by_tag_name_active_only(test_db, albert):
    """Test: active_only отсекает неактивные посты ещё в запросе ID."""
    visible = await _create_post(test_db, albert.id, title="Visible")
    hidden = await _create_post(test_db, albert.id, title="Hidden")
    tags = await TagRepository(test_db).register(["#happy"])
    link_repo = PostTagRepository(test_db)
    await link_repo.link(visible.id, tags)
    await link_repo.link(hidden.id, tags)
    repo = PostRepository(test_db)
    await repo.update(hidden.id, active=False)

    assert await repo.get_ids_by_tag_name("#happy", active_only=True) == [visible.id]
    assert await repo.get_ids_by_tag_name("#happy") == [visible.id, hidden.id]


@pytest.mark.asyncio
async def test_create_post_unknown_author_violates_foreign_key(test_db):
    """Test: SQLite проверяет FOREIGN KEY - пост без автора не вставляется."""
    with pytest.raises(IntegrityError):
        await _create_post(test_db, author_id=999)


# ============================================================================
# USER REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_create_if_absent(test_db):
    """Test: создание пользователя."""
    repo = UserRepository(test_db)

    user = await repo.create_if_absent(
        username="glamgal", password="soglam", name="Joshua", location="Upper East Side"
    )

    assert user is not None
    assert user.id is not None
    assert user.username == "glamgal"
    assert user.active is True


@pytest.mark.asyncio
async def test_create_if_absent_conflict(test_db):
    """Test: занятый username - None, существующая запись не меняется."""
    repo = UserRepository(test_db)
    original = await repo.create_if_absent(
        username="glamgal", password="soglam", name="Joshua", location="Upper East Side"
    )

    duplicate = await repo.create_if_absent(
        username="glamgal", password="other", name="Other", location="Elsewhere"
    )

    assert duplicate is None
    stored = await repo.get_by_id(original.id)
    assert stored.name == "Joshua"
    assert stored.password == "soglam"
    assert stored.location == "Upper East Side"
