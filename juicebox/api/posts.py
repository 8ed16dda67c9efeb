"""
API endpoints для работы с постами.

Каждый ответ - полный пост: поля + автор + теги.
"""

from fastapi import APIRouter, Depends, status

from ..services import PostService
from .dependencies import get_post_service
from .schemas import ErrorResponse, PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["posts"])


# ============================================================================
# GET ALL POSTS
# ============================================================================


@router.get("", response_model=list[PostResponse], summary="Получить все посты")
async def get_posts(service: PostService = Depends(get_post_service)) -> list[PostResponse]:
    """
    Получить список всех постов.

    Пример запроса:
    ```
    GET /posts
    ```
    """
    posts = await service.list_posts()
    return [PostResponse.model_validate(p) for p in posts]


# ============================================================================
# CREATE POST
# ============================================================================


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать пост",
    description="""
    Создать пост и привязать к нему теги.

    Несуществующие теги создаются автоматически,
    существующие переиспользуются (без дубликатов).
    """,
)
async def create_post(
    data: PostCreate, service: PostService = Depends(get_post_service)
) -> PostResponse:
    """
    Создать пост.

    Пример запроса:
    ```json
    {
        "author_id": 1,
        "title": "First Post",
        "content": "This is my first post.",
        "tags": ["#happy", "#youcandoanything"]
    }
    ```
    """
    post = await service.create_post(
        author_id=data.author_id,
        title=data.title,
        content=data.content,
        tags=data.tags,
    )
    return PostResponse.model_validate(post)


# ============================================================================
# GET POST BY ID
# ============================================================================


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Получить пост по ID",
    responses={
        200: {"description": "Пост найден"},
        404: {"model": ErrorResponse, "description": "Пост не найден"},
    },
)
async def get_post(post_id: int, service: PostService = Depends(get_post_service)) -> PostResponse:
    """
    Получить пост по ID.

    Пример запроса:
    ```
    GET /posts/1
    ```
    """
    post = await service.get_post(post_id)
    return PostResponse.model_validate(post)


# ============================================================================
# UPDATE POST
# ============================================================================


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    summary="Обновить пост",
    description="""
    Частичное обновление поста.

    - tags не передан - теги не меняются
    - tags = [] - с поста снимаются все теги
    - tags = ["#happy"] - у поста остаётся ровно этот набор тегов
    """,
    responses={
        200: {"description": "Пост обновлён"},
        404: {"model": ErrorResponse, "description": "Пост не найден"},
    },
)
async def update_post(
    post_id: int, data: PostUpdate, service: PostService = Depends(get_post_service)
) -> PostResponse:
    """
    Обновить пост.

    Пример запроса:
    ```json
    {
        "title": "New title",
        "tags": ["#happy"]
    }
    ```
    """
    post = await service.update_post(
        post_id,
        title=data.title,
        content=data.content,
        active=data.active,
        tags=data.tags,
    )
    return PostResponse.model_validate(post)
