"""
API endpoints для работы с тегами.

Теги создаются автоматически при создании/обновлении постов,
здесь только чтение.
"""

from fastapi import APIRouter, Depends

from ..core.logging import get_logger
from ..services import TagService
from .dependencies import get_tag_service
from .schemas import PostResponse, TagResponse

router = APIRouter(prefix="/tags", tags=["tags"])

logger = get_logger(__name__)


# ============================================================================
# GET ALL TAGS
# ============================================================================


@router.get("", response_model=list[TagResponse], summary="Получить все теги")
async def get_tags(service: TagService = Depends(get_tag_service)) -> list[TagResponse]:
    """
    Получить список всех тегов.

    Пример запроса:
    ```
    GET /tags
    ```
    """
    tags = await service.list_tags()
    return [TagResponse.model_validate(t) for t in tags]


# ============================================================================
# GET POSTS BY TAG
# ============================================================================


@router.get(
    "/{tag_name}/posts",
    response_model=list[PostResponse],
    summary="Получить посты с тегом",
    description="Только активные посты. Неизвестный тег - пустой список.",
)
async def get_posts_by_tag(
    tag_name: str, service: TagService = Depends(get_tag_service)
) -> list[PostResponse]:
    """
    Получить посты по названию тега.

    Символ # в пути нужно кодировать как %23:
    ```
    GET /tags/%23happy/posts
    ```
    """
    posts = await service.list_posts_by_tag(tag_name, active_only=True)
    logger.debug("Posts by tag", extra={"tag": tag_name, "count": len(posts)})
    return [PostResponse.model_validate(p) for p in posts]
