"""API endpoints для работы с пользователями."""

from fastapi import APIRouter, Depends, status

from ..services import UserService
from .dependencies import get_user_service
from .errors import AlreadyExistsError
from .schemas import (
    ErrorResponse,
    UserCreate,
    UserDetailResponse,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


# ============================================================================
# GET ALL USERS
# ============================================================================


@router.get("", response_model=list[UserResponse], summary="Получить всех пользователей")
async def get_users(service: UserService = Depends(get_user_service)) -> list[UserResponse]:
    """
    Получить список пользователей (без паролей).

    Пример запроса:
    ```
    GET /users
    ```
    """
    users = await service.list_users()
    return [UserResponse.model_validate(u) for u in users]


# ============================================================================
# CREATE USER
# ============================================================================


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать пользователя",
    responses={
        201: {"description": "Пользователь создан"},
        400: {"model": ErrorResponse, "description": "Username уже занят"},
    },
)
async def create_user(
    data: UserCreate, service: UserService = Depends(get_user_service)
) -> UserResponse:
    """
    Создать пользователя.

    Пример запроса:
    ```json
    {
        "username": "albert",
        "password": "bertie99",
        "name": "Al Bert",
        "location": "Sidney, Australia"
    }
    ```
    """
    user = await service.create_user(
        username=data.username,
        password=data.password,
        name=data.name,
        location=data.location,
    )
    if user is None:
        raise AlreadyExistsError("User", "username", data.username)
    return UserResponse.model_validate(user)


# ============================================================================
# GET USER BY ID
# ============================================================================


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="Получить пользователя с постами",
    responses={
        200: {"description": "Пользователь найден"},
        404: {"model": ErrorResponse, "description": "Пользователь не найден"},
    },
)
async def get_user(
    user_id: int, service: UserService = Depends(get_user_service)
) -> UserDetailResponse:
    """
    Получить пользователя и все его посты (полные: автор + теги).

    Пример запроса:
    ```
    GET /users/1
    ```
    """
    user = await service.get_user(user_id)
    return UserDetailResponse.model_validate(user)


# ============================================================================
# UPDATE USER
# ============================================================================


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Обновить пользователя",
    responses={
        200: {"description": "Пользователь обновлён"},
        404: {"model": ErrorResponse, "description": "Пользователь не найден"},
    },
)
async def update_user(
    user_id: int, data: UserUpdate, service: UserService = Depends(get_user_service)
) -> UserResponse:
    """
    Обновить пользователя.

    Пустое тело - ничего не меняется, возвращается текущий пользователь.
    """
    fields = data.model_dump(exclude_none=True)
    user = await service.update_user(user_id, **fields)
    if user is None:
        user = await service.get_user(user_id)
    return UserResponse.model_validate(user)
