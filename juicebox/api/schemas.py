"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP.

Отдельно от моделей SQLAlchemy, чтобы:
1. Не отдавать клиенту пароль и author_id (вместо него - вложенный author)
2. Валидировать входящие данные
3. Явно различать "tags не передан" и "tags пустой"
"""

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagResponse(BaseModel):
    """
    Каноническая запись тега.

    Пример:
    {"id": 1, "name": "#happy"}
    """

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# USER SCHEMAS
# ============================================================================


class UserCreate(BaseModel):
    """
    Схема для создания пользователя (POST /users).

    Пример запроса:
    {
        "username": "albert",
        "password": "bertie99",
        "name": "Al Bert",
        "location": "Sidney, Australia"
    }
    """

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)


class UserUpdate(BaseModel):
    """Схема для обновления пользователя (PATCH /users/{id}). Все поля опциональные."""

    username: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=1, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, min_length=1, max_length=255)
    active: bool | None = None


class AuthorResponse(BaseModel):
    """Публичные поля автора внутри поста (без пароля)."""

    id: int
    username: str
    name: str
    location: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(AuthorResponse):
    """Публичные поля пользователя."""

    active: bool


# ============================================================================
# POST SCHEMAS
# ============================================================================


class PostCreate(BaseModel):
    """
    Схема для создания поста (POST /posts).

    Пример запроса:
    {
        "author_id": 1,
        "title": "First Post",
        "content": "This is my first post.",
        "tags": ["#happy", "#youcandoanything"]
    }
    """

    author_id: int = Field(..., description="ID автора")
    title: str = Field(..., min_length=1, max_length=255, description="Заголовок")
    content: str = Field(..., min_length=1, description="Текст поста")
    tags: list[str] = Field(default_factory=list, description="Названия тегов")


class PostUpdate(BaseModel):
    """
    Схема для обновления поста (PATCH /posts/{id}).

    tags:
    - не передан (или null) - теги не меняются
    - [] - снять все теги
    - ["#happy"] - теги станут ровно такими
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    active: bool | None = None
    tags: list[str] | None = None


class PostResponse(BaseModel):
    """
    Полный пост (агрегат): поля поста + автор + теги.

    Пример ответа:
    {
        "id": 1,
        "title": "First Post",
        "content": "This is my first post.",
        "active": true,
        "author": {"id": 1, "username": "albert", "name": "Al Bert", "location": "Sidney, Australia"},
        "tags": [{"id": 1, "name": "#happy"}, {"id": 2, "name": "#youcandoanything"}]
    }
    """

    id: int
    title: str
    content: str
    active: bool
    author: AuthorResponse
    tags: list[TagResponse] = []

    model_config = ConfigDict(from_attributes=True)


class UserDetailResponse(UserResponse):
    """Пользователь вместе со всеми его постами (GET /users/{id})."""

    posts: list[PostResponse] = []


# ============================================================================
# COMMON SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """Детали ошибки для конкретного поля."""

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки с кодом и деталями.

    Коды:
    - VALIDATION_ERROR: ошибка валидации полей
    - NOT_FOUND: пост/пользователь не найден
    - ALREADY_EXISTS: username уже занят
    - INTERNAL_ERROR: ошибка хранилища или целостности данных
    """

    code: str = Field(..., description="Код ошибки (VALIDATION_ERROR, NOT_FOUND, etc.)")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Список ошибок по полям (для валидации)"
    )


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    Пример:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Post with id 999 not found",
            "details": null
        }
    }
    """

    error: ErrorBody
