"""Domain errors raised by the service layer.

Ошибки хранилища (sqlalchemy.exc.SQLAlchemyError) сюда не оборачиваются -
они пробрасываются вызывающему коду как есть.
"""


class JuiceboxError(Exception):
    """Base domain error."""

    pass


class NotFoundError(JuiceboxError, ValueError):
    """
    Запрошенный пост или пользователь не найден.

    Это не то же самое, что пустой результат: пользователь без постов
    найден, просто список его постов пуст.
    """

    def __init__(self, resource: str, resource_id: int | str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id {resource_id} not found")


class DataIntegrityError(JuiceboxError):
    """Raised when an aggregate cannot be assembled from the stored rows."""

    def __init__(self, message: str):
        super().__init__(message)
