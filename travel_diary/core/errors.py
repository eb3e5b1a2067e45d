from typing import Any, List, Optional

from fastapi import status


class DiaryError(Exception):
    """Базовая ошибка приложения с HTTP-статусом и публичным сообщением"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(DiaryError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFoundError(DiaryError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UnauthenticatedError(DiaryError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class InvalidCredentialsError(UnauthenticatedError):
    # Одно сообщение и для неверного пароля, и для неизвестного пользователя
    message = "Invalid username or password"


class ForbiddenError(DiaryError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "You don't have permission to modify this entry"


class ConflictError(DiaryError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class UsernameTakenError(ConflictError):
    message = "Username already exists"


class InternalError(DiaryError):
    pass
