import logging
from typing import Optional

from travel_diary.core.errors import InvalidCredentialsError, UsernameTakenError
from travel_diary.core.security import dummy_verify_password
from travel_diary.db.storage import Storage
from travel_diary.domains.identity.entities import User

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис регистрации и проверки учётных данных"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def register_user(self, username: str, password: str) -> User:
        """Регистрация нового пользователя"""
        if await self.storage.get_user_by_username(username):
            raise UsernameTakenError()

        user = User.create_user(username=username, password=password)
        created = await self.storage.create_user(user)
        logger.info(f"Registered user {created.id}")
        return created

    async def authenticate_user(self, username: str, password: str) -> User:
        """Проверка имени и пароля.

        Неизвестное имя и неверный пароль дают одну и ту же ошибку, а для
        неизвестного имени выполняется холостая проверка хеша, чтобы по
        времени ответа нельзя было перебрать имена.
        """
        user = await self.storage.get_user_by_username(username)

        if not user:
            dummy_verify_password()
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not user.authenticate(password):
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        return user

    async def get_user(self, user_id: Optional[str]) -> Optional[User]:
        """Получение пользователя по id"""
        if not user_id:
            return None
        return await self.storage.get_user(user_id)
