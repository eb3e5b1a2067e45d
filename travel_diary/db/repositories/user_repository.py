from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_diary.core.errors import UsernameTakenError
from travel_diary.db.models.user import User as UserModel
from travel_diary.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        if await self.username_exists(user.username):
            raise UsernameTakenError()

        db_user = UserModel(
            id=user.id,
            username=user.username,
            password_hash=user.password_hash
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Параллельная регистрация с тем же именем
            await self.session.rollback()
            raise UsernameTakenError()
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Получение пользователя по username"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def username_exists(self, username: str) -> bool:
        """Проверка существования username"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            username=db_user.username,
            password_hash=db_user.password_hash
        )
