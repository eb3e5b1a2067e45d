from typing import Optional

from travel_diary.core.security import generate_user_id, get_password_hash, verify_password


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: str,
        username: str,
        password_hash: Optional[str] = None
    ):
        self.id = id
        self.username = username
        # У пользователей внешнего провайдера локального пароля нет
        self.password_hash = password_hash

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        if not self.password_hash:
            return False
        return verify_password(password, self.password_hash)

    @classmethod
    def create_user(cls, username: str, password: str) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=generate_user_id(),
            username=username,
            password_hash=get_password_hash(password)
        )

    def copy(self) -> "User":
        return User(id=self.id, username=self.username, password_hash=self.password_hash)

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
