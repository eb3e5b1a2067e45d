"""Шлюзы идентификации.

Две взаимозаменяемые схемы, выбираемые настройкой AUTH_SCHEME при старте:
серверная сессия в cookie и bearer-токен (JWT), который может выпускать
и внешний провайдер с общим секретом.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from fastapi import Request, Response

from travel_diary.core.config import Settings
from travel_diary.core.errors import UnauthenticatedError
from travel_diary.core.security import (
    create_access_token, extract_token_from_header, generate_session_id, verify_token
)
from travel_diary.db.storage import Storage
from travel_diary.domains.identity.entities import User
from travel_diary.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)


class SessionStore:
    """Серверные сессии: id сессии -> id пользователя со сроком действия"""

    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: Dict[str, Tuple[str, datetime]] = {}

    def create(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        self._sweep(now)

        session_id = generate_session_id()
        self._sessions[session_id] = (user_id, now + timedelta(seconds=self.max_age))
        return session_id

    def _sweep(self, now: datetime) -> None:
        """Удаление всех истёкших сессий"""
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
        for session_id in expired:
            del self._sessions[session_id]

    def get(self, session_id: Optional[str]) -> Optional[str]:
        if not session_id:
            return None

        record = self._sessions.get(session_id)
        if record is None:
            return None

        user_id, expires_at = record
        if expires_at <= datetime.now(timezone.utc):
            self._sessions.pop(session_id, None)
            return None
        return user_id

    def delete(self, session_id: Optional[str]) -> None:
        if session_id:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


class IdentityGate(ABC):
    """Превращает учётные данные запроса в пользователя"""

    scheme: str = ""

    def __init__(self, identity_service: IdentityService, settings: Settings):
        self.identity_service = identity_service
        self.settings = settings

    @abstractmethod
    async def authenticate(self, request: Request) -> User:
        """Текущий пользователь или UnauthenticatedError"""

    @abstractmethod
    async def establish(self, user: User, request: Request, response: Response) -> Optional[str]:
        """Открытие сессии; возвращает токен доступа, если схема его выдаёт"""

    @abstractmethod
    async def revoke(self, request: Request, response: Response) -> None:
        """Закрытие сессии; повторный вызов безопасен"""

    async def register(
        self, username: str, password: str, request: Request, response: Response
    ) -> Tuple[User, Optional[str]]:
        """Регистрация с немедленным входом"""
        user = await self.identity_service.register_user(username, password)
        token = await self.establish(user, request, response)
        return user, token

    async def login(
        self, username: str, password: str, request: Request, response: Response
    ) -> Tuple[User, Optional[str]]:
        """Вход по имени и паролю"""
        user = await self.identity_service.authenticate_user(username, password)
        token = await self.establish(user, request, response)
        logger.info(f"User {user.id} logged in ({self.scheme})")
        return user, token

    async def logout(self, request: Request, response: Response) -> None:
        await self.revoke(request, response)


class SessionIdentityGate(IdentityGate):
    """Серверная сессия, id которой хранится в HttpOnly cookie"""

    scheme = "session"

    def __init__(self, identity_service: IdentityService, settings: Settings):
        super().__init__(identity_service, settings)
        self.sessions = SessionStore(max_age=settings.session_max_age)

    async def authenticate(self, request: Request) -> User:
        session_id = request.cookies.get(self.settings.session_cookie_name)
        user_id = self.sessions.get(session_id)
        user = await self.identity_service.get_user(user_id)

        if not user:
            raise UnauthenticatedError()
        return user

    async def establish(self, user: User, request: Request, response: Response) -> Optional[str]:
        # Старая сессия не переживает повторный вход
        self.sessions.delete(request.cookies.get(self.settings.session_cookie_name))

        session_id = self.sessions.create(user.id)
        response.set_cookie(
            key=self.settings.session_cookie_name,
            value=session_id,
            max_age=self.settings.session_max_age,
            httponly=True,
            samesite="lax",
            secure=self.settings.session_cookie_secure
        )
        return None

    async def revoke(self, request: Request, response: Response) -> None:
        self.sessions.delete(request.cookies.get(self.settings.session_cookie_name))
        response.delete_cookie(self.settings.session_cookie_name)


class TokenIdentityGate(IdentityGate):
    """Bearer JWT в заголовке Authorization"""

    scheme = "token"

    async def authenticate(self, request: Request) -> User:
        token = extract_token_from_header(request.headers.get("Authorization"))
        if not token:
            raise UnauthenticatedError("Authorization header is required")

        payload = verify_token(
            token,
            self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            audience=self.settings.jwt_audience
        )
        if not payload or not payload.get("sub"):
            raise UnauthenticatedError("Invalid or expired token")

        user_id = str(payload["sub"])
        user = await self.identity_service.get_user(user_id)
        if user:
            return user

        # Пользователь внешнего провайдера, локальной записи нет
        return User(
            id=user_id,
            username=payload.get("username") or payload.get("email") or user_id
        )

    async def establish(self, user: User, request: Request, response: Response) -> Optional[str]:
        token_data = {
            "sub": user.id,
            "username": user.username
        }
        if self.settings.jwt_audience:
            token_data["aud"] = self.settings.jwt_audience

        return create_access_token(
            data=token_data,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.access_token_expire_minutes)
        )

    async def revoke(self, request: Request, response: Response) -> None:
        # Токен без состояния, клиент просто перестаёт его отправлять
        return None


def build_gate(settings: Settings, storage: Storage) -> IdentityGate:
    """Шлюз по настройке AUTH_SCHEME"""
    identity_service = IdentityService(storage)
    if settings.auth_scheme == "token":
        return TokenIdentityGate(identity_service, settings)
    return SessionIdentityGate(identity_service, settings)
