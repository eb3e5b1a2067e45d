import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from travel_diary.core.db import Base, create_engine, create_session_factory
from travel_diary.db.repositories import EntryRepository, UserRepository
from travel_diary.db.storage import Storage
from travel_diary.domains.entries.entities import DiaryEntry, EntryDraft
from travel_diary.domains.identity.entities import User

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Хранилище в реляционной БД через SQLAlchemy (asyncpg, aiosqlite)"""

    name = "sql"

    def __init__(self, engine: AsyncEngine, share_token_bytes: int = 16):
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self.share_token_bytes = share_token_bytes

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False, share_token_bytes: int = 16) -> "SqlStorage":
        return cls(create_engine(database_url, echo=echo), share_token_bytes=share_token_bytes)

    async def init(self) -> None:
        """Создание таблиц, если их нет"""
        # Импорт регистрирует модели в метаданных
        from travel_diary.db import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database schema ready ({self.engine.url.get_backend_name()})")

    async def close(self) -> None:
        await self.engine.dispose()

    async def create_user(self, user: User) -> User:
        async with self.session_factory() as session:
            return await UserRepository(session).create(user)

    async def get_user(self, user_id: str) -> Optional[User]:
        async with self.session_factory() as session:
            return await UserRepository(session).get_by_id(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self.session_factory() as session:
            return await UserRepository(session).get_by_username(username)

    async def create_entry(self, owner_id: str, draft: EntryDraft) -> DiaryEntry:
        async with self.session_factory() as session:
            return await self._entries(session).create(owner_id, draft)

    async def get_entry(self, entry_id: int) -> Optional[DiaryEntry]:
        async with self.session_factory() as session:
            return await self._entries(session).get_by_id(entry_id)

    async def get_entries_by_owner(self, owner_id: str) -> List[DiaryEntry]:
        async with self.session_factory() as session:
            return await self._entries(session).get_by_owner(owner_id)

    async def delete_entry(self, entry_id: int) -> None:
        async with self.session_factory() as session:
            await self._entries(session).delete(entry_id)

    async def update_entry_sharing(
        self,
        entry_id: int,
        is_shared: bool,
        share_id: Optional[str] = None
    ) -> Optional[DiaryEntry]:
        async with self.session_factory() as session:
            return await self._entries(session).update_sharing(entry_id, is_shared, share_id)

    async def get_entry_by_share_token(self, token: str) -> Optional[DiaryEntry]:
        if not token:
            return None
        async with self.session_factory() as session:
            return await self._entries(session).get_by_share_id(token)

    def _entries(self, session) -> EntryRepository:
        return EntryRepository(session, share_token_bytes=self.share_token_bytes)
