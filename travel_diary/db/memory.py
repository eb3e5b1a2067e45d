import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from travel_diary.core.errors import UsernameTakenError
from travel_diary.db.storage import Storage
from travel_diary.domains.entries.entities import DiaryEntry, EntryDraft
from travel_diary.domains.identity.entities import User

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """Хранилище в памяти процесса.

    Изменения сериализуются одним asyncio.Lock, наружу отдаются копии.
    """

    name = "memory"

    def __init__(self, share_token_bytes: int = 16):
        self._users: Dict[str, User] = {}
        self._entries: Dict[int, DiaryEntry] = {}
        self._next_entry_id = 1
        self._share_token_bytes = share_token_bytes
        self._lock = asyncio.Lock()

    async def create_user(self, user: User) -> User:
        async with self._lock:
            if any(existing.username == user.username for existing in self._users.values()):
                raise UsernameTakenError()
            self._users[user.id] = user.copy()
            return user.copy()

    async def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.copy()
        return None

    async def create_entry(self, owner_id: str, draft: EntryDraft) -> DiaryEntry:
        async with self._lock:
            entry_id = self._next_entry_id
            self._next_entry_id += 1
            entry = DiaryEntry.create_entry(
                id=entry_id,
                user_id=owner_id,
                draft=draft,
                created_at=datetime.now(timezone.utc)
            )
            self._entries[entry_id] = entry
            logger.debug(f"Stored entry {entry_id} in memory")
            return entry.copy()

    async def get_entry(self, entry_id: int) -> Optional[DiaryEntry]:
        entry = self._entries.get(entry_id)
        return entry.copy() if entry else None

    async def get_entries_by_owner(self, owner_id: str) -> List[DiaryEntry]:
        entries = [entry.copy() for entry in self._entries.values() if entry.user_id == owner_id]
        entries.sort(key=lambda entry: (entry.created_at, entry.id), reverse=True)
        return entries

    async def delete_entry(self, entry_id: int) -> None:
        async with self._lock:
            self._entries.pop(entry_id, None)

    async def update_entry_sharing(
        self,
        entry_id: int,
        is_shared: bool,
        share_id: Optional[str] = None
    ) -> Optional[DiaryEntry]:
        async with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None

            # Запись подменяется целиком
            updated = entry.copy()
            updated.apply_sharing(is_shared, share_id, self._share_token_bytes)
            self._entries[entry_id] = updated
            return updated.copy()

    async def get_entry_by_share_token(self, token: str) -> Optional[DiaryEntry]:
        if not token:
            return None
        for entry in self._entries.values():
            if entry.is_shared and entry.share_id == token:
                return entry.copy()
        return None
