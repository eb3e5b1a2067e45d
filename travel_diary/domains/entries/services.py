import logging
from typing import List, Optional

from travel_diary.core.errors import ForbiddenError, NotFoundError
from travel_diary.db.storage import Storage
from travel_diary.domains.entries.entities import DiaryEntry
from travel_diary.domains.entries.schemas import EntryCreate
from travel_diary.domains.identity.entities import User

logger = logging.getLogger(__name__)


def ensure_owner(entry: DiaryEntry, actor: Optional[User]) -> None:
    """Проверка владельца; actor=None означает, что проверка отключена"""
    if actor is None:
        return
    if not entry.is_owned_by(actor.id):
        logger.warning(f"User {actor.id} tried to modify entry {entry.id} owned by someone else")
        raise ForbiddenError()


class EntryService:
    """Сервис для работы с записями дневника"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def create_entry(self, entry_data: EntryCreate) -> DiaryEntry:
        """Создание новой записи"""
        entry = await self.storage.create_entry(entry_data.user_id, entry_data.to_draft())
        logger.info(
            f"Created entry {entry.id} for user {entry.user_id} "
            f"(location={'yes' if entry.location else 'no'})"
        )
        return entry

    async def get_entry(self, entry_id: int) -> DiaryEntry:
        """Получение записи по id"""
        entry = await self.storage.get_entry(entry_id)
        if not entry:
            raise NotFoundError("Entry not found")
        return entry

    async def get_user_entries(self, user_id: str) -> List[DiaryEntry]:
        """Записи пользователя, сначала новые"""
        return await self.storage.get_entries_by_owner(user_id)

    async def delete_entry(self, entry_id: int, actor: Optional[User] = None) -> None:
        """Удаление записи; отсутствующая запись даёт NotFoundError"""
        entry = await self.get_entry(entry_id)
        ensure_owner(entry, actor)

        await self.storage.delete_entry(entry_id)
        logger.info(f"Deleted entry {entry_id}")


class SharingService:
    """Публичные ссылки на записи: открыть, закрыть, найти по токену"""

    def __init__(self, storage: Storage, share_url_prefix: str = "/shared"):
        self.storage = storage
        self.share_url_prefix = share_url_prefix

    async def share_entry(self, entry_id: int, actor: Optional[User] = None) -> DiaryEntry:
        """Открытие доступа; повторный вызов возвращает тот же токен"""
        entry = await self.storage.get_entry(entry_id)
        if not entry:
            raise NotFoundError("Entry not found")
        ensure_owner(entry, actor)

        updated = await self.storage.update_entry_sharing(entry_id, True)
        if not updated:
            # Запись удалили между чтением и обновлением
            raise NotFoundError("Entry not found")

        logger.info(f"Entry {entry_id} is shared")
        return updated

    async def unshare_entry(self, entry_id: int, actor: Optional[User] = None) -> DiaryEntry:
        """Закрытие доступа; старая ссылка перестаёт работать навсегда"""
        entry = await self.storage.get_entry(entry_id)
        if not entry:
            raise NotFoundError("Entry not found")
        ensure_owner(entry, actor)

        updated = await self.storage.update_entry_sharing(entry_id, False)
        if not updated:
            raise NotFoundError("Entry not found")

        logger.info(f"Entry {entry_id} is no longer shared")
        return updated

    async def get_shared_entry(self, share_id: str) -> DiaryEntry:
        """Запись по токену ссылки.

        Отозванный и никогда не существовавший токен неразличимы.
        """
        entry = await self.storage.get_entry_by_share_token(share_id)
        if not entry:
            raise NotFoundError("Shared entry not found or no longer shared")
        return entry

    def share_url(self, share_id: str) -> str:
        return f"{self.share_url_prefix}/{share_id}"
