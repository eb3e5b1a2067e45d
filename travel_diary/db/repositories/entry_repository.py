from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_diary.db.models.entry import DiaryEntry as EntryModel
from travel_diary.domains.entries.entities import DiaryEntry, EntryDraft, Location, ScreenInfo

# Границы столбца Integer (int4 в PostgreSQL)
MIN_ENTRY_ID = -(2 ** 31)
MAX_ENTRY_ID = 2 ** 31 - 1


class EntryRepository:
    """Репозиторий для работы с записями дневника"""

    def __init__(self, session: AsyncSession, share_token_bytes: int = 16):
        self.session = session
        self.share_token_bytes = share_token_bytes

    async def create(self, owner_id: str, draft: EntryDraft) -> DiaryEntry:
        """Создание новой записи; id выдаёт последовательность БД"""
        draft = draft.with_defaults()
        db_entry = EntryModel(
            user_id=owner_id,
            caption=draft.caption,
            image_url=draft.image_url,
            location=asdict(draft.location) if draft.location else None,
            screen_info=asdict(draft.screen_info),
            created_at=datetime.now(timezone.utc),
            is_shared=False,
            share_id=None
        )

        self.session.add(db_entry)
        await self.session.commit()
        await self.session.refresh(db_entry)
        return self._to_domain(db_entry)

    async def get_by_id(self, entry_id: int) -> Optional[DiaryEntry]:
        """Получение записи по id"""
        if not self._id_in_range(entry_id):
            return None
        result = await self.session.execute(
            select(EntryModel).where(EntryModel.id == entry_id)
        )
        db_entry = result.scalar_one_or_none()
        return self._to_domain(db_entry) if db_entry else None

    async def get_by_owner(self, owner_id: str) -> List[DiaryEntry]:
        """Получение записей владельца, сначала новые"""
        result = await self.session.execute(
            select(EntryModel)
            .where(EntryModel.user_id == owner_id)
            .order_by(EntryModel.created_at.desc(), EntryModel.id.desc())
        )
        return [self._to_domain(db_entry) for db_entry in result.scalars().all()]

    async def get_by_share_id(self, share_id: str) -> Optional[DiaryEntry]:
        """Получение открытой записи по токену ссылки"""
        result = await self.session.execute(
            select(EntryModel).where(
                EntryModel.share_id == share_id,
                EntryModel.is_shared.is_(True)
            )
        )
        db_entry = result.scalar_one_or_none()
        return self._to_domain(db_entry) if db_entry else None

    async def update_sharing(
        self,
        entry_id: int,
        is_shared: bool,
        share_id: Optional[str] = None
    ) -> Optional[DiaryEntry]:
        """Изменение публичного доступа в одной транзакции с блокировкой строки"""
        if not self._id_in_range(entry_id):
            return None
        result = await self.session.execute(
            select(EntryModel).where(EntryModel.id == entry_id).with_for_update()
        )
        db_entry = result.scalar_one_or_none()

        if not db_entry:
            await self.session.rollback()
            return None

        entry = self._to_domain(db_entry)
        entry.apply_sharing(is_shared, share_id, self.share_token_bytes)

        db_entry.is_shared = entry.is_shared
        db_entry.share_id = entry.share_id
        await self.session.commit()
        return entry

    async def delete(self, entry_id: int) -> bool:
        """Удаление записи"""
        if not self._id_in_range(entry_id):
            return False
        stmt = delete(EntryModel).where(EntryModel.id == entry_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    @staticmethod
    def _id_in_range(entry_id: int) -> bool:
        """id за пределами столбца заведомо не существует"""
        return MIN_ENTRY_ID <= entry_id <= MAX_ENTRY_ID

    def _to_domain(self, db_entry: EntryModel) -> DiaryEntry:
        """Преобразование модели БД в доменную сущность"""
        created_at = db_entry.created_at
        if created_at.tzinfo is None:
            # SQLite не хранит часовой пояс
            created_at = created_at.replace(tzinfo=timezone.utc)

        return DiaryEntry(
            id=db_entry.id,
            user_id=db_entry.user_id,
            caption=db_entry.caption,
            image_url=db_entry.image_url,
            location=Location(**db_entry.location) if db_entry.location else None,
            screen_info=ScreenInfo(**db_entry.screen_info),
            created_at=created_at,
            is_shared=db_entry.is_shared,
            share_id=db_entry.share_id
        )
