from abc import ABC, abstractmethod
from typing import List, Optional

from travel_diary.domains.entries.entities import DiaryEntry, EntryDraft
from travel_diary.domains.identity.entities import User


class Storage(ABC):
    """Контракт хранилища пользователей и записей дневника.

    Каждый вызов атомарен относительно остальных. Поиск возвращает None,
    а не исключение, если объект не найден.
    """

    name: str = "storage"

    async def init(self) -> None:
        """Подготовка хранилища (создание схемы и т.п.)"""

    async def close(self) -> None:
        """Освобождение ресурсов"""

    # Пользователи

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Сохранение пользователя; UsernameTakenError, если имя занято"""

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    # Записи

    @abstractmethod
    async def create_entry(self, owner_id: str, draft: EntryDraft) -> DiaryEntry:
        """Создание записи с новым id и временем создания"""

    @abstractmethod
    async def get_entry(self, entry_id: int) -> Optional[DiaryEntry]:
        ...

    @abstractmethod
    async def get_entries_by_owner(self, owner_id: str) -> List[DiaryEntry]:
        """Записи владельца, от новых к старым"""

    @abstractmethod
    async def delete_entry(self, entry_id: int) -> None:
        """Удаление записи; отсутствующий id не ошибка"""

    @abstractmethod
    async def update_entry_sharing(
        self,
        entry_id: int,
        is_shared: bool,
        share_id: Optional[str] = None
    ) -> Optional[DiaryEntry]:
        """Открытие или закрытие публичного доступа к записи"""

    @abstractmethod
    async def get_entry_by_share_token(self, token: str) -> Optional[DiaryEntry]:
        """Только запись, которая сейчас открыта по этому токену"""
