from travel_diary.db.storage import Storage
from travel_diary.db.memory import MemoryStorage
from travel_diary.db.sql_storage import SqlStorage

__all__ = [
    "Storage",
    "MemoryStorage",
    "SqlStorage",
    "build_storage"
]


def build_storage(settings) -> Storage:
    """Выбор хранилища по DATABASE_URL: пустой адрес означает память"""
    if settings.database_url:
        return SqlStorage.from_url(
            settings.database_url,
            echo=settings.database_echo,
            share_token_bytes=settings.share_token_bytes
        )
    return MemoryStorage(share_token_bytes=settings.share_token_bytes)
