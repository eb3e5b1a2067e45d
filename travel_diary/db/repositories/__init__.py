from travel_diary.db.repositories.user_repository import UserRepository
from travel_diary.db.repositories.entry_repository import EntryRepository

__all__ = [
    "UserRepository",
    "EntryRepository"
]
