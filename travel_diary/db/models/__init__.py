from travel_diary.db.models.user import User
from travel_diary.db.models.entry import DiaryEntry

__all__ = [
    "User",
    "DiaryEntry"
]
