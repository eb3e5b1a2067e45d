from travel_diary.domains.entries.entities import (
    DEFAULT_CAPTION, DEFAULT_IMAGE_URL, DiaryEntry, EntryDraft, Location, ScreenInfo
)
from travel_diary.domains.entries.schemas import (
    EntryCreate, EntryResponse, LocationSchema, ScreenInfoSchema, ShareResponse
)

__all__ = [
    "DEFAULT_CAPTION", "DEFAULT_IMAGE_URL",
    "DiaryEntry", "EntryDraft", "Location", "ScreenInfo",
    "EntryCreate", "EntryResponse", "LocationSchema", "ScreenInfoSchema", "ShareResponse"
]
