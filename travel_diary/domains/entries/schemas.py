from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from travel_diary.domains.entries.entities import DiaryEntry, EntryDraft, Location, ScreenInfo


class CamelModel(BaseModel):
    """Базовая схема: camelCase в JSON, snake_case в Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationSchema(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ScreenInfoSchema(CamelModel):
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    orientation: str = Field(default="unknown", max_length=50)


class EntryCreate(CamelModel):
    """Схема для создания записи"""
    user_id: str = Field(..., min_length=1, max_length=255)
    caption: Optional[str] = Field(None, max_length=2000)
    caption_text: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None
    location: Optional[LocationSchema] = None
    screen_info: Optional[ScreenInfoSchema] = None

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v):
        if not v.strip():
            raise ValueError("User ID is required")
        return v

    def to_draft(self) -> EntryDraft:
        return EntryDraft(
            caption=self.caption_text or self.caption,
            image_url=self.image_url,
            location=Location(lat=self.location.lat, lng=self.location.lng) if self.location else None,
            screen_info=ScreenInfo(**self.screen_info.model_dump()) if self.screen_info else None
        )


class EntryResponse(CamelModel):
    """Схема для ответа с данными записи"""
    id: int
    user_id: str
    caption: str
    image_url: str
    location: Optional[LocationSchema] = None
    screen_info: ScreenInfoSchema
    created_at: datetime
    is_shared: bool
    share_id: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: DiaryEntry) -> "EntryResponse":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            caption=entry.caption,
            image_url=entry.image_url,
            location=entry.location_dict(),
            screen_info=entry.screen_info_dict(),
            created_at=entry.created_at,
            is_shared=entry.is_shared,
            share_id=entry.share_id
        )


class ShareResponse(CamelModel):
    message: str
    share_id: str
    share_url: str
