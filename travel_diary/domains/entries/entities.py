from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from travel_diary.core.security import generate_share_token

DEFAULT_CAPTION = "My travel memory"
DEFAULT_IMAGE_URL = "https://example.com/placeholder.jpg"


@dataclass
class Location:
    lat: float
    lng: float


@dataclass
class ScreenInfo:
    width: int = 0
    height: int = 0
    orientation: str = "unknown"


@dataclass
class EntryDraft:
    """Данные новой записи до того, как хранилище присвоит id и время"""
    caption: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[Location] = None
    screen_info: Optional[ScreenInfo] = None

    def with_defaults(self) -> "EntryDraft":
        """Пустые подпись и картинка заменяются значениями по умолчанию"""
        return EntryDraft(
            caption=self.caption or DEFAULT_CAPTION,
            image_url=self.image_url or DEFAULT_IMAGE_URL,
            location=self.location,
            screen_info=self.screen_info or ScreenInfo()
        )


class DiaryEntry:
    """Сущность записи дневника"""

    def __init__(
        self,
        id: int,
        user_id: str,
        caption: str,
        image_url: str,
        location: Optional[Location] = None,
        screen_info: Optional[ScreenInfo] = None,
        created_at: Optional[datetime] = None,
        is_shared: bool = False,
        share_id: Optional[str] = None
    ):
        if is_shared != (share_id is not None):
            raise ValueError("is_shared must be set exactly when share_id is present")

        self.id = id
        self.user_id = user_id
        self.caption = caption
        self.image_url = image_url
        self.location = location
        self.screen_info = screen_info or ScreenInfo()
        self.created_at = created_at or datetime.now(timezone.utc)
        self.is_shared = is_shared
        self.share_id = share_id

    @classmethod
    def create_entry(
        cls,
        id: int,
        user_id: str,
        draft: EntryDraft,
        created_at: Optional[datetime] = None
    ) -> "DiaryEntry":
        """Создание новой записи с подстановкой значений по умолчанию"""
        draft = draft.with_defaults()
        return cls(
            id=id,
            user_id=user_id,
            caption=draft.caption,
            image_url=draft.image_url,
            location=draft.location,
            screen_info=draft.screen_info,
            created_at=created_at
        )

    def apply_sharing(self, is_shared: bool, share_id: Optional[str] = None, token_bytes: int = 16) -> None:
        """Переход между состояниями Private и Shared"""
        if is_shared:
            self.share_id = share_id or self.share_id or generate_share_token(token_bytes)
            self.is_shared = True
        else:
            self.is_shared = False
            self.share_id = None

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.user_id == user_id

    def copy(self) -> "DiaryEntry":
        return DiaryEntry(
            id=self.id,
            user_id=self.user_id,
            caption=self.caption,
            image_url=self.image_url,
            location=Location(**asdict(self.location)) if self.location else None,
            screen_info=ScreenInfo(**asdict(self.screen_info)),
            created_at=self.created_at,
            is_shared=self.is_shared,
            share_id=self.share_id
        )

    def location_dict(self) -> Optional[Dict[str, Any]]:
        return asdict(self.location) if self.location else None

    def screen_info_dict(self) -> Dict[str, Any]:
        return asdict(self.screen_info)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DiaryEntry):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"DiaryEntry(id={self.id}, user_id={self.user_id}, is_shared={self.is_shared})"
