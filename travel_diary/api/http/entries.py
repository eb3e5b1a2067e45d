from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from travel_diary.api.deps import (
    get_acting_user, get_entry_id, get_entry_service, get_sharing_service
)
from travel_diary.core.errors import ValidationError
from travel_diary.domains.entries.schemas import EntryCreate, EntryResponse, ShareResponse
from travel_diary.domains.entries.services import EntryService, SharingService
from travel_diary.domains.identity.entities import User
from travel_diary.domains.identity.schemas import MessageResponse

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=List[EntryResponse])
async def get_user_entries(
    user_id: Optional[str] = Query(None, alias="userId"),
    entry_service: EntryService = Depends(get_entry_service)
):
    """Получение записей пользователя, сначала новые"""
    if not user_id:
        raise ValidationError("User ID is required")

    entries = await entry_service.get_user_entries(user_id)
    return [EntryResponse.from_entry(entry) for entry in entries]


@router.get("/{entry_id}", response_model=EntryResponse)
async def get_entry(
    entry_id: int = Depends(get_entry_id),
    entry_service: EntryService = Depends(get_entry_service)
):
    """Получение записи по id"""
    entry = await entry_service.get_entry(entry_id)
    return EntryResponse.from_entry(entry)


@router.post("", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: EntryCreate,
    entry_service: EntryService = Depends(get_entry_service)
):
    """Создание новой записи"""
    entry = await entry_service.create_entry(entry_data)
    return EntryResponse.from_entry(entry)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_entry(
    entry_id: int = Depends(get_entry_id),
    actor: Optional[User] = Depends(get_acting_user),
    entry_service: EntryService = Depends(get_entry_service)
):
    """Удаление записи"""
    await entry_service.delete_entry(entry_id, actor)
    return MessageResponse(message="Entry deleted successfully")


@router.post("/{entry_id}/share", response_model=ShareResponse)
async def share_entry(
    entry_id: int = Depends(get_entry_id),
    actor: Optional[User] = Depends(get_acting_user),
    sharing_service: SharingService = Depends(get_sharing_service)
):
    """Открытие публичной ссылки на запись"""
    entry = await sharing_service.share_entry(entry_id, actor)
    return ShareResponse(
        message="Entry shared successfully",
        share_id=entry.share_id,
        share_url=sharing_service.share_url(entry.share_id)
    )


@router.post("/{entry_id}/unshare", response_model=MessageResponse)
async def unshare_entry(
    entry_id: int = Depends(get_entry_id),
    actor: Optional[User] = Depends(get_acting_user),
    sharing_service: SharingService = Depends(get_sharing_service)
):
    """Закрытие публичной ссылки"""
    await sharing_service.unshare_entry(entry_id, actor)
    return MessageResponse(message="Entry is no longer shared")
