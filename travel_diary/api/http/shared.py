from fastapi import APIRouter, Depends

from travel_diary.api.deps import get_sharing_service
from travel_diary.core.errors import ValidationError
from travel_diary.domains.entries.schemas import EntryResponse
from travel_diary.domains.entries.services import SharingService

router = APIRouter(prefix="/shared", tags=["shared"])


@router.get("/{share_id}", response_model=EntryResponse)
async def get_shared_entry(
    share_id: str,
    sharing_service: SharingService = Depends(get_sharing_service)
):
    """Публичный просмотр записи по ссылке, без авторизации"""
    entry = await sharing_service.get_shared_entry(share_id)
    return EntryResponse.from_entry(entry)


@router.get("", include_in_schema=False)
async def shared_entry_without_id():
    raise ValidationError("Share ID is required")
