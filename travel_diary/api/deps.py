import re
from typing import Optional

from fastapi import Depends, Path, Request

from travel_diary.core.config import Settings
from travel_diary.core.errors import ValidationError
from travel_diary.db.storage import Storage
from travel_diary.domains.entries.services import EntryService, SharingService
from travel_diary.domains.identity.entities import User
from travel_diary.domains.identity.gates import IdentityGate

ENTRY_ID_PATTERN = re.compile(r"-?[0-9]+")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_gate(request: Request) -> IdentityGate:
    return request.app.state.gate


def get_entry_service(storage: Storage = Depends(get_storage)) -> EntryService:
    return EntryService(storage)


def get_sharing_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings)
) -> SharingService:
    return SharingService(storage, share_url_prefix=settings.share_url_prefix)


async def get_current_user(
    request: Request,
    gate: IdentityGate = Depends(get_gate)
) -> User:
    """Зависимость для получения текущего пользователя"""
    return await gate.authenticate(request)


async def get_acting_user(
    request: Request,
    gate: IdentityGate = Depends(get_gate),
    settings: Settings = Depends(get_settings)
) -> Optional[User]:
    """Пользователь, изменяющий запись; None, если проверка владельца выключена"""
    if not settings.enforce_ownership:
        return None
    return await gate.authenticate(request)


def parse_entry_id(entry_id: str) -> int:
    """id записи из пути; нечисловой id даёт 400"""
    if not ENTRY_ID_PATTERN.fullmatch(entry_id):
        raise ValidationError("Invalid entry ID")
    return int(entry_id)


def get_entry_id(entry_id: str = Path(...)) -> int:
    """Зависимость: разбирается раньше проверки пользователя"""
    return parse_entry_id(entry_id)
