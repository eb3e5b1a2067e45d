from travel_diary.api.http.health import router as health_router
from travel_diary.api.http.auth import router as auth_router
from travel_diary.api.http.entries import router as entries_router
from travel_diary.api.http.shared import router as shared_router

__all__ = [
    "health_router",
    "auth_router",
    "entries_router",
    "shared_router"
]
