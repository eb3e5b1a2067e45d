from fastapi import APIRouter

from travel_diary.api.http import auth_router, entries_router, shared_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(entries_router)
api_router.include_router(shared_router)
