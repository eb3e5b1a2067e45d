from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Проверка работоспособности"""
    return {
        "status": "healthy",
        "storage": request.app.state.storage.name,
        "auth_scheme": request.app.state.gate.scheme
    }
