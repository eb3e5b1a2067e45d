import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_diary import __version__
from travel_diary.api.http import health_router
from travel_diary.api.router import api_router
from travel_diary.core import config
from travel_diary.core.config import Settings
from travel_diary.core.errors import DiaryError, InternalError, ValidationError
from travel_diary.db import Storage, build_storage
from travel_diary.domains.identity.gates import IdentityGate, build_gate

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Единая настройка логирования процесса"""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logging.getLogger("travel_diary").setLevel(level)


def register_exception_handlers(app: FastAPI) -> None:
    """Все ошибки отдаются в виде {"message": ...}"""

    @app.exception_handler(DiaryError)
    async def diary_error_handler(request: Request, exc: DiaryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(
            "Invalid request data",
            errors=[
                {"loc": list(item.get("loc", ())), "msg": item.get("msg"), "type": item.get("type")}
                for item in exc.errors()
            ]
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    gate: Optional[IdentityGate] = None
) -> FastAPI:
    """Сборка приложения; хранилище и шлюз можно подменить, например в тестах"""
    if settings is None:
        settings = config.settings
    configure_logging(settings.log_level)

    if storage is None:
        storage = build_storage(settings)
    if gate is None:
        gate = build_gate(settings, storage)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await storage.init()
        logger.info(f"{settings.app_name} started (storage={storage.name}, auth={gate.scheme})")
        yield
        await storage.close()

    app = FastAPI(
        title=settings.app_name,
        description="Travel diary API with public share links",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.gate = gate

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Корневой эндпоинт"""
        return {
            "message": f"{settings.app_name} API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run("travel_diary.main:app", host="0.0.0.0", port=port, reload=True)
