"""
Pytest configuration and fixtures for travel diary tests.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient

from travel_diary.core.config import Settings
from travel_diary.db import MemoryStorage, SqlStorage
from travel_diary.db.storage import Storage
from travel_diary.main import create_app


def make_settings(**overrides) -> Settings:
    """Настройки без чтения .env"""
    values = {
        "database_url": "",
        "auth_scheme": "session",
        "jwt_secret": "test-secret",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture(params=["memory", "sql"])
async def storage(request, tmp_path) -> AsyncGenerator[Storage, None]:
    """Один и тот же набор проверок для обоих хранилищ"""
    if request.param == "memory":
        yield MemoryStorage()
        return

    sql = SqlStorage.from_url(f"sqlite+aiosqlite:///{tmp_path / 'diary.db'}")
    await sql.init()
    yield sql
    await sql.close()


@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    app = create_app(settings=settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def open_client() -> Generator[TestClient, None, None]:
    """Клиент без проверки владельца записей"""
    app = create_app(settings=make_settings(enforce_ownership=False))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_client() -> Generator[TestClient, None, None]:
    app = create_app(settings=make_settings(auth_scheme="token"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sql_client(tmp_path) -> Generator[TestClient, None, None]:
    app = create_app(settings=make_settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"))
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, username: str = "alice", password: str = "secret1") -> dict:
    response = client.post("/api/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def create_entry(client: TestClient, user_id: str, **fields) -> dict:
    payload = {"userId": user_id, "caption": "Beach", "imageUrl": "http://x/y.jpg"}
    payload.update(fields)
    response = client.post("/api/entries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
