"""
Unit tests for settings parsing.
"""

import pytest
from pydantic import ValidationError

from tests.conftest import make_settings


class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.auth_scheme == "session"
        assert settings.enforce_ownership is True
        assert settings.share_token_bytes == 16
        assert settings.share_url_prefix == "/shared"

    def test_postgres_url_gets_async_driver(self):
        settings = make_settings(database_url="postgresql://user:pw@db/diary")

        assert settings.database_url == "postgresql+asyncpg://user:pw@db/diary"

    def test_sqlite_url_gets_async_driver(self):
        settings = make_settings(database_url="sqlite:///diary.db")

        assert settings.database_url == "sqlite+aiosqlite:///diary.db"

    def test_short_share_tokens_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(share_token_bytes=8)

    def test_unknown_auth_scheme_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(auth_scheme="basic")

    def test_cors_origins_list(self):
        settings = make_settings(cors_origins="http://localhost:5173, https://diary.example.com")

        assert settings.cors_origins_list == ["http://localhost:5173", "https://diary.example.com"]

    def test_share_url_prefix_trailing_slash(self):
        assert make_settings(share_url_prefix="/s/").share_url_prefix == "/s"
