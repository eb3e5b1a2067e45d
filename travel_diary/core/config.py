from typing import List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения из переменных окружения и .env"""

    app_name: str = "Travel Diary"

    # Пустая строка означает хранилище в памяти
    database_url: str = ""
    database_echo: bool = False

    auth_scheme: Literal["session", "token"] = "session"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    access_token_expire_minutes: int = 60 * 24

    session_cookie_name: str = "diary_session"
    session_max_age: int = 60 * 60 * 24
    session_cookie_secure: bool = False

    share_token_bytes: int = 16
    share_url_prefix: str = "/shared"
    enforce_ownership: bool = True

    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Подставляем асинхронный драйвер, если он не указан"""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("share_token_bytes")
    @classmethod
    def validate_share_token_bytes(cls, v: int) -> int:
        if v < 16:
            raise ValueError("Share tokens need at least 16 random bytes (128 bits)")
        return v

    @field_validator("share_url_prefix")
    @classmethod
    def strip_share_url_prefix(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
