from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserCredentials(BaseModel):
    """Схема для регистрации и входа"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError("Username cannot be empty")
        return v


class UserResponse(BaseModel):
    """Схема для ответа с данными пользователя (без пароля)"""
    id: str
    username: str
    access_token: Optional[str] = None

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )


class MessageResponse(BaseModel):
    message: str
