import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify_password() -> None:
    """Холостая проверка, чтобы время ответа не выдавало отсутствие пользователя"""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(password)


def generate_user_id() -> str:
    return secrets.token_hex(16)


def generate_share_token(nbytes: int = 16) -> str:
    """Непредсказуемый токен публичной ссылки"""
    return secrets.token_hex(max(nbytes, 16))


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


def create_access_token(
    data: Dict[str, Any],
    secret: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Создание JWT токена доступа"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)  # По умолчанию 15 минут

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    audience: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Проверка JWT токена и извлечение данных"""
    options = {"require_aud": True} if audience else {"verify_aud": False}
    try:
        return jwt.decode(token, secret, algorithms=[algorithm], audience=audience, options=options)
    except JWTError:
        return None


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Извлечение токена из заголовка Authorization"""
    if not authorization:
        return None

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
