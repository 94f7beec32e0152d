# tastetab/core/security.py
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from tastetab.core.config import settings
from tastetab.core.errors import APIError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ROLES = ("admin", "user")


# --- Password Hashing Functions ---
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def is_strong_password(password: str) -> bool:
    return bool(PASSWORD_PATTERN.match(password or ""))


# --- JWT Token Creation ---
def _signing_key() -> str:
    if not settings.JWT_SECRET_KEY:
        raise APIError(503, "Token signing is not configured")
    return settings.JWT_SECRET_KEY


def create_access_token(user_id: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"id": user_id, "role": role, "exp": expire}
    return jwt.encode(to_encode, _signing_key(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the claims of ``token``; raises ``JWTError`` on a bad signature or expiry."""
    return jwt.decode(token, _signing_key(), algorithms=[settings.JWT_ALGORITHM])


# --- One-time reset codes ---
def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


__all__ = [
    "JWTError",
    "ROLES",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "hash_password",
    "verify_password",
    "is_strong_password",
    "create_access_token",
    "decode_access_token",
    "generate_otp",
]
