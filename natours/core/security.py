"""Security utilities"""

import calendar
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import settings


# Password context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

RESET_TOKEN_BYTES = 32


@dataclass(frozen=True)
class TokenPayload:
    subject: str
    issued_at: datetime


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password in constant time"""
    if not hashed_password:
        return False
    if len(plain_password.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
        # never stored, so it cannot match; bcrypt would truncate it
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # malformed or unknown hash format
        return False


def _to_timestamp(moment: datetime) -> int:
    return calendar.timegm(moment.utctimetuple())


def create_access_token(subject: str, issued_at: Optional[datetime] = None) -> str:
    """Create access token"""
    issued_at = issued_at or datetime.utcnow()
    expire = issued_at + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": subject,
        "iat": _to_timestamp(issued_at),
        "exp": _to_timestamp(expire),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Verify token and return its subject and issue time"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    issued_at = payload.get("iat")
    if not subject or issued_at is None:
        return None
    return TokenPayload(subject=subject, issued_at=datetime.utcfromtimestamp(int(issued_at)))


def generate_reset_token() -> str:
    """Generate a secure password reset token (256 bits of entropy)."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    """One-way digest stored in place of the plaintext reset token."""
    return hashlib.sha256(token.encode()).hexdigest()
