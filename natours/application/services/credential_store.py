"""Credential lifecycle: password hashing, reset tokens and stale sessions

Operations mutate a single User entity. ``consume_reset_token`` persists the
account it resolves; for the other mutating operations persisting the entity is
left to the calling use case, inside its unit of work.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ...core.config import settings
from ...core.security import (
    get_password_hash,
    verify_password,
    generate_reset_token,
    hash_reset_token,
)
from ...domain.entities.user import User
from ...domain.exceptions import ValidationFailure, TokenInvalid, TokenExpired
from ...domain.repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CredentialStore:

    def __init__(
        self,
        users: IUserRepository,
        clock: Clock = datetime.utcnow,
        reset_token_ttl: Optional[timedelta] = None,
        change_skew: Optional[timedelta] = None
    ):
        self.users = users
        self.clock = clock
        self.reset_token_ttl = reset_token_ttl or timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
        self.change_skew = change_skew if change_skew is not None else timedelta(
            seconds=settings.PASSWORD_CHANGE_SKEW_SECONDS
        )

    def set_password(self, user: User, plaintext: str) -> None:
        """Hash and store a new password, dropping any pending reset token.

        Replacing an existing password stamps ``password_changed_at`` slightly in
        the past, so a token issued in the same instant still compares as older.
        """
        if not plaintext or len(plaintext) < settings.PASSWORD_MIN_LENGTH:
            raise ValidationFailure(
                f"Password must have at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if len(plaintext.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
            raise ValidationFailure(
                f"Password must be at most {settings.PASSWORD_MAX_BYTES} bytes long"
            )

        replacing = user.has_password
        user.hashed_password = get_password_hash(plaintext)
        user.clear_password_reset_token()
        if replacing:
            user.password_changed_at = self.clock() - self.change_skew

    def verify_password(self, user: User, candidate: str) -> bool:
        return verify_password(candidate or "", user.hashed_password)

    def issue_reset_token(self, user: User) -> str:
        """Store hash + expiry of a fresh token and return the plaintext once."""
        token = generate_reset_token()
        user.password_reset_token_hash = hash_reset_token(token)
        user.password_reset_expires_at = self.clock() + self.reset_token_ttl
        user.updated_at = datetime.utcnow()
        logger.info("Password reset token issued for user %s", user.id)
        return token

    async def consume_reset_token(self, token: str, new_password: str) -> User:
        user = await self.users.get_by_reset_token_hash(hash_reset_token(token or ""))
        if user is None:
            raise TokenInvalid("Token is invalid or has expired")
        if user.password_reset_expires_at is None or user.password_reset_expires_at <= self.clock():
            raise TokenExpired("Token is invalid or has expired")

        self.set_password(user, new_password)
        await self.users.update(user)
        logger.info("Password reset completed for user %s", user.id)
        return user

    def is_session_stale(self, user: User, session_issued_at: datetime) -> bool:
        """True when the password changed after the bearer credential was issued."""
        if user.password_changed_at is None:
            return False
        return user.password_changed_at > session_issued_at
