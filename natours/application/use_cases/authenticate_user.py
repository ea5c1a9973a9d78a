"""Resolve the user behind a bearer token on every authenticated request"""

from typing import Optional

from ...core.security import decode_access_token
from ...domain.entities.user import User
from ...domain.exceptions import AuthenticationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ..services.credential_store import CredentialStore


class AuthenticateUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, token: Optional[str]) -> User:
        if not token:
            raise AuthenticationFailure("You are not logged in! Please log in to get access.")

        payload = decode_access_token(token)
        if payload is None:
            raise AuthenticationFailure("Invalid token. Please log in again!")

        try:
            user_id = UserId.from_str(payload.subject)
        except ValueError:
            raise AuthenticationFailure("Invalid token. Please log in again!")

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise AuthenticationFailure("The user belonging to this token does no longer exist.")

            if CredentialStore(self.unit_of_work.users).is_session_stale(user, payload.issued_at):
                raise AuthenticationFailure("User recently changed password! Please log in again.")

            return user
