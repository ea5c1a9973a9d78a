"""Register user use case"""

import logging

from ...domain.entities.user import User
from ...domain.exceptions import ValidationFailure, UniquenessViolation
from ...domain.value_objects.email import Email
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import SignupDto, AuthResponse
from ..services.credential_store import CredentialStore
from .login_user import issue_auth_response

logger = logging.getLogger(__name__)


def ensure_passwords_match(password: str, password_confirm: str) -> None:
    if password != password_confirm:
        raise ValidationFailure("Passwords are not the same")


class RegisterUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: SignupDto) -> AuthResponse:
        ensure_passwords_match(request.password, request.password_confirm)

        async with self.unit_of_work:
            email = Email(request.email)

            # Check if user exists
            if await self.unit_of_work.users.exists_by_email(email):
                raise UniquenessViolation("User with this email already exists")

            # Create user entity; role is never taken from the request
            user = User.create(name=request.name, email=email, photo=request.photo)
            CredentialStore(self.unit_of_work.users).set_password(user, request.password)

            await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

            logger.info("New user registered: %s", user.id)
            return issue_auth_response(user)
