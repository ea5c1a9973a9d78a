"""Forgot password use case"""

import logging

from ..dtos.user_dtos import ForgotPasswordDto, MessageResponse
from ..services.credential_store import CredentialStore
from ...domain.exceptions import NotFound
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...infrastructure.external_services.email_service import EmailService

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """Use case for handling forgot password requests"""

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.email_service = email_service

    async def execute(self, request: ForgotPasswordDto) -> MessageResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(Email(request.email))
            if not user:
                raise NotFound("There is no user with that email address.")

            # Overwrites any earlier pending token
            reset_token = CredentialStore(self.unit_of_work.users).issue_reset_token(user)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        # The token is persisted by now; delivery problems are only logged
        sent = await self.email_service.send_password_reset_email(
            to_email=str(user.email),
            reset_token=reset_token
        )
        if not sent:
            logger.error("Password reset email could not be delivered to user %s", user.id)

        return MessageResponse(message="Token sent to email!")
