"""Reset password use case"""

from ..dtos.user_dtos import ResetPasswordDto, AuthResponse
from ..services.credential_store import CredentialStore
from ...domain.repositories.unit_of_work import IUnitOfWork
from .login_user import issue_auth_response
from .register_user import ensure_passwords_match


class ResetPasswordUseCase:
    """Use case for resetting password with a single-use token"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, token: str, request: ResetPasswordDto) -> AuthResponse:
        ensure_passwords_match(request.password, request.password_confirm)

        async with self.unit_of_work:
            credentials = CredentialStore(self.unit_of_work.users)
            user = await credentials.consume_reset_token(token, request.password)
            await self.unit_of_work.commit()

            return issue_auth_response(user)
