"""Update password use case for logged-in users"""

from ..dtos.user_dtos import UpdatePasswordDto, AuthResponse
from ..services.credential_store import CredentialStore
from ...domain.entities.user import User
from ...domain.exceptions import AuthenticationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from .login_user import issue_auth_response
from .register_user import ensure_passwords_match


class UpdatePasswordUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, current_user: User, request: UpdatePasswordDto) -> AuthResponse:
        async with self.unit_of_work:
            credentials = CredentialStore(self.unit_of_work.users)

            user = await self.unit_of_work.users.get_by_id(current_user.id)
            if not user or not credentials.verify_password(user, request.password_current):
                raise AuthenticationFailure("Your current password is wrong.")

            ensure_passwords_match(request.password, request.password_confirm)
            credentials.set_password(user, request.password)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

            # Older tokens are now stale; hand out a fresh one
            return issue_auth_response(user)
