"""Login user use case"""

from ...core.security import create_access_token
from ...domain.entities.user import User
from ...domain.exceptions import ValidationFailure, AuthenticationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...application.dtos.user_dtos import LoginUserDto, AuthResponse, UserDto
from ..services.credential_store import CredentialStore


def issue_auth_response(user: User) -> AuthResponse:
    """Sign a fresh bearer token for the user"""
    return AuthResponse(
        token=create_access_token(str(user.id.value)),
        user=UserDto.from_entity(user)
    )


class LoginUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: LoginUserDto) -> AuthResponse:
        if not request.email or not request.password:
            raise ValidationFailure("Please provide email and password!")

        async with self.unit_of_work:
            credentials = CredentialStore(self.unit_of_work.users)
            try:
                email = Email(request.email)
            except ValidationFailure:
                raise AuthenticationFailure("Incorrect email or password")

            user = await self.unit_of_work.users.get_by_email(email)
            if not user or not credentials.verify_password(user, request.password):
                raise AuthenticationFailure("Incorrect email or password")

            return issue_auth_response(user)
