"""API dependencies for DDD architecture"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..application.services.rating_aggregator import RatingAggregator
from ..application.use_cases.authenticate_user import AuthenticateUserUseCase
from ..db.database import get_db
from ..domain.entities.user import User
from ..domain.enums import UserRole
from ..domain.exceptions import PermissionDenied
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..infrastructure.external_services.email_service import EmailService
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl


security = HTTPBearer(auto_error=False)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work with review writes hooked to rating recomputation"""
    unit_of_work = UnitOfWorkImpl(db)
    RatingAggregator.for_unit_of_work(unit_of_work)
    return unit_of_work


def get_email_service() -> EmailService:
    """Get email service"""
    return EmailService()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
) -> User:
    """Get current authenticated user; rejects tokens older than the last password change"""
    token = credentials.credentials if credentials else None
    return await AuthenticateUserUseCase(unit_of_work).execute(token)


def restrict_to(*roles: UserRole):
    """Dependency factory allowing only the given roles"""

    async def _check_role(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*roles):
            raise PermissionDenied("You do not have permission to perform this action")
        return current_user

    return _check_role


get_current_admin_user = restrict_to(UserRole.ADMIN)
