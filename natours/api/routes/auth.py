"""Authentication routes"""

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_unit_of_work, get_email_service, get_current_user
from ...application.use_cases.register_user import RegisterUserUseCase
from ...application.use_cases.login_user import LoginUserUseCase
from ...application.use_cases.forgot_password_use_case import ForgotPasswordUseCase
from ...application.use_cases.reset_password_use_case import ResetPasswordUseCase
from ...application.use_cases.update_password_use_case import UpdatePasswordUseCase
from ...application.dtos.user_dtos import (
    SignupDto,
    LoginUserDto,
    AuthResponse,
    ForgotPasswordDto,
    ResetPasswordDto,
    UpdatePasswordDto,
    MessageResponse,
)
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: SignupDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Register a new user"""
    return await RegisterUserUseCase(unit_of_work).execute(user_data)


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginUserDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Login user"""
    return await LoginUserUseCase(unit_of_work).execute(login_data)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    """Issue a reset token and email it"""
    return await ForgotPasswordUseCase(unit_of_work, email_service).execute(request)


@router.patch("/reset-password/{token}", response_model=AuthResponse)
async def reset_password(
    token: str,
    request: ResetPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Reset password with token"""
    return await ResetPasswordUseCase(unit_of_work).execute(token, request)


@router.patch("/update-my-password", response_model=AuthResponse)
async def update_my_password(
    request: UpdatePasswordDto,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Change password of the logged-in user"""
    return await UpdatePasswordUseCase(unit_of_work).execute(current_user, request)
