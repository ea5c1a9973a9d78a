"""User DTOs for API layer"""

from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from uuid import UUID

from ...domain.entities.user import User


class SignupDto(BaseModel):
    """DTO for user registration"""
    name: str
    email: EmailStr
    password: str
    password_confirm: str
    photo: Optional[str] = None


class LoginUserDto(BaseModel):
    """DTO for user login"""
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordDto(BaseModel):
    """DTO for forgot password request"""
    email: EmailStr


class ResetPasswordDto(BaseModel):
    """DTO for reset password request; the token travels in the URL"""
    password: str
    password_confirm: str


class UpdatePasswordDto(BaseModel):
    """DTO for a logged-in user changing their password"""
    password_current: str
    password: str
    password_confirm: str


class UpdateMeDto(BaseModel):
    """DTO for self-service profile updates"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    photo: Optional[str] = None
    # Only present so that we can refuse them explicitly
    password: Optional[str] = None
    password_confirm: Optional[str] = None


class AdminUpdateUserDto(BaseModel):
    """DTO for admin updates; never touches credentials"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    photo: Optional[str] = None
    role: Optional[str] = None
    active: Optional[bool] = None


class MessageResponse(BaseModel):
    """Generic status message"""
    status: str = "success"
    message: str


class UserDto(BaseModel):
    """DTO for user response"""
    id: UUID
    name: str
    email: str
    photo: Optional[str] = None
    role: str
    active: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserDto":
        return cls(
            id=user.id.value,
            name=user.name,
            email=str(user.email),
            photo=user.photo,
            role=user.role.value,
            active=user.active,
            created_at=user.created_at
        )


class AuthResponse(BaseModel):
    """User response with bearer token"""
    status: str = "success"
    token: str
    user: UserDto
