"""User entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId
from ..enums import UserRole
from ..exceptions import ValidationFailure


@dataclass
class User:
    id: UserId
    name: str
    email: Email
    hashed_password: Optional[str] = None
    role: UserRole = UserRole.USER
    photo: Optional[str] = None
    active: bool = True

    # Credential lifecycle, managed by CredentialStore
    password_changed_at: Optional[datetime] = None
    password_reset_token_hash: Optional[str] = None
    password_reset_expires_at: Optional[datetime] = None

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        name: str,
        email: Email,
        role: UserRole = UserRole.USER,
        photo: Optional[str] = None
    ) -> 'User':
        """Factory method to create a new user without a password yet"""
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Please tell us your name")

        return cls(
            id=UserId.generate(),
            name=name,
            email=email,
            role=role,
            photo=photo,
            active=True,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow()
        )

    @property
    def has_password(self) -> bool:
        return bool(self.hashed_password)

    @property
    def has_pending_reset(self) -> bool:
        return self.password_reset_token_hash is not None

    def clear_password_reset_token(self) -> None:
        """Business logic: clear password reset token"""
        self.password_reset_token_hash = None
        self.password_reset_expires_at = None
        self.updated_at = datetime.utcnow()

    def update_profile(
        self,
        name: Optional[str] = None,
        email: Optional[Email] = None,
        photo: Optional[str] = None
    ) -> None:
        """Business logic: update non-credential profile fields"""
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationFailure("Please tell us your name")
            self.name = name
        if email is not None:
            self.email = email
        if photo is not None:
            self.photo = photo
        self.updated_at = datetime.utcnow()

    def deactivate(self) -> None:
        """Business logic: soft-delete the account"""
        self.active = False
        self.updated_at = datetime.utcnow()

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
