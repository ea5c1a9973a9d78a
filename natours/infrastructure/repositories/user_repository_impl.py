"""User repository implementation using SQLAlchemy ORM"""

from typing import Optional, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User
from ...domain.exceptions import UniquenessViolation
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId
from ...domain.enums import UserRole
from ..orm.user_model import UserModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    def _query(self, include_inactive: bool):
        query = self.session.query(UserModel)
        if not include_inactive:
            query = query.filter(UserModel.active.is_(True))
        return query

    async def get_by_id(self, user_id: UserId, include_inactive: bool = False) -> Optional[User]:
        """Get user by ID"""
        model = self._query(include_inactive).filter(UserModel.id == user_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: Email, include_inactive: bool = False) -> Optional[User]:
        """Get user by email"""
        model = self._query(include_inactive).filter(UserModel.email == str(email)).first()
        return self._map_to_entity(model) if model else None

    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Get active user by pending reset token hash; expiry is judged by the caller"""
        model = self._query(include_inactive=False).filter(
            UserModel.password_reset_token_hash == token_hash
        ).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: Email) -> bool:
        """Check if user exists by email, deactivated accounts included"""
        return self._query(include_inactive=True).filter(UserModel.email == str(email)).first() is not None

    async def add(self, user: User) -> User:
        """Add a new user"""
        model = self._create_model_from_entity(user)
        self.session.add(model)
        self._flush_unique("This email is already in use")
        return user

    async def update(self, user: User) -> User:
        """Update an existing user"""
        existing = self.session.query(UserModel).filter(UserModel.id == user.id.value).first()
        if existing:
            self._update_model_from_entity(existing, user)
            self._flush_unique("This email is already in use")
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Hard-delete user"""
        model = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    async def get_paginated(self, page: int, limit: int, include_inactive: bool = False) -> List[User]:
        """Get paginated users"""
        offset = (page - 1) * limit
        models = (
            self._query(include_inactive)
            .order_by(UserModel.created_at, UserModel.email)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    def _flush_unique(self, message: str) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise UniquenessViolation(message) from exc

    def _create_model_from_entity(self, user: User) -> UserModel:
        """Create ORM model from domain entity"""
        return UserModel(
            id=user.id.value,
            name=user.name,
            email=str(user.email),
            photo=user.photo,
            role=user.role,
            active=user.active,
            hashed_password=user.hashed_password,
            password_changed_at=user.password_changed_at,
            password_reset_token_hash=user.password_reset_token_hash,
            password_reset_expires_at=user.password_reset_expires_at,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        """Update ORM model from domain entity"""
        model.name = user.name
        model.email = str(user.email)
        model.photo = user.photo
        model.role = user.role
        model.active = user.active
        model.hashed_password = user.hashed_password
        model.password_changed_at = user.password_changed_at
        model.password_reset_token_hash = user.password_reset_token_hash
        model.password_reset_expires_at = user.password_reset_expires_at
        model.updated_at = user.updated_at

    def _map_to_entity(self, model: UserModel) -> User:
        """Map ORM model to domain entity"""
        return User(
            id=UserId(model.id),
            name=model.name,
            email=Email(model.email),
            hashed_password=model.hashed_password,
            role=UserRole(model.role),
            photo=model.photo,
            active=model.active,
            password_changed_at=model.password_changed_at,
            password_reset_token_hash=model.password_reset_token_hash,
            password_reset_expires_at=model.password_reset_expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
