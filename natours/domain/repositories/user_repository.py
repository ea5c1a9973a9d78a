"""User repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.user import User
from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId


class IUserRepository(ABC):
    """Reads hide deactivated accounts unless ``include_inactive`` is set."""

    @abstractmethod
    def get_by_id(self, user_id: UserId, include_inactive: bool = False) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: Email, include_inactive: bool = False) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Get user holding this pending reset token hash, expired or not"""
        pass

    @abstractmethod
    def add(self, user: User) -> User:
        pass

    @abstractmethod
    def update(self, user: User) -> User:
        pass

    @abstractmethod
    def delete(self, user_id: UserId) -> bool:
        pass

    @abstractmethod
    def exists_by_email(self, email: Email) -> bool:
        pass

    @abstractmethod
    def get_paginated(self, page: int, limit: int, include_inactive: bool = False) -> List[User]:
        pass
