"""Unit of Work interface for transaction management"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from .user_repository import IUserRepository
from .tour_repository import ITourRepository
from .review_repository import IReviewRepository
from .write_hooks import WriteHooks


class IUnitOfWork(ABC):
    """Unit of Work interface for managing transactions across repositories"""

    users: IUserRepository
    tours: ITourRepository
    reviews: IReviewRepository
    hooks: WriteHooks

    @abstractmethod
    async def __aenter__(self):
        """Enter async context"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context"""
        pass

    @abstractmethod
    async def commit(self):
        """Commit transaction, then run and commit deferred post-write work"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass

    @abstractmethod
    def defer(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Queue work to run right after the next successful commit"""
        pass
