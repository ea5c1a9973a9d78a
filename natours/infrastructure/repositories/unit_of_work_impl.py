"""Unit of Work implementation with post-commit write hooks"""

import logging
from typing import Awaitable, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...domain.exceptions import AggregationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.repositories.write_hooks import WriteHooks
from .user_repository_impl import UserRepositoryImpl
from .tour_repository_impl import TourRepositoryImpl
from .review_repository_impl import ReviewRepositoryImpl

logger = logging.getLogger(__name__)


class UnitOfWorkImpl(IUnitOfWork):

    def __init__(self, session: Session, hooks: Optional[WriteHooks] = None):
        self.session = session
        self.hooks = hooks or WriteHooks()
        self._deferred: List[Callable[[], Awaitable[None]]] = []
        self.users = UserRepositoryImpl(session)
        self.tours = TourRepositoryImpl(session)
        self.reviews = ReviewRepositoryImpl(session, self.hooks, self.defer)
        self._committed = False

    async def __aenter__(self):
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    def defer(self, callback: Callable[[], Awaitable[None]]) -> None:
        self._deferred.append(callback)

    async def commit(self) -> None:
        """Commit the write, then run deferred post-write work and commit its effects.

        The triggering write stays committed when post-write work fails; the
        failure is raised as AggregationFailure.
        """
        try:
            self.session.commit()
            self._committed = True
        except Exception as e:
            self.rollback_sync()
            raise e

        while self._deferred:
            callback = self._deferred.pop(0)
            try:
                await callback()
                self.session.commit()
            except AggregationFailure:
                self.rollback_sync()
                raise
            except SQLAlchemyError as exc:
                self.rollback_sync()
                logger.error("Post-write work failed after commit: %s", exc)
                raise AggregationFailure("Could not update derived data after write") from exc

    async def rollback(self) -> None:
        """Rollback transaction"""
        self.rollback_sync()

    def rollback_sync(self) -> None:
        """Synchronous rollback helper; pending post-write work is dropped"""
        self._deferred.clear()
        self.session.rollback()
