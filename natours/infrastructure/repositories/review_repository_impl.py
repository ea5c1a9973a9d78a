"""Review repository implementation using SQLAlchemy ORM

Every write goes through the registered WriteHooks: before stages run ahead of
the write, after stages are deferred to the unit of work and run once the
write has been committed.
"""

from typing import Awaitable, Callable, Optional, List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.entities.review import Review
from ...domain.enums import WriteOperation
from ...domain.exceptions import NotFound, UniquenessViolation
from ...domain.repositories.review_repository import IReviewRepository, RatingStats
from ...domain.repositories.write_hooks import WriteHooks
from ...domain.value_objects.entity_ids import ReviewId, TourId, UserId
from ..orm.review_model import ReviewModel

Defer = Callable[[Callable[[], Awaitable[None]]], None]


class ReviewRepositoryImpl(IReviewRepository):
    """Repository implementation for Review records"""

    def __init__(self, session: Session, hooks: WriteHooks, defer: Defer):
        self.session = session
        self.hooks = hooks
        self._defer = defer

    async def get_by_id(self, review_id: ReviewId) -> Optional[Review]:
        """Get review by ID"""
        model = self.session.query(ReviewModel).filter(ReviewModel.id == review_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_by_tour_id(self, tour_id: TourId) -> List[Review]:
        """Get reviews of one tour"""
        return await self.get_all(tour_id=tour_id)

    async def get_all(self, tour_id: Optional[TourId] = None, user_id: Optional[UserId] = None) -> List[Review]:
        """Get reviews, optionally filtered by tour and/or author"""
        query = self.session.query(ReviewModel)
        if tour_id is not None:
            query = query.filter(ReviewModel.tour_id == tour_id.value)
        if user_id is not None:
            query = query.filter(ReviewModel.user_id == user_id.value)
        models = query.order_by(ReviewModel.created_at, ReviewModel.id).all()
        return [self._map_to_entity(model) for model in models]

    async def add(self, review: Review) -> Review:
        """Insert a review"""
        pending = await self.hooks.run_before(WriteOperation.CREATE, review)

        self.session.add(self._create_model_from_entity(review))
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise UniquenessViolation("You have already reviewed this tour") from exc

        self._defer(pending.complete)
        return review

    async def update(self, review: Review) -> Review:
        """Update rating/text of an existing review by id"""
        pending = await self.hooks.run_before(WriteOperation.UPDATE, review.id)

        model = self.session.query(ReviewModel).filter(ReviewModel.id == review.id.value).first()
        if not model:
            raise NotFound("No review found with that ID")
        model.rating = review.rating
        model.review = review.text
        self.session.flush()

        self._defer(pending.complete)
        return review

    async def delete(self, review_id: ReviewId) -> None:
        """Delete review by id"""
        pending = await self.hooks.run_before(WriteOperation.DELETE, review_id)

        model = self.session.query(ReviewModel).filter(ReviewModel.id == review_id.value).first()
        if not model:
            raise NotFound("No review found with that ID")
        self.session.delete(model)
        self.session.flush()

        self._defer(pending.complete)

    async def rating_stats(self, tour_id: TourId) -> RatingStats:
        """Count and mean rating of a tour's reviews (group by tour)"""
        row = (
            self.session.query(
                func.count(ReviewModel.id).label("n_rating"),
                func.avg(ReviewModel.rating).label("avg_rating"),
            )
            .filter(ReviewModel.tour_id == tour_id.value)
            .group_by(ReviewModel.tour_id)
            .first()
        )
        if row is None:
            return RatingStats(count=0, mean=None)
        return RatingStats(count=int(row.n_rating), mean=float(row.avg_rating))

    def _create_model_from_entity(self, review: Review) -> ReviewModel:
        """Create ORM model from domain entity"""
        return ReviewModel(
            id=review.id.value,
            tour_id=review.tour_id.value,
            user_id=review.user_id.value,
            rating=review.rating,
            review=review.text,
            created_at=review.created_at
        )

    def _map_to_entity(self, model: ReviewModel) -> Review:
        """Map ORM model to domain entity"""
        return Review(
            id=ReviewId(model.id),
            tour_id=TourId(model.tour_id),
            user_id=UserId(model.user_id),
            rating=model.rating,
            text=model.review,
            created_at=model.created_at
        )
