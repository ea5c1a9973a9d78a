"""Keeps a tour's ratings quantity/average in step with its reviews"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ...domain.entities.review import Review, ReviewRef
from ...domain.enums import WriteOperation
from ...domain.exceptions import AggregationFailure
from ...domain.repositories.review_repository import IReviewRepository
from ...domain.repositories.tour_repository import ITourRepository
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.repositories.write_hooks import WriteHooks
from ...domain.value_objects.entity_ids import ReviewId, TourId
from ...domain.value_objects.rating_summary import RatingSummary

logger = logging.getLogger(__name__)


class RatingAggregator:
    """Recomputes the full summary on every review write; no incremental deltas."""

    def __init__(self, reviews: IReviewRepository, tours: ITourRepository):
        self.reviews = reviews
        self.tours = tours

    @classmethod
    def for_unit_of_work(cls, unit_of_work: IUnitOfWork) -> "RatingAggregator":
        aggregator = cls(unit_of_work.reviews, unit_of_work.tours)
        aggregator.attach(unit_of_work.hooks)
        return aggregator

    def attach(self, hooks: WriteHooks) -> None:
        hooks.register(WriteOperation.CREATE, after=self._after_create)
        hooks.register(WriteOperation.UPDATE, before=self.capture, after=self._after_change)
        hooks.register(WriteOperation.DELETE, before=self.capture, after=self._after_change)

    async def recompute_ratings(self, tour_id: TourId) -> RatingSummary:
        try:
            stats = await self.reviews.rating_stats(tour_id)
            summary = RatingSummary.from_stats(stats.count, stats.mean or 0)
            await self.tours.update_ratings(tour_id, summary)
        except SQLAlchemyError as exc:
            logger.error("Ratings recomputation failed for tour %s: %s", tour_id, exc)
            raise AggregationFailure(f"Could not recompute ratings for tour {tour_id}") from exc

        logger.debug(
            "Tour %s ratings: quantity=%s average=%s", tour_id, summary.quantity, summary.average
        )
        return summary

    async def capture(self, review_id: ReviewId) -> Optional[ReviewRef]:
        """Read the review before it is changed; its tour is unknown afterwards."""
        try:
            review = await self.reviews.get_by_id(review_id)
        except SQLAlchemyError as exc:
            raise AggregationFailure(f"Could not read review {review_id}") from exc
        if review is None:
            return None
        return ReviewRef(review_id=review.id, tour_id=review.tour_id)

    async def _after_create(self, review: Review) -> None:
        await self.recompute_ratings(review.tour_id)

    async def _after_change(self, ref: Optional[ReviewRef]) -> None:
        if ref is None:
            return
        await self.recompute_ratings(ref.tour_id)
