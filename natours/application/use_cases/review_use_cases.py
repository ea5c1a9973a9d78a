"""Review use cases

Tour rating summaries are not touched here: the RatingAggregator hooked into
the unit of work recomputes them when each write is committed.
"""

from typing import List, Optional

from ..dtos.review_dtos import CreateReviewDto, UpdateReviewDto, ReviewDto
from ...domain.entities.review import Review
from ...domain.entities.user import User
from ...domain.exceptions import NotFound, PermissionDenied, ValidationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ReviewId, TourId


class ReviewUseCases:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def list_reviews(self, tour_id: Optional[TourId] = None) -> List[ReviewDto]:
        async with self.unit_of_work:
            reviews = await self.unit_of_work.reviews.get_all(tour_id=tour_id)
            return [ReviewDto.from_entity(review) for review in reviews]

    async def get_review(self, review_id: ReviewId) -> ReviewDto:
        async with self.unit_of_work:
            review = await self.unit_of_work.reviews.get_by_id(review_id)
            if not review:
                raise NotFound("No review found with that ID")
            return ReviewDto.from_entity(review)

    async def create_review(
        self,
        current_user: User,
        request: CreateReviewDto,
        tour_id: Optional[TourId] = None
    ) -> ReviewDto:
        # Nested route wins over the body
        if tour_id is None and request.tour_id is not None:
            tour_id = TourId(request.tour_id)
        if tour_id is None:
            raise ValidationFailure("Review must belong to a tour.")

        async with self.unit_of_work:
            if not await self.unit_of_work.tours.get_by_id(tour_id):
                raise NotFound("No tour found with that ID")

            review = Review.create(
                tour_id=tour_id,
                user_id=current_user.id,
                rating=request.rating,
                text=request.review
            )
            await self.unit_of_work.reviews.add(review)
            await self.unit_of_work.commit()
            return ReviewDto.from_entity(review)

    async def _owned_review(self, current_user: User, review_id: ReviewId) -> Review:
        review = await self.unit_of_work.reviews.get_by_id(review_id)
        if not review:
            raise NotFound("No review found with that ID")
        if not (current_user.is_admin or review.is_written_by(current_user.id)):
            raise PermissionDenied("You can only change your own reviews")
        return review

    async def update_review(
        self,
        current_user: User,
        review_id: ReviewId,
        request: UpdateReviewDto
    ) -> ReviewDto:
        async with self.unit_of_work:
            review = await self._owned_review(current_user, review_id)
            review.revise(rating=request.rating, text=request.review)
            await self.unit_of_work.reviews.update(review)
            await self.unit_of_work.commit()
            return ReviewDto.from_entity(review)

    async def delete_review(self, current_user: User, review_id: ReviewId) -> None:
        async with self.unit_of_work:
            await self._owned_review(current_user, review_id)
            await self.unit_of_work.reviews.delete(review_id)
            await self.unit_of_work.commit()
