"""Review entity"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects.entity_ids import ReviewId, TourId, UserId
from ..value_objects.rating_summary import MIN_RATING, MAX_RATING
from ..exceptions import ValidationFailure


def _validate_rating(rating) -> int:
    if rating is None:
        raise ValidationFailure("A review must have a rating")
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationFailure("Rating must be a whole number")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailure("Rating must be between 1 and 5")
    return rating


def _validate_text(text: Optional[str]) -> str:
    text = (text or "").strip()
    if not text:
        raise ValidationFailure("Review can not be empty!")
    return text


@dataclass
class Review:
    id: ReviewId
    tour_id: TourId
    user_id: UserId
    rating: int
    text: str
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(cls, tour_id: TourId, user_id: UserId, rating: int, text: str) -> 'Review':
        """Factory method checking rating bounds and text presence"""
        if tour_id is None:
            raise ValidationFailure("Review must belong to a tour.")
        if user_id is None:
            raise ValidationFailure("Review must belong to a user.")
        return cls(
            id=ReviewId.generate(),
            tour_id=tour_id,
            user_id=user_id,
            rating=_validate_rating(rating),
            text=_validate_text(text),
            created_at=datetime.utcnow()
        )

    def revise(self, rating: Optional[int] = None, text: Optional[str] = None) -> None:
        """Business logic: edit rating and/or text"""
        if rating is not None:
            self.rating = _validate_rating(rating)
        if text is not None:
            self.text = _validate_text(text)

    def is_written_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id


@dataclass(frozen=True)
class ReviewRef:
    """Identity of a review and its tour, captured before a mutating write."""
    review_id: ReviewId
    tour_id: TourId
