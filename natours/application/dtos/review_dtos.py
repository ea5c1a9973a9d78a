"""Review DTOs for API layer"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uuid import UUID

from ...domain.entities.review import Review


class CreateReviewDto(BaseModel):
    """DTO for creating a review; tour may also come from the URL"""
    review: Optional[str] = None
    rating: Optional[int] = None
    tour_id: Optional[UUID] = None


class UpdateReviewDto(BaseModel):
    review: Optional[str] = None
    rating: Optional[int] = None


class ReviewDto(BaseModel):
    id: UUID
    tour_id: UUID
    user_id: UUID
    rating: int
    review: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewDto":
        return cls(
            id=review.id.value,
            tour_id=review.tour_id.value,
            user_id=review.user_id.value,
            rating=review.rating,
            review=review.text,
            created_at=review.created_at
        )
