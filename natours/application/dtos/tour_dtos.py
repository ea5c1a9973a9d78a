"""Tour DTOs for API layer"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from ...domain.entities.tour import Tour
from .review_dtos import ReviewDto


class CreateTourDto(BaseModel):
    """DTO for tour creation; invariants are checked by the Tour factory"""
    name: str
    duration: int
    max_group_size: int
    difficulty: str
    price: float
    summary: str
    image_cover: str
    price_discount: Optional[float] = None
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    start_dates: List[datetime] = Field(default_factory=list)
    secret_tour: bool = False


class UpdateTourDto(BaseModel):
    """Partial update; rating fields are deliberately absent"""
    name: Optional[str] = None
    duration: Optional[int] = None
    max_group_size: Optional[int] = None
    difficulty: Optional[str] = None
    price: Optional[float] = None
    summary: Optional[str] = None
    image_cover: Optional[str] = None
    price_discount: Optional[float] = None
    description: Optional[str] = None
    images: Optional[List[str]] = None
    start_dates: Optional[List[datetime]] = None
    secret_tour: Optional[bool] = None


class TourDto(BaseModel):
    id: UUID
    name: str
    slug: str
    duration: int
    duration_weeks: float
    max_group_size: int
    difficulty: str
    price: float
    price_discount: Optional[float] = None
    summary: str
    description: Optional[str] = None
    image_cover: str
    images: List[str]
    start_dates: List[datetime]
    ratings_quantity: int
    ratings_average: float

    @classmethod
    def from_entity(cls, tour: Tour) -> "TourDto":
        return cls(
            id=tour.id.value,
            name=tour.name,
            slug=tour.slug,
            duration=tour.duration,
            duration_weeks=tour.duration_weeks,
            max_group_size=tour.max_group_size,
            difficulty=tour.difficulty.value,
            price=tour.price,
            price_discount=tour.price_discount,
            summary=tour.summary,
            description=tour.description,
            image_cover=tour.image_cover,
            images=tour.images,
            start_dates=tour.start_dates,
            ratings_quantity=tour.ratings.quantity,
            ratings_average=tour.ratings.average
        )


class TourDetailDto(TourDto):
    reviews: List[ReviewDto] = Field(default_factory=list)
