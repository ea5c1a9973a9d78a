"""Tour entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from ..value_objects.entity_ids import TourId
from ..value_objects.rating_summary import RatingSummary
from ..enums import TourDifficulty
from ..exceptions import ValidationFailure
from ..slugs import slugify

NAME_MIN_LENGTH = 10
NAME_MAX_LENGTH = 40


def _validate_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("A tour must have a name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationFailure("A tour name must have less or equal than 40 characters")
    if len(name) < NAME_MIN_LENGTH:
        raise ValidationFailure("A tour name must have more or equal than 10 characters")
    return name


def _validate_difficulty(difficulty) -> TourDifficulty:
    try:
        return TourDifficulty(difficulty)
    except ValueError:
        raise ValidationFailure("Difficulty is either: easy, medium, difficult")


@dataclass
class Tour:
    id: TourId
    name: str
    slug: str
    duration: int
    max_group_size: int
    difficulty: TourDifficulty
    price: float
    summary: str
    image_cover: str
    price_discount: Optional[float] = None
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)
    start_dates: List[datetime] = field(default_factory=list)
    secret_tour: bool = False

    # Derived from reviews, written only by RatingAggregator
    ratings: RatingSummary = field(default_factory=RatingSummary.empty)

    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        name: str,
        duration: int,
        max_group_size: int,
        difficulty,
        price: float,
        summary: str,
        image_cover: str,
        price_discount: Optional[float] = None,
        description: Optional[str] = None,
        images: Optional[List[str]] = None,
        start_dates: Optional[List[datetime]] = None,
        secret_tour: bool = False
    ) -> 'Tour':
        """Factory method enforcing every tour invariant"""
        tour = cls(
            id=TourId.generate(),
            name=_validate_name(name),
            slug="",
            duration=duration,
            max_group_size=max_group_size,
            difficulty=_validate_difficulty(difficulty),
            price=price,
            summary=(summary or "").strip(),
            image_cover=image_cover,
            price_discount=price_discount,
            description=description.strip() if description else None,
            images=list(images or []),
            start_dates=list(start_dates or []),
            secret_tour=secret_tour,
            ratings=RatingSummary.empty(),
            created_at=datetime.utcnow()
        )
        tour.slug = slugify(tour.name)
        tour.check_invariants()
        return tour

    def check_invariants(self) -> None:
        if not self.duration or self.duration <= 0:
            raise ValidationFailure("A tour must have a duration")
        if not self.max_group_size or self.max_group_size <= 0:
            raise ValidationFailure("A tour must have a group size")
        if self.price is None or self.price <= 0:
            raise ValidationFailure("A tour must have a price")
        if not self.summary:
            raise ValidationFailure("A tour must have a summary")
        if not self.image_cover:
            raise ValidationFailure("A tour must have a cover image")
        if self.price_discount is not None and self.price_discount >= self.price:
            raise ValidationFailure(
                f"Discount price ({self.price_discount}) should be below the regular price"
            )

    def update_details(self, **changes) -> None:
        """Business logic: apply a partial update, ratings excluded"""
        changes.pop("ratings", None)
        if "name" in changes:
            self.name = _validate_name(changes.pop("name"))
            self.slug = slugify(self.name)
        if "difficulty" in changes:
            self.difficulty = _validate_difficulty(changes.pop("difficulty"))
        for key, value in changes.items():
            if not hasattr(self, key) or key in ("id", "slug", "created_at"):
                raise ValidationFailure(f"Unknown tour field: {key}")
            setattr(self, key, value)
        self.check_invariants()

    @property
    def duration_weeks(self) -> float:
        return self.duration / 7
