"""Review repository interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List

from ..entities.review import Review
from ..value_objects.entity_ids import ReviewId, TourId, UserId


@dataclass(frozen=True)
class RatingStats:
    """Result of the count/mean group-by over one tour's reviews"""
    count: int
    mean: Optional[float]


class IReviewRepository(ABC):

    @abstractmethod
    def get_by_id(self, review_id: ReviewId) -> Optional[Review]:
        pass

    @abstractmethod
    def get_by_tour_id(self, tour_id: TourId) -> List[Review]:
        pass

    @abstractmethod
    def get_all(self, tour_id: Optional[TourId] = None, user_id: Optional[UserId] = None) -> List[Review]:
        pass

    @abstractmethod
    def add(self, review: Review) -> Review:
        """Insert; raises UniquenessViolation for a second (tour, user) review"""
        pass

    @abstractmethod
    def update(self, review: Review) -> Review:
        pass

    @abstractmethod
    def delete(self, review_id: ReviewId) -> None:
        pass

    @abstractmethod
    def rating_stats(self, tour_id: TourId) -> RatingStats:
        pass
