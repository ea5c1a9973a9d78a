"""Tour repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.tour import Tour
from ..enums import TourDifficulty
from ..value_objects.entity_ids import TourId
from ..value_objects.rating_summary import RatingSummary


class ITourRepository(ABC):
    """Reads hide secret tours unless ``include_secret`` is set."""

    @abstractmethod
    def get_by_id(self, tour_id: TourId, include_secret: bool = False) -> Optional[Tour]:
        pass

    @abstractmethod
    def get_paginated(
        self,
        page: int,
        limit: int,
        difficulty: Optional[TourDifficulty] = None,
        sort: Optional[str] = None,
        include_secret: bool = False
    ) -> List[Tour]:
        pass

    @abstractmethod
    def add(self, tour: Tour) -> Tour:
        pass

    @abstractmethod
    def update(self, tour: Tour) -> Tour:
        pass

    @abstractmethod
    def delete(self, tour_id: TourId) -> bool:
        pass

    @abstractmethod
    def update_ratings(self, tour_id: TourId, ratings: RatingSummary) -> bool:
        """Write quantity and average in a single update"""
        pass
