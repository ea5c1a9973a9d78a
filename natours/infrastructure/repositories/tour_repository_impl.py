"""Tour repository implementation using SQLAlchemy ORM"""

import logging
from datetime import datetime
from typing import Optional, List

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.entities.tour import Tour
from ...domain.enums import TourDifficulty
from ...domain.exceptions import UniquenessViolation, ValidationFailure
from ...domain.repositories.tour_repository import ITourRepository
from ...domain.value_objects.entity_ids import TourId
from ...domain.value_objects.rating_summary import RatingSummary
from ..orm.tour_model import TourModel

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "price": TourModel.price,
    "ratings_average": TourModel.ratings_average,
    "ratings_quantity": TourModel.ratings_quantity,
    "duration": TourModel.duration,
    "name": TourModel.name,
    "created_at": TourModel.created_at,
}


class TourRepositoryImpl(ITourRepository):
    """Repository implementation for Tour aggregate"""

    def __init__(self, session: Session):
        self.session = session

    def _query(self, include_secret: bool):
        query = self.session.query(TourModel)
        if not include_secret:
            query = query.filter(TourModel.secret_tour.is_(False))
        return query

    async def get_by_id(self, tour_id: TourId, include_secret: bool = False) -> Optional[Tour]:
        """Get tour by ID"""
        model = self._query(include_secret).filter(TourModel.id == tour_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_paginated(
        self,
        page: int,
        limit: int,
        difficulty: Optional[TourDifficulty] = None,
        sort: Optional[str] = None,
        include_secret: bool = False
    ) -> List[Tour]:
        """Get tours, e.g. sort="-ratings_average,price" """
        query = self._query(include_secret)
        if difficulty is not None:
            query = query.filter(TourModel.difficulty == difficulty)
        query = query.order_by(*self._order_by(sort))
        models = query.offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    def _order_by(self, sort: Optional[str]):
        if not sort:
            return [TourModel.created_at.desc(), TourModel.name]
        clauses = []
        for key in sort.split(","):
            key = key.strip()
            descending = key.startswith("-")
            column = SORTABLE_FIELDS.get(key.lstrip("-"))
            if column is None:
                raise ValidationFailure(f"Cannot sort tours by '{key}'")
            clauses.append(column.desc() if descending else column.asc())
        return clauses

    async def add(self, tour: Tour) -> Tour:
        """Add a new tour"""
        self.session.add(self._create_model_from_entity(tour))
        self._flush_unique()
        return tour

    async def update(self, tour: Tour) -> Tour:
        """Update tour details; ratings are left to update_ratings"""
        existing = self.session.query(TourModel).filter(TourModel.id == tour.id.value).first()
        if existing:
            self._update_model_from_entity(existing, tour)
            self._flush_unique()
        return tour

    async def delete(self, tour_id: TourId) -> bool:
        """Delete tour together with its reviews"""
        model = self.session.query(TourModel).filter(TourModel.id == tour_id.value).first()
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    async def update_ratings(self, tour_id: TourId, ratings: RatingSummary) -> bool:
        """Single UPDATE of both summary columns"""
        result = self.session.execute(
            update(TourModel)
            .where(TourModel.id == tour_id.value)
            .values(ratings_quantity=ratings.quantity, ratings_average=ratings.average)
            .execution_options(synchronize_session="fetch")
        )
        self.session.flush()
        if result.rowcount == 0:
            logger.warning("Ratings not stored, tour %s no longer exists", tour_id)
            return False
        return True

    def _flush_unique(self) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise UniquenessViolation("A tour with this name already exists") from exc

    def _create_model_from_entity(self, tour: Tour) -> TourModel:
        """Create ORM model from domain entity"""
        model = TourModel(
            id=tour.id.value,
            ratings_average=tour.ratings.average,
            ratings_quantity=tour.ratings.quantity,
            created_at=tour.created_at
        )
        self._update_model_from_entity(model, tour)
        return model

    def _update_model_from_entity(self, model: TourModel, tour: Tour) -> None:
        """Update ORM model from domain entity"""
        model.name = tour.name
        model.slug = tour.slug
        model.duration = tour.duration
        model.max_group_size = tour.max_group_size
        model.difficulty = tour.difficulty
        model.price = tour.price
        model.price_discount = tour.price_discount
        model.summary = tour.summary
        model.description = tour.description
        model.image_cover = tour.image_cover
        model.images = list(tour.images)
        model.start_dates = [moment.isoformat() for moment in tour.start_dates]
        model.secret_tour = tour.secret_tour

    def _map_to_entity(self, model: TourModel) -> Tour:
        """Map ORM model to domain entity"""
        return Tour(
            id=TourId(model.id),
            name=model.name,
            slug=model.slug,
            duration=model.duration,
            max_group_size=model.max_group_size,
            difficulty=TourDifficulty(model.difficulty),
            price=model.price,
            summary=model.summary,
            image_cover=model.image_cover,
            price_discount=model.price_discount,
            description=model.description,
            images=list(model.images or []),
            start_dates=[datetime.fromisoformat(value) for value in (model.start_dates or [])],
            secret_tour=model.secret_tour,
            ratings=RatingSummary(
                quantity=model.ratings_quantity,
                average=model.ratings_average
            ),
            created_at=model.created_at
        )
