"""Tour ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, Float, String, Text, DateTime, Boolean, JSON, Uuid, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import TourDifficulty
from ...domain.value_objects.rating_summary import DEFAULT_RATINGS_AVERAGE


class TourModel(Base):
    __tablename__ = 'tours'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, index=True)
    name = Column(String(40), unique=True, nullable=False)
    slug = Column(String, nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    max_group_size = Column(Integer, nullable=False)
    difficulty = Column(
        SQLEnum(TourDifficulty, values_callable=lambda levels: [d.value for d in levels]),
        nullable=False
    )

    # Denormalized from reviews
    ratings_average = Column(Float, default=DEFAULT_RATINGS_AVERAGE, nullable=False)
    ratings_quantity = Column(Integer, default=0, nullable=False)

    price = Column(Float, nullable=False)
    price_discount = Column(Float, nullable=True)
    summary = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_cover = Column(String, nullable=False)
    images = Column(JSON, default=list, nullable=False)
    start_dates = Column(JSON, default=list, nullable=False)  # ISO-8601 strings
    secret_tour = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    reviews = relationship('ReviewModel', back_populates='tour', cascade='all, delete-orphan')

    __table_args__ = (
        Index('idx_tours_price_ratings_average', 'price', 'ratings_average'),
    )
