"""Review ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base


class ReviewModel(Base):
    __tablename__ = 'reviews'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, index=True)
    tour_id = Column(Uuid(as_uuid=True), ForeignKey('tours.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    review = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    tour = relationship('TourModel', back_populates='reviews')
    user = relationship('UserModel', back_populates='reviews')

    # One review per user per tour
    __table_args__ = (
        UniqueConstraint('tour_id', 'user_id', name='uq_reviews_tour_user'),
    )

    def __repr__(self):
        return f"<ReviewModel(id={self.id}, tour_id={self.tour_id}, user_id={self.user_id}, rating={self.rating})>"
