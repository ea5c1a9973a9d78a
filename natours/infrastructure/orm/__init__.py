"""Infrastructure ORM Models"""

from .user_model import UserModel
from .tour_model import TourModel
from .review_model import ReviewModel

__all__ = [
    'UserModel',
    'TourModel',
    'ReviewModel',
]
