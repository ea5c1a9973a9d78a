"""Rating summary value object embedded in a tour"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from ..exceptions import ValidationFailure

DEFAULT_RATINGS_AVERAGE = 4.5
MIN_RATING = 1
MAX_RATING = 5


def round_rating(value: float) -> float:
    """Round half-up to one decimal place (4.65 -> 4.7)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class RatingSummary:
    quantity: int = 0
    average: float = DEFAULT_RATINGS_AVERAGE

    def __post_init__(self):
        if self.quantity < 0:
            raise ValidationFailure("Ratings quantity cannot be negative")
        average = round_rating(self.average)
        if not MIN_RATING <= average <= MAX_RATING:
            raise ValidationFailure("Rating must be between 1.0 and 5.0")
        object.__setattr__(self, "average", average)

    @classmethod
    def empty(cls) -> "RatingSummary":
        """Summary of a tour nobody has reviewed yet."""
        return cls(quantity=0, average=DEFAULT_RATINGS_AVERAGE)

    @classmethod
    def from_stats(cls, count: int, mean: float) -> "RatingSummary":
        if count == 0:
            return cls.empty()
        return cls(quantity=count, average=mean)
