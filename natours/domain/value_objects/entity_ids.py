"""Entity ID value objects"""

from dataclasses import dataclass
from typing import Type, TypeVar
from uuid import UUID, uuid4

IdT = TypeVar("IdT", bound="EntityId")


@dataclass(frozen=True)
class EntityId:
    """UUID identity; subclasses only name the entity"""
    value: UUID

    entity_name = "Entity"

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError(f"{self.entity_name} ID must be a valid UUID")

    @classmethod
    def generate(cls: Type[IdT]) -> IdT:
        return cls(uuid4())

    @classmethod
    def from_str(cls: Type[IdT], raw: str) -> IdT:
        """Parse a textual UUID, e.g. a JWT subject; raises ValueError if malformed"""
        return cls(UUID(raw))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId(EntityId):
    entity_name = "User"


@dataclass(frozen=True)
class TourId(EntityId):
    entity_name = "Tour"


@dataclass(frozen=True)
class ReviewId(EntityId):
    entity_name = "Review"
