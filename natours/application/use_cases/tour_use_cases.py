"""Tour use cases"""

from typing import List, Optional

from ..dtos.tour_dtos import CreateTourDto, UpdateTourDto, TourDto, TourDetailDto
from ..dtos.review_dtos import ReviewDto
from ...domain.entities.tour import Tour
from ...domain.enums import TourDifficulty
from ...domain.exceptions import NotFound, ValidationFailure
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import TourId

MAX_PAGE_SIZE = 100


class TourUseCases:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def list_tours(
        self,
        page: int = 1,
        limit: int = 20,
        difficulty: Optional[str] = None,
        sort: Optional[str] = None
    ) -> List[TourDto]:
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationFailure("Invalid pagination parameters")
        level = None
        if difficulty:
            try:
                level = TourDifficulty(difficulty)
            except ValueError:
                raise ValidationFailure("Difficulty is either: easy, medium, difficult")

        async with self.unit_of_work:
            tours = await self.unit_of_work.tours.get_paginated(page, limit, difficulty=level, sort=sort)
            return [TourDto.from_entity(tour) for tour in tours]

    async def get_tour(self, tour_id: TourId) -> TourDetailDto:
        async with self.unit_of_work:
            tour = await self.unit_of_work.tours.get_by_id(tour_id)
            if not tour:
                raise NotFound("No tour found with that ID")
            reviews = await self.unit_of_work.reviews.get_by_tour_id(tour_id)
            return TourDetailDto(
                **TourDto.from_entity(tour).model_dump(),
                reviews=[ReviewDto.from_entity(review) for review in reviews]
            )

    async def create_tour(self, request: CreateTourDto) -> TourDto:
        tour = Tour.create(**request.model_dump())
        async with self.unit_of_work:
            await self.unit_of_work.tours.add(tour)
            await self.unit_of_work.commit()
            return TourDto.from_entity(tour)

    async def update_tour(self, tour_id: TourId, request: UpdateTourDto) -> TourDto:
        async with self.unit_of_work:
            tour = await self.unit_of_work.tours.get_by_id(tour_id, include_secret=True)
            if not tour:
                raise NotFound("No tour found with that ID")
            tour.update_details(**request.model_dump(exclude_unset=True))
            await self.unit_of_work.tours.update(tour)
            await self.unit_of_work.commit()
            return TourDto.from_entity(tour)

    async def delete_tour(self, tour_id: TourId) -> None:
        async with self.unit_of_work:
            if not await self.unit_of_work.tours.delete(tour_id):
                raise NotFound("No tour found with that ID")
            await self.unit_of_work.commit()
