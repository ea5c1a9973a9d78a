"""Tour routes"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_unit_of_work, get_current_user, restrict_to
from ...application.dtos.tour_dtos import CreateTourDto, UpdateTourDto, TourDto, TourDetailDto
from ...application.dtos.review_dtos import CreateReviewDto, ReviewDto
from ...application.use_cases.tour_use_cases import TourUseCases
from ...application.use_cases.review_use_cases import ReviewUseCases
from ...domain.entities.user import User
from ...domain.enums import UserRole
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import TourId

router = APIRouter()

manage_tours = restrict_to(UserRole.ADMIN, UserRole.LEAD_GUIDE)


@router.get("/", response_model=List[TourDto])
async def list_tours(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    difficulty: Optional[str] = None,
    sort: Optional[str] = Query(None, description="Comma separated fields, prefix with - for descending"),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """List public tours"""
    return await TourUseCases(unit_of_work).list_tours(page, limit, difficulty, sort)


@router.get("/{tour_id}", response_model=TourDetailDto)
async def get_tour(
    tour_id: UUID,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Get tour with its reviews"""
    return await TourUseCases(unit_of_work).get_tour(TourId(tour_id))


@router.post("/", response_model=TourDto, status_code=status.HTTP_201_CREATED)
async def create_tour(
    request: CreateTourDto,
    current_user: User = Depends(manage_tours),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await TourUseCases(unit_of_work).create_tour(request)


@router.patch("/{tour_id}", response_model=TourDto)
async def update_tour(
    tour_id: UUID,
    request: UpdateTourDto,
    current_user: User = Depends(manage_tours),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await TourUseCases(unit_of_work).update_tour(TourId(tour_id), request)


@router.delete("/{tour_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tour(
    tour_id: UUID,
    current_user: User = Depends(manage_tours),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Delete tour together with its reviews"""
    await TourUseCases(unit_of_work).delete_tour(TourId(tour_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{tour_id}/reviews", response_model=List[ReviewDto])
async def list_tour_reviews(
    tour_id: UUID,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await ReviewUseCases(unit_of_work).list_reviews(TourId(tour_id))


@router.post("/{tour_id}/reviews", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
async def create_tour_review(
    tour_id: UUID,
    request: CreateReviewDto,
    current_user: User = Depends(restrict_to(UserRole.USER)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Review a tour; the tour in the path overrides any tour_id in the body"""
    return await ReviewUseCases(unit_of_work).create_review(current_user, request, TourId(tour_id))
