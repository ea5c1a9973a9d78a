"""Review routes, also mounted under /tours/{tour_id}/reviews"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_unit_of_work, get_current_user, restrict_to
from ...application.dtos.review_dtos import CreateReviewDto, UpdateReviewDto, ReviewDto
from ...application.use_cases.review_use_cases import ReviewUseCases
from ...domain.entities.user import User
from ...domain.enums import UserRole
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ReviewId, TourId

router = APIRouter()


@router.get("/", response_model=List[ReviewDto])
async def list_reviews(
    tour_id: Optional[UUID] = None,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """List reviews, optionally of one tour"""
    return await ReviewUseCases(unit_of_work).list_reviews(TourId(tour_id) if tour_id else None)


@router.post("/", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: CreateReviewDto,
    tour_id: Optional[UUID] = None,
    current_user: User = Depends(restrict_to(UserRole.USER)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Create a review as the logged-in user"""
    return await ReviewUseCases(unit_of_work).create_review(
        current_user, request, TourId(tour_id) if tour_id else None
    )


@router.get("/{review_id}", response_model=ReviewDto)
async def get_review(
    review_id: UUID,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await ReviewUseCases(unit_of_work).get_review(ReviewId(review_id))


@router.patch("/{review_id}", response_model=ReviewDto)
async def update_review(
    review_id: UUID,
    request: UpdateReviewDto,
    current_user: User = Depends(restrict_to(UserRole.USER, UserRole.ADMIN)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await ReviewUseCases(unit_of_work).update_review(current_user, ReviewId(review_id), request)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(restrict_to(UserRole.USER, UserRole.ADMIN)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    await ReviewUseCases(unit_of_work).delete_review(current_user, ReviewId(review_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
