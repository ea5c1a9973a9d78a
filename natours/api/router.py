"""Main API router for DDD architecture"""

from fastapi import APIRouter

from .routes import auth, users, tours, reviews
from ..core.config import settings

# Main API router
api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(tours.router, prefix="/tours", tags=["tours"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.VERSION}
