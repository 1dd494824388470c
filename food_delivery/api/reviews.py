"""Review API endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.auth import get_current_user
from food_delivery.database import get_db
from food_delivery.models.user import User
from food_delivery.schemas.common import MessageResponse
from food_delivery.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewStatsResponse,
    ReviewUpdate,
)
from food_delivery.services import reviews

router = APIRouter()


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Review a delivered order"""
    review = await reviews.create_review(
        db,
        current_user.id,
        restaurant_id=review_data.restaurant_id,
        order_id=review_data.order_id,
        rating=review_data.rating,
        comment=review_data.comment,
        food_rating=review_data.food_rating,
        delivery_rating=review_data.delivery_rating,
    )
    return ReviewResponse.model_validate(review)


@router.get("/user", response_model=ReviewListResponse)
async def list_my_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's reviews"""
    page_data = await reviews.list_user_reviews(db, current_user.id, page=page, limit=limit)
    return ReviewListResponse.model_validate(page_data)


@router.get("/restaurant/{restaurant_id}", response_model=ReviewListResponse)
async def list_restaurant_reviews(
    restaurant_id: int,
    sort: str = Query("newest", pattern="^(newest|oldest|rating_high|rating_low)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List reviews of a restaurant"""
    page_data = await reviews.list_restaurant_reviews(db, restaurant_id, sort=sort, page=page, limit=limit)
    return ReviewListResponse.model_validate(page_data)


@router.get("/restaurant/{restaurant_id}/stats", response_model=ReviewStatsResponse)
async def review_stats(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Rating averages and star distribution"""
    stats = await reviews.get_review_stats(db, restaurant_id)
    return ReviewStatsResponse.model_validate(stats)


@router.put("/{review_id}", response_model=MessageResponse)
async def update_review(
    review_id: str,
    review_data: ReviewUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Edit a review within the edit window"""
    await reviews.update_review(
        db, current_user.id, review_id, review_data.model_dump(exclude_unset=True, exclude_none=True)
    )
    return MessageResponse(message="Review updated successfully")


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a review within the edit window"""
    await reviews.delete_review(db, current_user.id, review_id)
    return MessageResponse(message="Review deleted successfully")
