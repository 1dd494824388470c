"""Restaurant browsing API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.config import settings
from food_delivery.database import get_db
from food_delivery.schemas.restaurant import (
    MenuSectionResponse,
    OperatingHours,
    RestaurantDetailResponse,
    RestaurantInfo,
    RestaurantListResponse,
    SearchResponse,
)
from food_delivery.schemas.review import ReviewListResponse
from food_delivery.services import restaurants, reviews

router = APIRouter()


@router.get("", response_model=RestaurantListResponse)
async def list_restaurants(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(5, gt=0, le=settings.max_delivery_distance_km),
    cuisine: Optional[str] = None,
    search: Optional[str] = None,
    veg_only: bool = False,
    rating: Optional[float] = Query(None, ge=0, le=5),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List open restaurants near a location"""
    page_data = await restaurants.list_restaurants(
        db,
        lat,
        lng,
        radius_km=radius,
        cuisine=cuisine,
        search=search,
        veg_only=veg_only,
        min_rating=rating,
        page=page,
        limit=limit,
    )
    return RestaurantListResponse.model_validate(page_data)


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str = Query(..., min_length=1, max_length=100),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Search restaurants and dishes"""
    results = await restaurants.search(db, query, lat=lat, lng=lng, limit=limit)
    return SearchResponse.model_validate(results)


@router.get("/{restaurant_id}", response_model=RestaurantDetailResponse)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant details with menu"""
    details = await restaurants.get_restaurant_details(db, restaurant_id)
    restaurant = details.restaurant

    return RestaurantDetailResponse(
        restaurant=RestaurantInfo(
            id=restaurant.id,
            name=restaurant.name,
            description=restaurant.description,
            cuisine=list(restaurant.cuisine_types or []),
            rating=restaurant.rating or 0,
            total_reviews=restaurant.total_reviews or 0,
            address=details.address,
            operating_hours=OperatingHours(
                opening=restaurant.opening_time,
                closing=restaurant.closing_time,
            ),
            min_order_amount_cents=restaurant.min_order_amount_cents,
            delivery_fee_cents=restaurant.delivery_fee_cents,
            avg_preparation_time=restaurant.avg_preparation_time,
            is_open=details.is_open,
            is_veg_only=bool(restaurant.is_veg_only),
            image_url=restaurant.image_url,
            phone=restaurant.phone,
            email=restaurant.email,
        ),
        menu=[MenuSectionResponse.model_validate(section) for section in details.menu],
    )


@router.get("/{restaurant_id}/reviews", response_model=ReviewListResponse)
async def get_restaurant_reviews(
    restaurant_id: int,
    sort: str = Query("newest", pattern="^(newest|oldest|rating_high|rating_low)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List reviews of a restaurant"""
    page_data = await reviews.list_restaurant_reviews(db, restaurant_id, sort=sort, page=page, limit=limit)
    return ReviewListResponse.model_validate(page_data)
