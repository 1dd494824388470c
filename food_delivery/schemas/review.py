"""Review schemas"""

from datetime import datetime
from typing import Dict, Optional, List
from pydantic import BaseModel, Field

from food_delivery.schemas.common import PaginationResponse


class ReviewCreate(BaseModel):
    """Create review request"""
    restaurant_id: int
    order_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)
    food_rating: Optional[int] = Field(None, ge=1, le=5)
    delivery_rating: Optional[int] = Field(None, ge=1, le=5)


class ReviewUpdate(BaseModel):
    """Update review request; only the fields sent are changed"""
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)
    food_rating: Optional[int] = Field(None, ge=1, le=5)
    delivery_rating: Optional[int] = Field(None, ge=1, le=5)


class ReviewResponse(BaseModel):
    """Review response"""
    review_id: str
    restaurant_id: int
    order_id: str
    rating: int
    food_rating: int
    delivery_rating: int
    comment: Optional[str]
    created_at: datetime
    user_name: Optional[str] = None
    restaurant_name: Optional[str] = None

    class Config:
        from_attributes = True


class RatingSummaryResponse(BaseModel):
    average_rating: float
    average_food_rating: float
    average_delivery_rating: float
    total_reviews: int

    class Config:
        from_attributes = True


class ReviewListResponse(BaseModel):
    """Paginated reviews"""
    reviews: List[ReviewResponse]
    pagination: PaginationResponse
    summary: Optional[RatingSummaryResponse] = None

    class Config:
        from_attributes = True


class ReviewStatsResponse(BaseModel):
    """Averages and star distribution"""
    summary: RatingSummaryResponse
    rating_distribution: Dict[int, int]

    class Config:
        from_attributes = True
