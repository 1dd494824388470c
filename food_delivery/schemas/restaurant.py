"""Restaurant, menu and search schemas"""

from typing import Optional, List
from pydantic import BaseModel

from food_delivery.schemas.common import PaginationResponse


class RestaurantSummary(BaseModel):
    """Restaurant in a nearby listing"""
    id: int
    name: str
    cuisine: List[str]
    rating: float
    avg_delivery_time: str
    min_order_amount_cents: int
    delivery_fee_cents: int
    image_url: Optional[str]
    is_open: bool
    distance_km: float

    class Config:
        from_attributes = True


class RestaurantListResponse(BaseModel):
    """Paginated nearby restaurants"""
    restaurants: List[RestaurantSummary]
    pagination: PaginationResponse

    class Config:
        from_attributes = True


class OperatingHours(BaseModel):
    opening: str
    closing: str


class RestaurantInfo(BaseModel):
    """Restaurant header on the details page"""
    id: int
    name: str
    description: Optional[str]
    cuisine: List[str]
    rating: float
    total_reviews: int
    address: str
    operating_hours: OperatingHours
    min_order_amount_cents: int
    delivery_fee_cents: int
    avg_preparation_time: int
    is_open: bool
    is_veg_only: bool
    image_url: Optional[str]
    phone: Optional[str]
    email: Optional[str]


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: int
    name: str
    description: Optional[str]
    price_cents: int
    is_veg: bool
    is_available: bool
    image_url: Optional[str]
    preparation_time: Optional[int]
    calories: Optional[int]
    allergens: Optional[List[str]] = None

    class Config:
        from_attributes = True


class MenuSectionResponse(BaseModel):
    """Menu category with its items"""
    category: str
    description: Optional[str]
    items: List[MenuItemResponse]

    class Config:
        from_attributes = True


class RestaurantDetailResponse(BaseModel):
    """Restaurant with its menu"""
    restaurant: RestaurantInfo
    menu: List[MenuSectionResponse]


class RestaurantSearchHit(BaseModel):
    id: int
    name: str
    cuisine: List[str]
    rating: float
    delivery_fee_cents: int
    min_order_amount_cents: int
    image_url: Optional[str]
    distance_km: Optional[float]


class DishSearchHit(BaseModel):
    item_id: int
    name: str
    restaurant_id: int
    restaurant_name: str
    price_cents: int
    rating: float
    is_veg: bool
    image_url: Optional[str]


class SearchResponse(BaseModel):
    """Restaurant and dish search results"""
    query: str
    restaurants: List[RestaurantSearchHit]
    dishes: List[DishSearchHit]

    class Config:
        from_attributes = True
