"""Restaurant browsing, menu and search"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, or_, String, cast
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.exceptions import RestaurantNotFound
from food_delivery.models.restaurant import MenuCategory, MenuItem, Restaurant
from food_delivery.services.pagination import Pagination
from food_delivery.services.pricing import (
    calculate_distance,
    estimate_delivery,
    is_restaurant_open,
)


@dataclass(frozen=True)
class NearbyRestaurant:
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


@dataclass(frozen=True)
class RestaurantPage:
    restaurants: List[NearbyRestaurant]
    pagination: Pagination


@dataclass(frozen=True)
class MenuSection:
    category: str
    description: Optional[str]
    items: List[MenuItem]


@dataclass(frozen=True)
class RestaurantDetails:
    restaurant: Restaurant
    address: str
    is_open: bool
    menu: List[MenuSection]


@dataclass(frozen=True)
class SearchResults:
    query: str
    restaurants: List[Dict[str, Any]]
    dishes: List[Dict[str, Any]]


def _text_match(query: str):
    pattern = f"%{query}%"
    return or_(
        Restaurant.name.ilike(pattern),
        Restaurant.description.ilike(pattern),
        cast(Restaurant.cuisine_types, String).ilike(pattern),
    )


async def list_restaurants(
    db: AsyncSession,
    lat: float,
    lng: float,
    radius_km: float = 5,
    cuisine: Optional[str] = None,
    search: Optional[str] = None,
    veg_only: bool = False,
    min_rating: Optional[float] = None,
    page: int = 1,
    limit: int = 20,
    now: Optional[datetime] = None,
) -> RestaurantPage:
    """
    Open restaurants within `radius_km` of the given point, nearest first.

    `is_open` on each result reflects the operating hours at `now`, while the
    listing itself only includes restaurants whose open flag is set.
    """
    query = select(Restaurant).where(Restaurant.is_open == True)

    if cuisine:
        query = query.where(cast(Restaurant.cuisine_types, String).ilike(f"%{cuisine}%"))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Restaurant.name.ilike(pattern), Restaurant.description.ilike(pattern)))
    if veg_only:
        query = query.where(Restaurant.is_veg_only == True)
    if min_rating is not None:
        query = query.where(Restaurant.rating >= min_rating)

    result = await db.execute(query)

    nearby = []
    for restaurant in result.scalars().all():
        distance = calculate_distance(lat, lng, restaurant.latitude, restaurant.longitude)
        if distance > radius_km:
            continue
        estimate = estimate_delivery(restaurant.avg_preparation_time, distance, now=now)
        nearby.append(
            NearbyRestaurant(
                id=restaurant.id,
                name=restaurant.name,
                cuisine=list(restaurant.cuisine_types or []),
                rating=restaurant.rating or 0,
                avg_delivery_time=estimate.time_range,
                min_order_amount_cents=restaurant.min_order_amount_cents,
                delivery_fee_cents=restaurant.delivery_fee_cents,
                image_url=restaurant.image_url,
                is_open=is_restaurant_open(restaurant.opening_time, restaurant.closing_time, now),
                distance_km=round(distance, 1),
            )
        )

    nearby.sort(key=lambda r: r.distance_km)
    pagination = Pagination(page=page, limit=limit, total=len(nearby))

    return RestaurantPage(
        restaurants=nearby[pagination.offset:pagination.offset + limit],
        pagination=pagination,
    )


async def get_restaurant(db: AsyncSession, restaurant_id: int) -> Restaurant:
    restaurant = await db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise RestaurantNotFound()
    return restaurant


async def get_restaurant_details(
    db: AsyncSession,
    restaurant_id: int,
    now: Optional[datetime] = None,
) -> RestaurantDetails:
    """Restaurant info plus its menu grouped by active category"""
    restaurant = await get_restaurant(db, restaurant_id)

    categories_result = await db.execute(
        select(MenuCategory)
        .where(MenuCategory.restaurant_id == restaurant_id, MenuCategory.is_active == True)
        .order_by(MenuCategory.display_order, MenuCategory.name)
    )
    categories = categories_result.scalars().all()

    items_result = await db.execute(
        select(MenuItem)
        .where(MenuItem.restaurant_id == restaurant_id)
        .order_by(MenuItem.name)
    )
    items_by_category: Dict[int, List[MenuItem]] = {}
    for item in items_result.scalars().all():
        items_by_category.setdefault(item.category_id, []).append(item)

    menu = [
        MenuSection(
            category=category.name,
            description=category.description,
            items=items_by_category.get(category.id, []),
        )
        for category in categories
    ]

    return RestaurantDetails(
        restaurant=restaurant,
        address=", ".join(part for part in (restaurant.address_line1, restaurant.city) if part),
        is_open=is_restaurant_open(restaurant.opening_time, restaurant.closing_time, now),
        menu=menu,
    )


async def search(
    db: AsyncSession,
    query: str,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    limit: int = 20,
) -> SearchResults:
    """Search open restaurants by name, description or cuisine, and available dishes by name"""
    restaurants_result = await db.execute(
        select(Restaurant)
        .where(_text_match(query), Restaurant.is_open == True)
        .order_by(Restaurant.rating.desc(), Restaurant.id)
        .limit(limit)
    )

    restaurants = []
    for restaurant in restaurants_result.scalars().all():
        distance = None
        if lat is not None and lng is not None:
            distance = round(calculate_distance(lat, lng, restaurant.latitude, restaurant.longitude), 1)
        restaurants.append({
            "id": restaurant.id,
            "name": restaurant.name,
            "cuisine": list(restaurant.cuisine_types or []),
            "rating": restaurant.rating or 0,
            "delivery_fee_cents": restaurant.delivery_fee_cents,
            "min_order_amount_cents": restaurant.min_order_amount_cents,
            "image_url": restaurant.image_url,
            "distance_km": distance,
        })

    dishes_result = await db.execute(
        select(MenuItem, Restaurant)
        .join(Restaurant, MenuItem.restaurant_id == Restaurant.id)
        .where(
            MenuItem.name.ilike(f"%{query}%"),
            MenuItem.is_available == True,
            Restaurant.is_open == True,
        )
        .order_by(Restaurant.rating.desc(), MenuItem.id)
        .limit(limit)
    )
    dishes = [
        {
            "item_id": item.id,
            "name": item.name,
            "restaurant_id": restaurant.id,
            "restaurant_name": restaurant.name,
            "price_cents": item.price_cents,
            "rating": restaurant.rating or 0,
            "is_veg": bool(item.is_veg),
            "image_url": item.image_url,
        }
        for item, restaurant in dishes_result.all()
    ]

    return SearchResults(query=query, restaurants=restaurants, dishes=dishes)
