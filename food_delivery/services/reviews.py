"""Restaurant reviews and rating aggregation

Every write recomputes the restaurant's `rating` and `total_reviews` in the
same transaction as the review change.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.clock import utcnow
from food_delivery.config import settings
from food_delivery.database import transaction
from food_delivery.exceptions import (
    NothingToUpdate,
    ReviewAlreadyExists,
    ReviewNotAllowed,
    ReviewNotFound,
    ReviewWindowExpired,
)
from food_delivery.models.order import Order, OrderStatus
from food_delivery.models.restaurant import Restaurant
from food_delivery.models.review import Review
from food_delivery.models.user import User
from food_delivery.services.identifiers import generate_review_id
from food_delivery.services.pagination import Pagination
from food_delivery.services.restaurants import get_restaurant

logger = structlog.get_logger()

SORT_ORDERS = {
    "newest": (Review.created_at.desc(), Review.id.desc()),
    "oldest": (Review.created_at.asc(), Review.id.asc()),
    "rating_high": (Review.rating.desc(), Review.created_at.desc()),
    "rating_low": (Review.rating.asc(), Review.created_at.desc()),
}

UPDATABLE_FIELDS = ("rating", "comment", "food_rating", "delivery_rating")


@dataclass(frozen=True)
class ReviewView:
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


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    average_food_rating: float
    average_delivery_rating: float
    total_reviews: int


@dataclass(frozen=True)
class ReviewPage:
    reviews: List[ReviewView]
    pagination: Pagination
    summary: Optional[RatingSummary] = None


@dataclass(frozen=True)
class ReviewStats:
    summary: RatingSummary
    rating_distribution: Dict[int, int] = field(default_factory=dict)


def _average(value: Any) -> float:
    return round(float(value), 1) if value is not None else 0.0


async def _refresh_restaurant_rating(db: AsyncSession, restaurant_id: int) -> None:
    await db.flush()
    result = await db.execute(
        select(func.avg(Review.rating), func.count(Review.id)).where(Review.restaurant_id == restaurant_id)
    )
    average, count = result.one()

    restaurant = await db.get(Restaurant, restaurant_id)
    restaurant.rating = _average(average)
    restaurant.total_reviews = count or 0


async def _summary(db: AsyncSession, restaurant_id: int) -> RatingSummary:
    result = await db.execute(
        select(
            func.avg(Review.rating),
            func.avg(Review.food_rating),
            func.avg(Review.delivery_rating),
            func.count(Review.id),
        ).where(Review.restaurant_id == restaurant_id)
    )
    average, food, delivery, count = result.one()
    return RatingSummary(
        average_rating=_average(average),
        average_food_rating=_average(food),
        average_delivery_rating=_average(delivery),
        total_reviews=count or 0,
    )


async def _get_own_review(db: AsyncSession, user_id: int, review_id: str) -> Review:
    result = await db.execute(
        select(Review).where(Review.review_id == review_id, Review.user_id == user_id)
    )
    review = result.scalar_one_or_none()

    if review is None:
        raise ReviewNotFound()

    return review


def _check_window(review: Review, now: Optional[datetime]) -> None:
    hours = settings.review_edit_window_hours
    if (now or utcnow()) - review.created_at > timedelta(hours=hours):
        raise ReviewWindowExpired(f"Reviews can only be changed within {hours} hours of creation")


async def create_review(
    db: AsyncSession,
    user_id: int,
    restaurant_id: int,
    order_id: str,
    rating: int,
    comment: Optional[str] = None,
    food_rating: Optional[int] = None,
    delivery_rating: Optional[int] = None,
) -> ReviewView:
    """Review a delivered order. Food and delivery ratings default to the overall rating."""
    result = await db.execute(
        select(Order).where(
            Order.order_id == order_id,
            Order.user_id == user_id,
            Order.restaurant_id == restaurant_id,
            Order.status == OrderStatus.DELIVERED.value,
        )
    )
    order = result.scalar_one_or_none()

    if order is None:
        raise ReviewNotAllowed()

    existing = await db.execute(
        select(Review.id).where(Review.user_id == user_id, Review.order_id == order.id)
    )
    if existing.scalar_one_or_none() is not None:
        raise ReviewAlreadyExists()

    review = Review(
        review_id=generate_review_id(),
        user_id=user_id,
        restaurant_id=restaurant_id,
        order_id=order.id,
        rating=rating,
        food_rating=food_rating or rating,
        delivery_rating=delivery_rating or rating,
        comment=comment,
    )

    async with transaction(db):
        db.add(review)
        await _refresh_restaurant_rating(db, restaurant_id)

    logger.info("Review created", review_id=review.review_id, restaurant_id=restaurant_id, rating=rating)

    return ReviewView(
        review_id=review.review_id,
        restaurant_id=restaurant_id,
        order_id=order.order_id,
        rating=review.rating,
        food_rating=review.food_rating,
        delivery_rating=review.delivery_rating,
        comment=review.comment,
        created_at=review.created_at,
    )


async def list_restaurant_reviews(
    db: AsyncSession,
    restaurant_id: int,
    sort: str = "newest",
    page: int = 1,
    limit: int = 10,
) -> ReviewPage:
    """Reviews of a restaurant with the reviewer's name and an averages summary"""
    await get_restaurant(db, restaurant_id)

    summary = await _summary(db, restaurant_id)
    pagination = Pagination(page=page, limit=limit, total=summary.total_reviews)

    result = await db.execute(
        select(Review, User.name, Order.order_id)
        .join(User, Review.user_id == User.id)
        .join(Order, Review.order_id == Order.id)
        .where(Review.restaurant_id == restaurant_id)
        .order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))
        .offset(pagination.offset)
        .limit(limit)
    )

    reviews = [
        ReviewView(
            review_id=review.review_id,
            restaurant_id=review.restaurant_id,
            order_id=order_ref,
            rating=review.rating,
            food_rating=review.food_rating,
            delivery_rating=review.delivery_rating,
            comment=review.comment,
            created_at=review.created_at,
            user_name=user_name,
        )
        for review, user_name, order_ref in result.all()
    ]
    return ReviewPage(reviews=reviews, pagination=pagination, summary=summary)


async def list_user_reviews(db: AsyncSession, user_id: int, page: int = 1, limit: int = 10) -> ReviewPage:
    total_result = await db.execute(select(func.count(Review.id)).where(Review.user_id == user_id))
    pagination = Pagination(page=page, limit=limit, total=total_result.scalar() or 0)

    result = await db.execute(
        select(Review, Restaurant.name, Order.order_id)
        .join(Restaurant, Review.restaurant_id == Restaurant.id)
        .join(Order, Review.order_id == Order.id)
        .where(Review.user_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .offset(pagination.offset)
        .limit(limit)
    )

    reviews = [
        ReviewView(
            review_id=review.review_id,
            restaurant_id=review.restaurant_id,
            order_id=order_ref,
            rating=review.rating,
            food_rating=review.food_rating,
            delivery_rating=review.delivery_rating,
            comment=review.comment,
            created_at=review.created_at,
            restaurant_name=restaurant_name,
        )
        for review, restaurant_name, order_ref in result.all()
    ]
    return ReviewPage(reviews=reviews, pagination=pagination)


async def update_review(
    db: AsyncSession,
    user_id: int,
    review_id: str,
    changes: Dict[str, Any],
    now: Optional[datetime] = None,
) -> None:
    """Apply the given fields to a review still inside the edit window"""
    review = await _get_own_review(db, user_id, review_id)
    _check_window(review, now)

    updates = {key: changes[key] for key in UPDATABLE_FIELDS if key in changes}
    if not updates:
        raise NothingToUpdate()

    restaurant_id = review.restaurant_id
    async with transaction(db):
        for key, value in updates.items():
            setattr(review, key, value)
        await _refresh_restaurant_rating(db, restaurant_id)

    logger.info("Review updated", review_id=review_id, fields=sorted(updates))


async def delete_review(db: AsyncSession, user_id: int, review_id: str, now: Optional[datetime] = None) -> None:
    review = await _get_own_review(db, user_id, review_id)
    _check_window(review, now)

    restaurant_id = review.restaurant_id
    async with transaction(db):
        await db.delete(review)
        await _refresh_restaurant_rating(db, restaurant_id)

    logger.info("Review deleted", review_id=review_id, restaurant_id=restaurant_id)


async def get_review_stats(db: AsyncSession, restaurant_id: int) -> ReviewStats:
    """Averages and the 1-5 star distribution"""
    await get_restaurant(db, restaurant_id)
    summary = await _summary(db, restaurant_id)

    result = await db.execute(
        select(*[
            func.count(case((Review.rating == stars, 1)))
            for stars in range(5, 0, -1)
        ]).where(Review.restaurant_id == restaurant_id)
    )
    counts = result.one()

    return ReviewStats(
        summary=summary,
        rating_distribution={stars: count or 0 for stars, count in zip(range(5, 0, -1), counts)},
    )
