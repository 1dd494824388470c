"""Tests for reviews and restaurant rating aggregation"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from food_delivery.exceptions import (
    NothingToUpdate,
    RestaurantNotFound,
    ReviewAlreadyExists,
    ReviewNotAllowed,
    ReviewNotFound,
    ReviewWindowExpired,
)
from food_delivery.models.order import Order
from food_delivery.models.restaurant import Restaurant
from food_delivery.services import reviews

from tests.helpers import place_order


async def deliver(db, order_id):
    result = await db.execute(select(Order).where(Order.order_id == order_id))
    order = result.scalar_one()
    order.status = "delivered"
    await db.commit()


@pytest.fixture
async def delivered_order(test_db, test_user, test_restaurant, test_menu_items, test_address):
    placement = await place_order(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, test_address.id)
    await deliver(test_db, placement.order_id)
    return placement


async def restaurant_rating(db, restaurant_id):
    result = await db.execute(
        select(Restaurant.rating, Restaurant.total_reviews).where(Restaurant.id == restaurant_id)
    )
    return tuple(result.one())


@pytest.mark.asyncio
async def test_review_requires_delivered_order(test_db, test_user, test_restaurant, test_menu_items, test_address):
    placement = await place_order(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, test_address.id)

    with pytest.raises(ReviewNotAllowed):
        await reviews.create_review(test_db, test_user.id, test_restaurant.id, placement.order_id, rating=5)


@pytest.mark.asyncio
async def test_create_review_updates_restaurant_rating(test_db, test_user, test_restaurant, delivered_order):
    review = await reviews.create_review(
        test_db, test_user.id, test_restaurant.id, delivered_order.order_id, rating=4, comment="Tasty", food_rating=5
    )

    assert review.review_id.startswith("REV")
    assert review.food_rating == 5
    assert review.delivery_rating == 4
    assert await restaurant_rating(test_db, test_restaurant.id) == (4.0, 1)

    with pytest.raises(ReviewAlreadyExists):
        await reviews.create_review(test_db, test_user.id, test_restaurant.id, delivered_order.order_id, rating=1)


@pytest.mark.asyncio
async def test_rating_is_average_of_reviews(test_db, test_user, test_restaurant, test_menu_items, test_address):
    for rating in (5, 4, 4):
        placement = await place_order(
            test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, test_address.id
        )
        await deliver(test_db, placement.order_id)
        await reviews.create_review(test_db, test_user.id, test_restaurant.id, placement.order_id, rating=rating)

    assert await restaurant_rating(test_db, test_restaurant.id) == (4.3, 3)

    stats = await reviews.get_review_stats(test_db, test_restaurant.id)
    assert stats.summary.total_reviews == 3
    assert stats.rating_distribution == {5: 1, 4: 2, 3: 0, 2: 0, 1: 0}

    page = await reviews.list_restaurant_reviews(test_db, test_restaurant.id, sort="rating_low")
    assert [r.rating for r in page.reviews] == [4, 4, 5]
    assert page.reviews[0].user_name == "Test User"


@pytest.mark.asyncio
async def test_update_and_delete_recompute_rating(test_db, test_user, test_restaurant, delivered_order):
    review = await reviews.create_review(test_db, test_user.id, test_restaurant.id, delivered_order.order_id, rating=2)

    await reviews.update_review(test_db, test_user.id, review.review_id, {"rating": 5, "comment": "Better on reheat"})
    assert await restaurant_rating(test_db, test_restaurant.id) == (5.0, 1)

    with pytest.raises(NothingToUpdate):
        await reviews.update_review(test_db, test_user.id, review.review_id, {"order_id": "ORD1"})

    await reviews.delete_review(test_db, test_user.id, review.review_id)
    assert await restaurant_rating(test_db, test_restaurant.id) == (0.0, 0)


@pytest.mark.asyncio
async def test_edit_window_closes(test_db, test_user, test_restaurant, delivered_order):
    review = await reviews.create_review(test_db, test_user.id, test_restaurant.id, delivered_order.order_id, rating=3)
    later = review.created_at + timedelta(hours=25)

    with pytest.raises(ReviewWindowExpired):
        await reviews.update_review(test_db, test_user.id, review.review_id, {"rating": 1}, now=later)

    with pytest.raises(ReviewWindowExpired):
        await reviews.delete_review(test_db, test_user.id, review.review_id, now=later)


@pytest.mark.asyncio
async def test_reviews_are_owned(test_db, test_user, other_user, test_restaurant, delivered_order):
    review = await reviews.create_review(test_db, test_user.id, test_restaurant.id, delivered_order.order_id, rating=3)

    with pytest.raises(ReviewNotFound):
        await reviews.delete_review(test_db, other_user.id, review.review_id)

    with pytest.raises(ReviewNotAllowed):
        await reviews.create_review(test_db, other_user.id, test_restaurant.id, delivered_order.order_id, rating=1)

    mine = await reviews.list_user_reviews(test_db, test_user.id)
    assert [r.restaurant_name for r in mine.reviews] == ["Spice Route"]
    assert (await reviews.list_user_reviews(test_db, other_user.id)).reviews == []


@pytest.mark.asyncio
async def test_unknown_restaurant(test_db):
    with pytest.raises(RestaurantNotFound):
        await reviews.list_restaurant_reviews(test_db, 9999)
