"""Tests for turning a cart into an order"""

import asyncio
import re
from datetime import datetime

import pytest
from sqlalchemy import select, func

from food_delivery.exceptions import (
    AddressNotFound,
    CartEmpty,
    InfrastructureError,
    ItemUnavailable,
    MinimumOrderNotMet,
    RestaurantClosed,
)
from food_delivery.models.order import Order, OrderItem, OrderTracking
from food_delivery.services import addresses, cart, checkout, orders
from food_delivery.services.checkout import OrderPlacement

from tests.helpers import address_data, place_order, seed_cart


async def count_rows(db, model):
    result = await db.execute(select(func.count(model.id)))
    return result.scalar()


@pytest.mark.asyncio
async def test_checkout_prices_and_persists_order(test_db, test_user, test_restaurant, test_menu_items, test_address):
    """Two items at 200.00, 2.78 km away: fee 45.00, tax 20.00, total 465.00"""
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, quantity=2)
    now = datetime(2024, 1, 15, 12, 0)

    placement = await checkout.create_order(
        test_db,
        test_user.id,
        test_address.id,
        "card",
        special_instructions="Ring the bell",
        now=now,
    )

    assert re.fullmatch(r"ORD\d{6}[0-9A-Z]{6}", placement.order_id)
    assert placement.status == "placed"
    assert placement.subtotal_cents == 40000
    assert placement.delivery_fee_cents == 4500
    assert placement.tax_cents == 2000
    assert placement.total_cents == 46500
    assert placement.distance_km == 2.78
    assert placement.estimated_delivery_time == "39-44 minutes"
    assert placement.estimated_delivery_at == datetime(2024, 1, 15, 12, 39)

    result = await test_db.execute(select(Order).where(Order.order_id == placement.order_id))
    order = result.scalar_one()
    assert order.user_id == test_user.id
    assert order.restaurant_id == test_restaurant.id
    assert order.address_id == test_address.id
    assert order.payment_status == "pending"
    assert order.payment_method == "card"
    assert order.special_instructions == "Ring the bell"
    assert order.total_cents == order.subtotal_cents + order.delivery_fee_cents + order.tax_cents

    result = await test_db.execute(select(OrderItem).where(OrderItem.order_id == order.id))
    items = result.scalars().all()
    assert len(items) == 1
    assert items[0].item_name == "Paneer Tikka"
    assert items[0].quantity == 2
    assert items[0].unit_price_cents == 20000
    assert items[0].total_price_cents == 40000

    result = await test_db.execute(select(OrderTracking).where(OrderTracking.order_id == order.id))
    events = result.scalars().all()
    assert [(e.status, e.description) for e in events] == [
        ("placed", "Order has been placed successfully"),
    ]

    assert await cart.read_cart_snapshot(test_db, test_user.id) is None


@pytest.mark.asyncio
async def test_empty_cart_is_rejected_first(test_db, test_user):
    with pytest.raises(CartEmpty):
        await checkout.create_order(test_db, test_user.id, 9999, "cash")


@pytest.mark.asyncio
async def test_preconditions_fail_in_order_and_leave_cart_untouched(
    test_db, test_user, test_restaurant, test_menu_items, test_address
):
    paneer = test_menu_items[0]
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, paneer.id, quantity=1)

    # Break every precondition at once, then repair them one by one
    test_restaurant.is_open = False
    test_restaurant.min_order_amount_cents = 100000
    paneer.is_available = False
    await test_db.commit()

    with pytest.raises(RestaurantClosed):
        await checkout.create_order(test_db, test_user.id, 9999, "cash")

    test_restaurant.is_open = True
    await test_db.commit()

    with pytest.raises(ItemUnavailable) as exc_info:
        await checkout.create_order(test_db, test_user.id, 9999, "cash")
    assert exc_info.value.item_names == ["Paneer Tikka"]

    paneer.is_available = True
    await test_db.commit()

    with pytest.raises(AddressNotFound) as exc_info:
        await checkout.create_order(test_db, test_user.id, 9999, "cash")
    assert exc_info.value.message == "Delivery address not found"

    with pytest.raises(MinimumOrderNotMet) as exc_info:
        await checkout.create_order(test_db, test_user.id, test_address.id, "cash")
    assert exc_info.value.required_cents == 100000

    snapshot = await cart.read_cart_snapshot(test_db, test_user.id)
    assert [(line.name, line.quantity) for line in snapshot.lines] == [("Paneer Tikka", 1)]
    assert await count_rows(test_db, Order) == 0


@pytest.mark.asyncio
async def test_subtotal_equal_to_minimum_is_accepted(
    test_db, test_user, test_restaurant, test_menu_items, test_address
):
    test_restaurant.min_order_amount_cents = 20000
    await test_db.commit()

    placement = await place_order(
        test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, test_address.id, quantity=1
    )

    assert placement.subtotal_cents == 20000


@pytest.mark.asyncio
async def test_other_users_address_is_not_found(
    test_db, test_user, other_user, test_restaurant, test_menu_items
):
    foreign = await addresses.add_address(test_db, other_user.id, address_data())
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id, quantity=2)

    with pytest.raises(AddressNotFound):
        await checkout.create_order(test_db, test_user.id, foreign.id, "cash")


@pytest.mark.asyncio
async def test_order_keeps_prices_from_checkout_time(
    test_db, test_user, test_restaurant, test_menu_items, test_address
):
    paneer = test_menu_items[0]
    placement = await place_order(test_db, test_user.id, test_restaurant.id, paneer.id, test_address.id)

    paneer.name = "Paneer Tikka (new recipe)"
    paneer.price_cents = 99900
    await test_db.commit()

    detail = await orders.get_order_detail(test_db, test_user.id, placement.order_id)
    assert detail.items[0].name == "Paneer Tikka"
    assert detail.items[0].unit_price_cents == 20000
    assert detail.total_cents == 46500


@pytest.mark.asyncio
async def test_concurrent_checkouts_place_one_order(
    session_factory, test_db, test_user, test_restaurant, test_menu_items, test_address
):
    """A double-submitted checkout places one order; the other finds the cart empty"""
    user_id = test_user.id
    address_id = test_address.id
    await cart.add_to_cart(test_db, user_id, test_restaurant.id, test_menu_items[0].id, quantity=2)
    await test_db.commit()

    async def submit():
        async with session_factory() as db:
            return await checkout.create_order(db, user_id, address_id, "card")

    results = await asyncio.gather(submit(), submit(), return_exceptions=True)

    placed = [r for r in results if isinstance(r, OrderPlacement)]
    rejected = [r for r in results if isinstance(r, CartEmpty)]
    assert len(placed) == 1
    assert len(rejected) == 1
    assert await count_rows(test_db, Order) == 1


@pytest.mark.asyncio
async def test_store_failure_rolls_back_everything(
    test_db, test_user, test_restaurant, test_menu_items, test_address, monkeypatch
):
    # Rollback expires ORM state, so keep plain ids
    user_id = test_user.id
    restaurant_id = test_restaurant.id
    item_id = test_menu_items[0].id
    address_id = test_address.id

    first = await place_order(test_db, user_id, restaurant_id, item_id, address_id)
    await cart.add_to_cart(test_db, user_id, restaurant_id, item_id, quantity=1)

    # Reusing an existing order id violates the unique constraint on insert
    monkeypatch.setattr(checkout, "generate_order_id", lambda: first.order_id)

    with pytest.raises(InfrastructureError):
        await checkout.create_order(test_db, user_id, address_id, "cash")

    assert await count_rows(test_db, Order) == 1
    assert await count_rows(test_db, OrderItem) == 1
    assert await count_rows(test_db, OrderTracking) == 1

    snapshot = await cart.read_cart_snapshot(test_db, user_id)
    assert [line.quantity for line in snapshot.lines] == [1]


@pytest.mark.asyncio
async def test_checkout_from_two_processes_places_one_order(file_session_factory, monkeypatch):
    """Without a shared in-process lock the cart is still turned into one order"""
    async with file_session_factory() as db:
        user_id, address_id = await seed_cart(db)

    # Each call gets its own lock, as in separate worker processes
    monkeypatch.setattr(checkout, "checkout_locks", lambda user_id: asyncio.Lock())

    async def submit():
        async with file_session_factory() as db:
            return await checkout.create_order(db, user_id, address_id, "card")

    results = await asyncio.gather(submit(), submit(), return_exceptions=True)

    assert sorted(type(r).__name__ for r in results) == ["CartEmpty", "OrderPlacement"]

    async with file_session_factory() as db:
        assert await count_rows(db, Order) == 1
        assert await count_rows(db, OrderItem) == 1
        assert await count_rows(db, OrderTracking) == 1
        assert await cart.read_cart_snapshot(db, user_id) is None
