"""Tests for the cart snapshot reader and cart mutations"""

import pytest

from food_delivery.exceptions import (
    CartItemNotFound,
    CartRestaurantMismatch,
    ItemUnavailable,
    MenuItemNotFound,
    RestaurantClosed,
)
from food_delivery.models.restaurant import MenuItem
from food_delivery.services import cart

from tests.helpers import create_restaurant


@pytest.mark.asyncio
async def test_empty_cart_has_no_snapshot(test_db, test_user):
    assert await cart.read_cart_snapshot(test_db, test_user.id) is None

    summary = await cart.get_cart_summary(test_db, test_user.id)
    assert summary.items == []
    assert summary.restaurant is None
    assert summary.total_cents == 0


@pytest.mark.asyncio
async def test_snapshot_joins_live_menu_state(test_db, test_user, test_restaurant, test_menu_items):
    paneer, chicken, _ = test_menu_items
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, paneer.id, quantity=2)
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, chicken.id)

    snapshot = await cart.read_cart_snapshot(test_db, test_user.id)

    assert snapshot.restaurant.id == test_restaurant.id
    assert snapshot.restaurant.min_order_amount_cents == 10000
    assert {line.name for line in snapshot.lines} == {"Paneer Tikka", "Butter Chicken"}
    assert snapshot.subtotal_cents == 2 * 20000 + 30000
    assert snapshot.item_count == 3
    assert snapshot.unavailable_item_names() == []


@pytest.mark.asyncio
async def test_add_same_item_merges_quantity(test_db, test_user, test_restaurant, test_menu_items):
    paneer = test_menu_items[0]
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, paneer.id, quantity=1)
    summary = await cart.add_to_cart(
        test_db, test_user.id, test_restaurant.id, paneer.id, quantity=2, special_instructions="Extra spicy"
    )

    assert len(summary.items) == 1
    assert summary.items[0].quantity == 3
    assert summary.items[0].special_instructions == "Extra spicy"
    assert summary.subtotal_cents == 60000
    assert summary.delivery_fee_cents == 4000
    assert summary.total_cents == 64000


@pytest.mark.asyncio
async def test_cart_holds_one_restaurant(test_db, test_user, test_restaurant, test_menu_items):
    """Adding from a second restaurant is rejected"""
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id)

    other = await create_restaurant(test_db, name="Dragon Wok")
    noodles = MenuItem(restaurant_id=other.id, name="Hakka Noodles", price_cents=18000)
    test_db.add(noodles)
    await test_db.commit()

    with pytest.raises(CartRestaurantMismatch):
        await cart.add_to_cart(test_db, test_user.id, other.id, noodles.id)


@pytest.mark.asyncio
async def test_add_rejects_unavailable_and_unknown_items(test_db, test_user, test_restaurant, test_menu_items):
    with pytest.raises(ItemUnavailable) as exc_info:
        await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[2].id)
    assert exc_info.value.item_names == ["Seasonal Special"]

    with pytest.raises(MenuItemNotFound):
        await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, 9999)


@pytest.mark.asyncio
async def test_add_rejects_closed_restaurant(test_db, test_user, test_restaurant, test_menu_items):
    test_restaurant.is_open = False
    await test_db.commit()

    with pytest.raises(RestaurantClosed):
        await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id)


@pytest.mark.asyncio
async def test_update_to_zero_removes_line(test_db, test_user, test_restaurant, test_menu_items):
    summary = await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id)
    line_id = summary.items[0].id

    summary = await cart.update_cart_item(test_db, test_user.id, line_id, quantity=4)
    assert summary.items[0].quantity == 4

    summary = await cart.update_cart_item(test_db, test_user.id, line_id, quantity=0)
    assert summary.items == []


@pytest.mark.asyncio
async def test_other_users_cart_lines_are_invisible(test_db, test_user, other_user, test_restaurant, test_menu_items):
    summary = await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id)
    line_id = summary.items[0].id

    with pytest.raises(CartItemNotFound):
        await cart.remove_cart_item(test_db, other_user.id, line_id)

    with pytest.raises(CartItemNotFound):
        await cart.update_cart_item(test_db, other_user.id, line_id, quantity=2)


@pytest.mark.asyncio
async def test_clear_cart(test_db, test_user, test_restaurant, test_menu_items):
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[0].id)
    await cart.add_to_cart(test_db, test_user.id, test_restaurant.id, test_menu_items[1].id)

    await cart.clear_cart(test_db, test_user.id)

    assert await cart.read_cart_snapshot(test_db, test_user.id) is None
