"""Order assembler

Turns a user's cart into a persisted order aggregate: the order row, one
snapshot item per cart line, the initial tracking event and the cleared cart
are committed together or not at all.
"""

import asyncio
import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.config import settings
from food_delivery.database import transaction
from food_delivery.exceptions import (
    AddressNotFound,
    CartEmpty,
    ItemUnavailable,
    MinimumOrderNotMet,
    RestaurantClosed,
)
from food_delivery.models.cart import CartItem
from food_delivery.models.order import Order, OrderItem, OrderTracking, OrderStatus
from food_delivery.services.addresses import get_address
from food_delivery.services.cart import read_cart_snapshot
from food_delivery.services.identifiers import generate_order_id
from food_delivery.services.pricing import (
    calculate_delivery_fee,
    calculate_distance,
    calculate_tax,
    estimate_delivery,
)

logger = structlog.get_logger()

ORDER_PLACED_DESCRIPTION = "Order has been placed successfully"


class UserLocks:
    """One asyncio.Lock per user, dropped once nobody holds a reference"""

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    def __call__(self, user_id: int) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock


checkout_locks = UserLocks()


@dataclass(frozen=True)
class OrderPlacement:
    """Result of a successful checkout"""
    order_id: str
    total_cents: int
    estimated_delivery_time: str
    estimated_delivery_at: datetime
    status: str
    subtotal_cents: int
    delivery_fee_cents: int
    tax_cents: int
    distance_km: float


async def create_order(
    db: AsyncSession,
    user_id: int,
    address_id: int,
    payment_method: str,
    special_instructions: Optional[str] = None,
    now: Optional[datetime] = None,
) -> OrderPlacement:
    """
    Place an order from the user's cart.

    Preconditions are checked in order and the first failure is raised:
    CartEmpty, RestaurantClosed, ItemUnavailable, AddressNotFound,
    MinimumOrderNotMet. A failed precondition leaves the cart untouched.
    Checkouts of the same user are serialized within a process, so a
    duplicate submission finds the cart already empty. Across processes the
    cart rows are claimed by a delete inside the order transaction; a
    checkout that removes fewer rows than it read rolls back with CartEmpty.
    """
    async with checkout_locks(user_id):
        snapshot = await read_cart_snapshot(db, user_id)

        if snapshot is None:
            raise CartEmpty()

        restaurant = snapshot.restaurant
        if not restaurant.is_open:
            raise RestaurantClosed()

        unavailable = snapshot.unavailable_item_names()
        if unavailable:
            raise ItemUnavailable(unavailable)

        try:
            address = await get_address(db, user_id, address_id)
        except AddressNotFound:
            raise AddressNotFound()

        subtotal = snapshot.subtotal_cents
        if subtotal < restaurant.min_order_amount_cents:
            raise MinimumOrderNotMet(restaurant.min_order_amount_cents)

        distance = calculate_distance(
            address.latitude,
            address.longitude,
            restaurant.latitude,
            restaurant.longitude,
        )
        delivery_fee = calculate_delivery_fee(
            distance,
            restaurant.delivery_fee_cents,
            settings.delivery_fee_per_km_cents,
        )
        tax = calculate_tax(subtotal, settings.tax_rate_percent)
        total = subtotal + delivery_fee + tax
        estimate = estimate_delivery(
            restaurant.avg_preparation_time,
            distance,
            now=now,
            speed_kmh=settings.average_delivery_speed_kmh,
        )
        order_identifier = generate_order_id()

        line_ids = [line.id for line in snapshot.lines]

        async with transaction(db):
            # Claim the cart first; another worker that got here earlier
            # leaves nothing to delete.
            claimed = await db.execute(
                delete(CartItem).where(
                    CartItem.user_id == user_id,
                    CartItem.id.in_(line_ids),
                )
            )
            if claimed.rowcount != len(line_ids):
                logger.info(
                    "Checkout lost the cart to a concurrent submission",
                    user_id=user_id,
                    claimed=claimed.rowcount,
                    expected=len(line_ids),
                )
                raise CartEmpty()

            order = Order(
                order_id=order_identifier,
                user_id=user_id,
                restaurant_id=restaurant.id,
                address_id=address.id,
                status=OrderStatus.PLACED.value,
                subtotal_cents=subtotal,
                delivery_fee_cents=delivery_fee,
                tax_cents=tax,
                total_cents=total,
                payment_method=payment_method,
                special_instructions=special_instructions,
                estimated_delivery_time=estimate.estimated_time,
            )
            db.add(order)
            await db.flush()

            for line in snapshot.lines:
                db.add(
                    OrderItem(
                        order_id=order.id,
                        menu_item_id=line.menu_item_id,
                        item_name=line.name,
                        quantity=line.quantity,
                        unit_price_cents=line.price_cents,
                        total_price_cents=line.total_cents,
                        special_instructions=line.special_instructions,
                    )
                )

            db.add(
                OrderTracking(
                    order_id=order.id,
                    status=OrderStatus.PLACED.value,
                    description=ORDER_PLACED_DESCRIPTION,
                )
            )

    logger.info(
        "Order placed",
        order_id=order_identifier,
        user_id=user_id,
        restaurant_id=restaurant.id,
        total_cents=total,
        distance_km=distance,
    )

    return OrderPlacement(
        order_id=order_identifier,
        total_cents=total,
        estimated_delivery_time=estimate.time_range,
        estimated_delivery_at=estimate.estimated_time,
        status=OrderStatus.PLACED.value,
        subtotal_cents=subtotal,
        delivery_fee_cents=delivery_fee,
        tax_cents=tax,
        distance_km=distance,
    )
