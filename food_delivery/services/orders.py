"""Order query, tracking reader and cancellation"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

import structlog
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.database import transaction
from food_delivery.exceptions import OrderCannotBeCancelled, OrderNotFound
from food_delivery.models.address import Address
from food_delivery.models.order import (
    CANCELLABLE_STATUSES,
    DeliveryPartner,
    Order,
    OrderItem,
    OrderStatus,
    OrderTracking,
)
from food_delivery.models.restaurant import Restaurant
from food_delivery.services.pagination import Pagination
from food_delivery.services.pricing import format_address

logger = structlog.get_logger()

ORDER_CANCELLED_DESCRIPTION = "Order has been cancelled by customer"


@dataclass(frozen=True)
class OrderSummary:
    order_id: str
    restaurant_name: str
    status: str
    payment_status: str
    total_cents: int
    item_count: int
    created_at: datetime
    estimated_delivery_time: Optional[datetime]


@dataclass(frozen=True)
class OrderPage:
    orders: List[OrderSummary]
    pagination: Pagination


@dataclass(frozen=True)
class OrderLine:
    name: str
    quantity: int
    unit_price_cents: int
    total_price_cents: int
    special_instructions: Optional[str]


@dataclass(frozen=True)
class TrackingEvent:
    status: str
    description: Optional[str]
    timestamp: datetime


@dataclass(frozen=True)
class PartnerContact:
    name: str
    phone: str


@dataclass(frozen=True)
class OrderDetail:
    """Everything the customer sees about one order"""
    order_id: str
    restaurant_name: str
    restaurant_phone: Optional[str]
    items: List[OrderLine]
    delivery_address: str
    status: str
    payment_status: str
    tracking: List[TrackingEvent]
    delivery_partner: Optional[PartnerContact]
    subtotal_cents: int
    delivery_fee_cents: int
    tax_cents: int
    total_cents: int
    payment_method: str
    special_instructions: Optional[str]
    ordered_at: datetime
    estimated_delivery_time: Optional[datetime]
    delivered_at: Optional[datetime]


@dataclass(frozen=True)
class OrderTrackingView:
    order_id: str
    status: str
    tracking: List[TrackingEvent] = field(default_factory=list)


async def _get_owned_order(db: AsyncSession, user_id: int, order_id: str) -> Order:
    result = await db.execute(
        select(Order).where(Order.order_id == order_id, Order.user_id == user_id)
    )
    order = result.scalar_one_or_none()

    if order is None:
        raise OrderNotFound()

    return order


async def _read_tracking(db: AsyncSession, order_pk: int) -> List[TrackingEvent]:
    result = await db.execute(
        select(OrderTracking)
        .where(OrderTracking.order_id == order_pk)
        .order_by(OrderTracking.created_at.asc(), OrderTracking.id.asc())
    )
    return [
        TrackingEvent(status=event.status, description=event.description, timestamp=event.created_at)
        for event in result.scalars().all()
    ]


async def list_orders(
    db: AsyncSession,
    user_id: int,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> OrderPage:
    """List a user's orders, newest first, with item counts"""
    count_query = select(func.count(Order.id)).where(Order.user_id == user_id)
    if status:
        count_query = count_query.where(Order.status == status)

    total_result = await db.execute(count_query)
    pagination = Pagination(page=page, limit=limit, total=total_result.scalar() or 0)

    item_counts = (
        select(OrderItem.order_id, func.count(OrderItem.id).label("item_count"))
        .group_by(OrderItem.order_id)
        .subquery()
    )
    query = (
        select(Order, Restaurant.name, func.coalesce(item_counts.c.item_count, 0))
        .join(Restaurant, Order.restaurant_id == Restaurant.id)
        .outerjoin(item_counts, item_counts.c.order_id == Order.id)
        .where(Order.user_id == user_id)
    )
    if status:
        query = query.where(Order.status == status)

    query = (
        query.order_by(Order.created_at.desc(), Order.id.desc())
        .offset(pagination.offset)
        .limit(limit)
    )
    result = await db.execute(query)

    orders = [
        OrderSummary(
            order_id=order.order_id,
            restaurant_name=restaurant_name,
            status=order.status,
            payment_status=order.payment_status,
            total_cents=order.total_cents,
            item_count=item_count,
            created_at=order.created_at,
            estimated_delivery_time=order.estimated_delivery_time,
        )
        for order, restaurant_name, item_count in result.all()
    ]
    return OrderPage(orders=orders, pagination=pagination)


async def get_order_detail(db: AsyncSession, user_id: int, order_id: str) -> OrderDetail:
    """Rebuild the full order view. Raises OrderNotFound for unknown or foreign orders."""
    result = await db.execute(
        select(Order, Restaurant, Address, DeliveryPartner)
        .join(Restaurant, Order.restaurant_id == Restaurant.id)
        .join(Address, Order.address_id == Address.id)
        .outerjoin(DeliveryPartner, Order.delivery_partner_id == DeliveryPartner.id)
        .where(Order.order_id == order_id, Order.user_id == user_id)
    )
    row = result.first()

    if row is None:
        raise OrderNotFound()

    order, restaurant, address, partner = row

    items_result = await db.execute(
        select(OrderItem).where(OrderItem.order_id == order.id).order_by(OrderItem.id)
    )
    items = [
        OrderLine(
            name=item.item_name,
            quantity=item.quantity,
            unit_price_cents=item.unit_price_cents,
            total_price_cents=item.total_price_cents,
            special_instructions=item.special_instructions,
        )
        for item in items_result.scalars().all()
    ]

    return OrderDetail(
        order_id=order.order_id,
        restaurant_name=restaurant.name,
        restaurant_phone=restaurant.phone,
        items=items,
        delivery_address=format_address(
            address.address_line1,
            address.address_line2,
            address.city,
            address.state,
            address.pincode,
        ),
        status=order.status,
        payment_status=order.payment_status,
        tracking=await _read_tracking(db, order.id),
        delivery_partner=PartnerContact(name=partner.name, phone=partner.phone) if partner else None,
        subtotal_cents=order.subtotal_cents,
        delivery_fee_cents=order.delivery_fee_cents,
        tax_cents=order.tax_cents,
        total_cents=order.total_cents,
        payment_method=order.payment_method,
        special_instructions=order.special_instructions,
        ordered_at=order.created_at,
        estimated_delivery_time=order.estimated_delivery_time,
        delivered_at=order.delivered_at,
    )


async def get_order_tracking(db: AsyncSession, user_id: int, order_id: str) -> OrderTrackingView:
    order = await _get_owned_order(db, user_id, order_id)
    return OrderTrackingView(
        order_id=order.order_id,
        status=order.status,
        tracking=await _read_tracking(db, order.id),
    )


async def cancel_order(db: AsyncSession, user_id: int, order_id: str) -> None:
    """
    Cancel an order that is still placed or confirmed.

    Appends a tracking event. Paid orders are not refunded here; refunds go
    through the payments service.
    """
    order = await _get_owned_order(db, user_id, order_id)

    if order.status not in CANCELLABLE_STATUSES:
        logger.info("Cancellation rejected", order_id=order_id, status=order.status)
        raise OrderCannotBeCancelled()

    async with transaction(db):
        # Status is re-checked in the write; no row means it changed since the read
        result = await db.execute(
            update(Order)
            .where(Order.id == order.id, Order.status.in_(CANCELLABLE_STATUSES))
            .values(status=OrderStatus.CANCELLED.value)
        )
        if result.rowcount == 0:
            logger.info("Cancellation lost to a concurrent status change", order_id=order_id)
            raise OrderCannotBeCancelled()

        db.add(
            OrderTracking(
                order_id=order.id,
                status=OrderStatus.CANCELLED.value,
                description=ORDER_CANCELLED_DESCRIPTION,
            )
        )

    logger.info("Order cancelled", order_id=order_id, user_id=user_id)
