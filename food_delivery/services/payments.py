"""Payment processing, history and refunds

The gateway decides whether a charge or refund succeeds; this module records
the outcome and keeps the order's payment state in step with it.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.clock import utcnow
from food_delivery.config import settings
from food_delivery.database import transaction
from food_delivery.exceptions import (
    OrderNotFound,
    OrderNotPayable,
    PaymentAlreadyCompleted,
    PaymentNotFound,
    RefundNotAllowed,
)
from food_delivery.models.order import Order, OrderStatus, OrderTracking
from food_delivery.models.payment import Payment, PaymentMethod, PaymentStatus
from food_delivery.models.restaurant import Restaurant
from food_delivery.payments.base import BasePaymentGateway
from food_delivery.services.identifiers import generate_payment_id, generate_refund_id
from food_delivery.services.pagination import Pagination

logger = structlog.get_logger()

DEFAULT_PAYMENT_METHOD = PaymentMethod.CARD.value


@dataclass(frozen=True)
class PaymentOutcome:
    payment_id: str
    status: str
    transaction_id: Optional[str]
    amount_cents: int

    @property
    def succeeded(self) -> bool:
        return self.status == PaymentStatus.COMPLETED.value


@dataclass(frozen=True)
class RefundOutcome:
    refund_id: Optional[str]
    status: str
    amount_cents: int

    @property
    def succeeded(self) -> bool:
        return self.refund_id is not None


@dataclass(frozen=True)
class PaymentRecord:
    payment_id: str
    order_id: str
    restaurant_name: str
    amount_cents: int
    payment_method: str
    payment_status: str
    transaction_id: Optional[str]
    card_last_four: Optional[str]
    card_type: Optional[str]
    refund_reason: Optional[str]
    payment_date: datetime


@dataclass(frozen=True)
class PaymentPage:
    payments: List[PaymentRecord]
    pagination: Pagination


def _record(payment: Payment, order_id: str, restaurant_name: str) -> PaymentRecord:
    return PaymentRecord(
        payment_id=payment.payment_id,
        order_id=order_id,
        restaurant_name=restaurant_name,
        amount_cents=payment.amount_cents,
        payment_method=payment.payment_method,
        payment_status=payment.payment_status,
        transaction_id=payment.transaction_id,
        card_last_four=payment.card_last_four,
        card_type=payment.card_type,
        refund_reason=payment.refund_reason,
        payment_date=payment.payment_date,
    )


def list_payment_methods() -> Dict[str, Any]:
    return {
        "payment_methods": [method.value for method in PaymentMethod],
        "default_method": DEFAULT_PAYMENT_METHOD,
    }


async def process_payment(
    db: AsyncSession,
    gateway: BasePaymentGateway,
    user_id: int,
    order_id: str,
    payment_method: str,
    card_number: Optional[str] = None,
    card_type: Optional[str] = None,
) -> PaymentOutcome:
    """
    Charge an order through the gateway and record the attempt.

    A successful charge on a placed order confirms it. A declined charge is
    recorded as a failed payment and can be retried.
    """
    result = await db.execute(
        select(Order).where(Order.order_id == order_id, Order.user_id == user_id)
    )
    order = result.scalar_one_or_none()

    if order is None:
        raise OrderNotFound()
    if order.payment_status == PaymentStatus.COMPLETED.value:
        raise PaymentAlreadyCompleted()
    if order.status == OrderStatus.CANCELLED.value:
        raise OrderNotPayable()

    payment_id = generate_payment_id()
    outcome = await gateway.charge(payment_id, order.total_cents, payment_method)
    status = PaymentStatus.COMPLETED.value if outcome.success else PaymentStatus.FAILED.value

    async with transaction(db):
        db.add(
            Payment(
                payment_id=payment_id,
                order_id=order.id,
                user_id=user_id,
                amount_cents=order.total_cents,
                payment_method=payment_method,
                payment_status=status,
                transaction_id=outcome.transaction_id if outcome.success else None,
                card_last_four=card_number[-4:] if card_number else None,
                card_type=card_type,
            )
        )
        order.payment_status = status

        if outcome.success and order.status == OrderStatus.PLACED.value:
            order.status = OrderStatus.CONFIRMED.value
            db.add(
                OrderTracking(
                    order_id=order.id,
                    status=OrderStatus.CONFIRMED.value,
                    description="Payment received, order confirmed",
                )
            )

    logger.info(
        "Payment processed",
        payment_id=payment_id,
        order_id=order_id,
        status=status,
        gateway=gateway.name,
    )

    return PaymentOutcome(
        payment_id=payment_id,
        status=status,
        transaction_id=outcome.transaction_id if outcome.success else None,
        amount_cents=order.total_cents,
    )


async def get_payment_history(
    db: AsyncSession,
    user_id: int,
    page: int = 1,
    limit: int = 10,
) -> PaymentPage:
    """Payments and refunds of a user, newest first"""
    total_result = await db.execute(
        select(func.count(Payment.id)).where(Payment.user_id == user_id)
    )
    pagination = Pagination(page=page, limit=limit, total=total_result.scalar() or 0)

    result = await db.execute(
        select(Payment, Order.order_id, Restaurant.name)
        .join(Order, Payment.order_id == Order.id)
        .join(Restaurant, Order.restaurant_id == Restaurant.id)
        .where(Payment.user_id == user_id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
        .offset(pagination.offset)
        .limit(limit)
    )

    return PaymentPage(
        payments=[_record(payment, order_ref, name) for payment, order_ref, name in result.all()],
        pagination=pagination,
    )


async def get_payment_details(db: AsyncSession, user_id: int, payment_id: str) -> PaymentRecord:
    result = await db.execute(
        select(Payment, Order.order_id, Restaurant.name)
        .join(Order, Payment.order_id == Order.id)
        .join(Restaurant, Order.restaurant_id == Restaurant.id)
        .where(Payment.payment_id == payment_id, Payment.user_id == user_id)
    )
    row = result.first()

    if row is None:
        raise PaymentNotFound()

    payment, order_ref, name = row
    return _record(payment, order_ref, name)


async def refund_payment(
    db: AsyncSession,
    gateway: BasePaymentGateway,
    user_id: int,
    payment_id: str,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RefundOutcome:
    """
    Refund a completed payment while its order is inside the refund window.

    On success the payment is marked refunded, the order is cancelled and a
    negative-amount refund row is written. A declined refund changes nothing.
    """
    result = await db.execute(
        select(Payment, Order)
        .join(Order, Payment.order_id == Order.id)
        .where(Payment.payment_id == payment_id, Payment.user_id == user_id)
    )
    row = result.first()

    if row is None:
        raise PaymentNotFound()

    payment, order = row

    if payment.payment_status != PaymentStatus.COMPLETED.value:
        raise RefundNotAllowed("Only completed payments can be refunded")

    now = now or utcnow()
    if now - order.created_at > timedelta(hours=settings.refund_window_hours):
        raise RefundNotAllowed(
            f"Refund can only be requested within {settings.refund_window_hours} hours of order"
        )

    outcome = await gateway.refund(payment_id, payment.amount_cents)
    if not outcome.success:
        logger.warning("Refund declined", payment_id=payment_id, order_id=order.order_id)
        return RefundOutcome(refund_id=None, status=PaymentStatus.FAILED.value, amount_cents=payment.amount_cents)

    refund_id = generate_refund_id()

    async with transaction(db):
        payment.payment_status = PaymentStatus.REFUNDED.value

        if order.status != OrderStatus.CANCELLED.value:
            db.add(
                OrderTracking(
                    order_id=order.id,
                    status=OrderStatus.CANCELLED.value,
                    description="Order cancelled and payment refunded",
                )
            )
        order.status = OrderStatus.CANCELLED.value
        order.payment_status = PaymentStatus.REFUNDED.value

        db.add(
            Payment(
                payment_id=refund_id,
                order_id=order.id,
                user_id=user_id,
                amount_cents=-payment.amount_cents,
                payment_method=payment.payment_method,
                payment_status=PaymentStatus.REFUNDED.value,
                transaction_id=outcome.transaction_id,
                refund_reason=reason,
            )
        )

    logger.info("Payment refunded", payment_id=payment_id, refund_id=refund_id, order_id=order.order_id)
    return RefundOutcome(
        refund_id=refund_id,
        status=PaymentStatus.REFUNDED.value,
        amount_cents=payment.amount_cents,
    )
