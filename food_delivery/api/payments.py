"""Payment API endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.auth import get_current_user
from food_delivery.config import settings
from food_delivery.database import get_db
from food_delivery.models.user import User
from food_delivery.payments import BasePaymentGateway, SimulatedPaymentGateway
from food_delivery.schemas.payment import (
    PaymentHistoryResponse,
    PaymentMethodsResponse,
    PaymentOutcomeResponse,
    PaymentRecordResponse,
    PaymentRequest,
    RefundRequest,
    RefundResponse,
)
from food_delivery.services import payments

router = APIRouter()

_gateway = SimulatedPaymentGateway(
    success_rate=settings.payment_success_rate,
    refund_success_rate=settings.refund_success_rate,
)


def get_payment_gateway() -> BasePaymentGateway:
    """Gateway used for charges and refunds; overridden in tests"""
    return _gateway


@router.post("/process", response_model=PaymentOutcomeResponse)
async def process_payment(
    payment_data: PaymentRequest,
    current_user: User = Depends(get_current_user),
    gateway: BasePaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    """Pay for an order"""
    card = payment_data.card_details
    outcome = await payments.process_payment(
        db,
        gateway,
        current_user.id,
        payment_data.order_id,
        payment_data.payment_method.value,
        card_number=card.card_number if card else None,
        card_type=card.card_type if card else None,
    )

    return PaymentOutcomeResponse(
        payment_id=outcome.payment_id,
        status=outcome.status,
        transaction_id=outcome.transaction_id,
        amount_cents=outcome.amount_cents,
        message="Payment processed successfully" if outcome.succeeded else "Payment failed",
    )


@router.get("/history", response_model=PaymentHistoryResponse)
async def payment_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List payments and refunds"""
    page_data = await payments.get_payment_history(db, current_user.id, page=page, limit=limit)
    return PaymentHistoryResponse.model_validate(page_data)


@router.get("/methods", response_model=PaymentMethodsResponse)
async def payment_methods(
    current_user: User = Depends(get_current_user),
):
    """Accepted payment methods"""
    return PaymentMethodsResponse(**payments.list_payment_methods())


@router.get("/{payment_id}", response_model=PaymentRecordResponse)
async def get_payment(
    payment_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get payment details"""
    record = await payments.get_payment_details(db, current_user.id, payment_id)
    return PaymentRecordResponse.model_validate(record)


@router.post("/{payment_id}/refund", response_model=RefundResponse)
async def refund_payment(
    payment_id: str,
    refund_data: RefundRequest,
    current_user: User = Depends(get_current_user),
    gateway: BasePaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    """Refund a completed payment"""
    outcome = await payments.refund_payment(
        db, gateway, current_user.id, payment_id, reason=refund_data.reason
    )

    return RefundResponse(
        refund_id=outcome.refund_id,
        status=outcome.status,
        amount_cents=outcome.amount_cents,
        message="Refund processed successfully" if outcome.succeeded else "Refund processing failed",
    )
