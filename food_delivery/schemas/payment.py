"""Payment schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from food_delivery.models.payment import PaymentMethod
from food_delivery.schemas.common import PaginationResponse


class CardDetails(BaseModel):
    """Card data; only the last four digits are stored"""
    card_number: str = Field(..., min_length=12, max_length=19, pattern=r"^\d+$")
    card_type: Optional[str] = Field(None, max_length=20)


class PaymentRequest(BaseModel):
    """Process payment request"""
    order_id: str
    payment_method: PaymentMethod
    card_details: Optional[CardDetails] = None


class PaymentOutcomeResponse(BaseModel):
    """Result of a payment attempt"""
    payment_id: str
    status: str
    transaction_id: Optional[str]
    amount_cents: int
    message: str


class PaymentRecordResponse(BaseModel):
    """Stored payment or refund"""
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

    class Config:
        from_attributes = True


class PaymentHistoryResponse(BaseModel):
    """Paginated payment history"""
    payments: List[PaymentRecordResponse]
    pagination: PaginationResponse

    class Config:
        from_attributes = True


class PaymentMethodsResponse(BaseModel):
    payment_methods: List[str]
    default_method: str


class RefundRequest(BaseModel):
    """Refund request"""
    reason: Optional[str] = Field(None, max_length=500)


class RefundResponse(BaseModel):
    """Result of a refund attempt"""
    refund_id: Optional[str]
    status: str
    amount_cents: int
    message: str
