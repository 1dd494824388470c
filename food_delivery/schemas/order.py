"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from food_delivery.models.order import OrderStatus
from food_delivery.models.payment import PaymentMethod
from food_delivery.schemas.common import PaginationResponse


class OrderCreate(BaseModel):
    """Checkout request"""
    address_id: int
    payment_method: PaymentMethod
    special_instructions: Optional[str] = Field(None, max_length=500)


class OrderPlacementResponse(BaseModel):
    """Result of a checkout"""
    order_id: str
    status: OrderStatus
    subtotal_cents: int
    delivery_fee_cents: int
    tax_cents: int
    total_cents: int
    estimated_delivery_time: str
    estimated_delivery_at: datetime

    class Config:
        from_attributes = True


class OrderSummaryResponse(BaseModel):
    """Order in a list"""
    order_id: str
    restaurant_name: str
    status: str
    payment_status: str
    total_cents: int
    item_count: int
    created_at: datetime
    estimated_delivery_time: Optional[datetime]

    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    """Paginated order list"""
    orders: List[OrderSummaryResponse]
    pagination: PaginationResponse

    class Config:
        from_attributes = True


class OrderLineResponse(BaseModel):
    name: str
    quantity: int
    unit_price_cents: int
    total_price_cents: int
    special_instructions: Optional[str]

    class Config:
        from_attributes = True


class TrackingEventResponse(BaseModel):
    status: str
    description: Optional[str]
    timestamp: datetime

    class Config:
        from_attributes = True


class PartnerContactResponse(BaseModel):
    name: str
    phone: str

    class Config:
        from_attributes = True


class OrderDetailResponse(BaseModel):
    """Full order view"""
    order_id: str
    restaurant_name: str
    restaurant_phone: Optional[str]
    items: List[OrderLineResponse]
    delivery_address: str
    status: str
    payment_status: str
    tracking: List[TrackingEventResponse]
    delivery_partner: Optional[PartnerContactResponse]
    subtotal_cents: int
    delivery_fee_cents: int
    tax_cents: int
    total_cents: int
    payment_method: str
    special_instructions: Optional[str]
    ordered_at: datetime
    estimated_delivery_time: Optional[datetime]
    delivered_at: Optional[datetime]

    class Config:
        from_attributes = True


class OrderTrackingResponse(BaseModel):
    """Current status and status history"""
    order_id: str
    status: str
    tracking: List[TrackingEventResponse]

    class Config:
        from_attributes = True
