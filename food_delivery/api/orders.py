"""Order API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.auth import get_current_user
from food_delivery.database import get_db
from food_delivery.models.order import OrderStatus
from food_delivery.models.user import User
from food_delivery.schemas.common import MessageResponse
from food_delivery.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderListResponse,
    OrderPlacementResponse,
    OrderTrackingResponse,
)
from food_delivery.services import checkout, orders

router = APIRouter()


@router.post("", response_model=OrderPlacementResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Place an order from the cart"""
    placement = await checkout.create_order(
        db,
        current_user.id,
        address_id=order_data.address_id,
        payment_method=order_data.payment_method.value,
        special_instructions=order_data.special_instructions,
    )
    return OrderPlacementResponse.model_validate(placement)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: Optional[OrderStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the user's orders with pagination"""
    page_data = await orders.list_orders(
        db,
        current_user.id,
        status=status.value if status else None,
        page=page,
        limit=limit,
    )
    return OrderListResponse.model_validate(page_data)


@router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get order details"""
    detail = await orders.get_order_detail(db, current_user.id, order_id)
    return OrderDetailResponse.model_validate(detail)


@router.get("/{order_id}/tracking", response_model=OrderTrackingResponse)
async def get_order_tracking(
    order_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the order's status history"""
    view = await orders.get_order_tracking(db, current_user.id, order_id)
    return OrderTrackingResponse.model_validate(view)


@router.put("/{order_id}/cancel", response_model=MessageResponse)
async def cancel_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel an order that has not been prepared yet"""
    await orders.cancel_order(db, current_user.id, order_id)
    return MessageResponse(message="Order cancelled successfully")
