"""Cart API endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.auth import get_current_user
from food_delivery.database import get_db
from food_delivery.models.user import User
from food_delivery.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse
from food_delivery.schemas.common import MessageResponse
from food_delivery.services import cart

router = APIRouter()


@router.get("", response_model=CartResponse)
async def get_cart(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get cart contents and totals"""
    summary = await cart.get_cart_summary(db, current_user.id)
    return CartResponse.model_validate(summary)


@router.post("/items", response_model=CartResponse, status_code=201)
async def add_item(
    item_data: CartItemAdd,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add an item to the cart"""
    summary = await cart.add_to_cart(
        db,
        current_user.id,
        restaurant_id=item_data.restaurant_id,
        menu_item_id=item_data.menu_item_id,
        quantity=item_data.quantity,
        special_instructions=item_data.special_instructions,
    )
    return CartResponse.model_validate(summary)


@router.put("/items/{cart_item_id}", response_model=CartResponse)
async def update_item(
    cart_item_id: int,
    item_data: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change quantity or instructions of a cart line"""
    summary = await cart.update_cart_item(
        db,
        current_user.id,
        cart_item_id,
        quantity=item_data.quantity,
        special_instructions=item_data.special_instructions,
    )
    return CartResponse.model_validate(summary)


@router.delete("/items/{cart_item_id}", response_model=CartResponse)
async def remove_item(
    cart_item_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove a cart line"""
    summary = await cart.remove_cart_item(db, current_user.id, cart_item_id)
    return CartResponse.model_validate(summary)


@router.delete("", response_model=MessageResponse)
async def clear_cart(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Empty the cart"""
    await cart.clear_cart(db, current_user.id)
    return MessageResponse(message="Cart cleared successfully")
