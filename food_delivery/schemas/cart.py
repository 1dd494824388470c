"""Cart schemas"""

from typing import Optional, List
from pydantic import BaseModel, Field


class CartItemAdd(BaseModel):
    """Add to cart request"""
    restaurant_id: int
    menu_item_id: int
    quantity: int = Field(1, ge=1, le=20)
    special_instructions: Optional[str] = Field(None, max_length=500)


class CartItemUpdate(BaseModel):
    """Change a cart line; quantity 0 removes it"""
    quantity: int = Field(..., ge=0, le=20)
    special_instructions: Optional[str] = Field(None, max_length=500)


class CartLineResponse(BaseModel):
    id: int
    menu_item_id: int
    name: str
    description: Optional[str]
    price_cents: int
    quantity: int
    total_cents: int
    is_available: bool
    is_veg: bool
    image_url: Optional[str]
    special_instructions: Optional[str]

    class Config:
        from_attributes = True


class CartRestaurantResponse(BaseModel):
    id: int
    name: str
    is_open: bool
    delivery_fee_cents: int
    min_order_amount_cents: int

    class Config:
        from_attributes = True


class CartResponse(BaseModel):
    """Cart contents and totals"""
    items: List[CartLineResponse]
    restaurant: Optional[CartRestaurantResponse]
    subtotal_cents: int
    delivery_fee_cents: int
    total_cents: int
    item_count: int

    class Config:
        from_attributes = True
