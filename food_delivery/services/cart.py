"""Cart snapshot reader and cart mutations"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.database import transaction
from food_delivery.exceptions import (
    CartItemNotFound,
    CartRestaurantMismatch,
    ItemUnavailable,
    MenuItemNotFound,
    RestaurantClosed,
)
from food_delivery.models.cart import CartItem
from food_delivery.models.restaurant import MenuItem, Restaurant

logger = structlog.get_logger()


@dataclass(frozen=True)
class CartRestaurant:
    """Live restaurant state relevant to checkout"""
    id: int
    name: str
    is_open: bool
    delivery_fee_cents: int
    min_order_amount_cents: int
    avg_preparation_time: int
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CartLine:
    """A cart line joined with the live menu item"""
    id: int
    menu_item_id: int
    name: str
    description: Optional[str]
    price_cents: int
    quantity: int
    is_available: bool
    is_veg: bool
    image_url: Optional[str]
    special_instructions: Optional[str]

    @property
    def total_cents(self) -> int:
        return self.price_cents * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    """Consistent read of a non-empty cart"""
    restaurant: CartRestaurant
    lines: List[CartLine] = field(default_factory=list)

    @property
    def subtotal_cents(self) -> int:
        return sum(line.total_cents for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def unavailable_item_names(self) -> List[str]:
        return [line.name for line in self.lines if not line.is_available]


@dataclass(frozen=True)
class CartSummary:
    """Cart view returned to clients"""
    items: List[CartLine]
    restaurant: Optional[CartRestaurant]
    subtotal_cents: int
    delivery_fee_cents: int
    total_cents: int
    item_count: int


async def read_cart_snapshot(db: AsyncSession, user_id: int) -> Optional[CartSnapshot]:
    """
    Read the user's cart joined with live menu and restaurant state.

    Returns None for an empty cart. Raises CartRestaurantMismatch if the
    lines somehow reference more than one restaurant.
    """
    result = await db.execute(
        select(CartItem, MenuItem, Restaurant)
        .join(MenuItem, CartItem.menu_item_id == MenuItem.id)
        .join(Restaurant, CartItem.restaurant_id == Restaurant.id)
        .where(CartItem.user_id == user_id)
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
    )
    rows = result.all()

    if not rows:
        return None

    restaurant_ids = {restaurant.id for _, _, restaurant in rows}
    if len(restaurant_ids) > 1:
        logger.warning("Cart spans several restaurants", user_id=user_id, restaurant_ids=sorted(restaurant_ids))
        raise CartRestaurantMismatch()

    restaurant = rows[0][2]
    return CartSnapshot(
        restaurant=CartRestaurant(
            id=restaurant.id,
            name=restaurant.name,
            is_open=bool(restaurant.is_open),
            delivery_fee_cents=restaurant.delivery_fee_cents,
            min_order_amount_cents=restaurant.min_order_amount_cents,
            avg_preparation_time=restaurant.avg_preparation_time,
            latitude=restaurant.latitude,
            longitude=restaurant.longitude,
        ),
        lines=[
            CartLine(
                id=cart_item.id,
                menu_item_id=menu_item.id,
                name=menu_item.name,
                description=menu_item.description,
                price_cents=menu_item.price_cents,
                quantity=cart_item.quantity,
                is_available=bool(menu_item.is_available),
                is_veg=bool(menu_item.is_veg),
                image_url=menu_item.image_url,
                special_instructions=cart_item.special_instructions,
            )
            for cart_item, menu_item, _ in rows
        ],
    )


async def get_cart_summary(db: AsyncSession, user_id: int) -> CartSummary:
    """Cart with totals. The delivery fee shown is the restaurant's base fee."""
    snapshot = await read_cart_snapshot(db, user_id)

    if snapshot is None:
        return CartSummary(
            items=[],
            restaurant=None,
            subtotal_cents=0,
            delivery_fee_cents=0,
            total_cents=0,
            item_count=0,
        )

    delivery_fee = snapshot.restaurant.delivery_fee_cents
    return CartSummary(
        items=snapshot.lines,
        restaurant=snapshot.restaurant,
        subtotal_cents=snapshot.subtotal_cents,
        delivery_fee_cents=delivery_fee,
        total_cents=snapshot.subtotal_cents + delivery_fee,
        item_count=snapshot.item_count,
    )


async def add_to_cart(
    db: AsyncSession,
    user_id: int,
    restaurant_id: int,
    menu_item_id: int,
    quantity: int = 1,
    special_instructions: Optional[str] = None,
) -> CartSummary:
    """Add an item, merging quantities with an existing line for the same item"""
    result = await db.execute(
        select(MenuItem, Restaurant)
        .join(Restaurant, MenuItem.restaurant_id == Restaurant.id)
        .where(MenuItem.id == menu_item_id, MenuItem.restaurant_id == restaurant_id)
    )
    row = result.first()

    if row is None:
        raise MenuItemNotFound()

    menu_item, restaurant = row
    if not menu_item.is_available:
        raise ItemUnavailable([menu_item.name])
    if not restaurant.is_open:
        raise RestaurantClosed()

    result = await db.execute(
        select(CartItem.restaurant_id).where(CartItem.user_id == user_id).limit(1)
    )
    existing_restaurant_id = result.scalar_one_or_none()
    if existing_restaurant_id is not None and existing_restaurant_id != restaurant_id:
        raise CartRestaurantMismatch()

    result = await db.execute(
        select(CartItem).where(CartItem.user_id == user_id, CartItem.menu_item_id == menu_item_id)
    )
    line = result.scalar_one_or_none()

    async with transaction(db):
        if line:
            line.quantity = line.quantity + quantity
            line.special_instructions = special_instructions
        else:
            db.add(
                CartItem(
                    user_id=user_id,
                    restaurant_id=restaurant_id,
                    menu_item_id=menu_item_id,
                    quantity=quantity,
                    special_instructions=special_instructions,
                )
            )

    logger.info("Item added to cart", user_id=user_id, menu_item_id=menu_item_id, quantity=quantity)
    return await get_cart_summary(db, user_id)


async def update_cart_item(
    db: AsyncSession,
    user_id: int,
    cart_item_id: int,
    quantity: int,
    special_instructions: Optional[str] = None,
) -> CartSummary:
    """Change a line's quantity; zero or less removes the line"""
    result = await db.execute(
        select(CartItem, MenuItem, Restaurant)
        .join(MenuItem, CartItem.menu_item_id == MenuItem.id)
        .join(Restaurant, CartItem.restaurant_id == Restaurant.id)
        .where(CartItem.id == cart_item_id, CartItem.user_id == user_id)
    )
    row = result.first()

    if row is None:
        raise CartItemNotFound()

    line, menu_item, restaurant = row
    if not menu_item.is_available:
        raise ItemUnavailable([menu_item.name])
    if not restaurant.is_open:
        raise RestaurantClosed()

    async with transaction(db):
        if quantity <= 0:
            await db.delete(line)
        else:
            line.quantity = quantity
            line.special_instructions = special_instructions

    return await get_cart_summary(db, user_id)


async def remove_cart_item(db: AsyncSession, user_id: int, cart_item_id: int) -> CartSummary:
    result = await db.execute(
        select(CartItem).where(CartItem.id == cart_item_id, CartItem.user_id == user_id)
    )
    line = result.scalar_one_or_none()

    if line is None:
        raise CartItemNotFound()

    async with transaction(db):
        await db.delete(line)

    return await get_cart_summary(db, user_id)


async def clear_cart(db: AsyncSession, user_id: int) -> None:
    async with transaction(db):
        await db.execute(delete(CartItem).where(CartItem.user_id == user_id))
    logger.info("Cart cleared", user_id=user_id)
