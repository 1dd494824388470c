"""Database models"""

from food_delivery.models.user import User
from food_delivery.models.address import Address, AddressType
from food_delivery.models.restaurant import Restaurant, MenuCategory, MenuItem
from food_delivery.models.cart import CartItem
from food_delivery.models.order import (
    Order,
    OrderItem,
    OrderTracking,
    OrderStatus,
    DeliveryPartner,
    CANCELLABLE_STATUSES,
)
from food_delivery.models.payment import Payment, PaymentMethod, PaymentStatus
from food_delivery.models.review import Review

__all__ = [
    "User",
    "Address",
    "AddressType",
    "Restaurant",
    "MenuCategory",
    "MenuItem",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderTracking",
    "OrderStatus",
    "DeliveryPartner",
    "CANCELLABLE_STATUSES",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Review",
]
