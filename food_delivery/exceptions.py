"""Typed failures raised by the service layer

Business errors are expected outcomes of a request against the current state
and are reported to the caller as-is. Infrastructure errors mean the store
itself failed; they carry no store detail.
"""

from typing import Any, Dict, List, Optional


class FoodDeliveryError(Exception):
    """Base class for all service-layer failures"""

    code = "error"
    message = "Request failed"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)


class BusinessError(FoodDeliveryError):
    """A business rule rejected the request"""


class InfrastructureError(FoodDeliveryError):
    """The data store failed while serving the request"""

    code = "infrastructure_error"
    message = "Internal server error"


# Checkout

class CartEmpty(BusinessError):
    code = "cart_empty"
    message = "Cart is empty"


class RestaurantClosed(BusinessError):
    code = "restaurant_closed"
    message = "Restaurant is currently closed"


class ItemUnavailable(BusinessError):
    code = "item_unavailable"
    message = "Item is currently unavailable"

    def __init__(self, item_names: Optional[List[str]] = None):
        super().__init__(unavailable_items=list(item_names or []))
        self.item_names = list(item_names or [])


class AddressNotFound(BusinessError):
    code = "address_not_found"
    message = "Delivery address not found"


class MinimumOrderNotMet(BusinessError):
    code = "min_order_not_met"
    message = "Order amount is below minimum requirement"

    def __init__(self, required_cents: int):
        super().__init__(min_order_amount_cents=required_cents)
        self.required_cents = required_cents


# Orders

class OrderNotFound(BusinessError):
    code = "order_not_found"
    message = "Order not found"


class OrderCannotBeCancelled(BusinessError):
    code = "order_cannot_be_cancelled"
    message = "Order cannot be cancelled at this stage"


class OrderNotPayable(BusinessError):
    code = "order_not_payable"
    message = "Payment cannot be made for a cancelled order"


# Cart

class CartRestaurantMismatch(BusinessError):
    code = "cart_restaurant_mismatch"
    message = "Cart can only contain items from one restaurant"


class CartItemNotFound(BusinessError):
    code = "cart_item_not_found"
    message = "Cart item not found"


class MenuItemNotFound(BusinessError):
    code = "menu_item_not_found"
    message = "Menu item not found"


class RestaurantNotFound(BusinessError):
    code = "restaurant_not_found"
    message = "Restaurant not found"


# Addresses

class LastAddressCannotBeDeleted(BusinessError):
    code = "last_address"
    message = "Cannot delete the only address. Please add another address first."


# Accounts

class EmailAlreadyRegistered(BusinessError):
    code = "email_already_registered"
    message = "User with this email already exists"


class InvalidCredentials(BusinessError):
    code = "invalid_credentials"
    message = "Invalid email or password"


class UserNotFound(BusinessError):
    code = "user_not_found"
    message = "User not found"


# Payments

class PaymentNotFound(BusinessError):
    code = "payment_not_found"
    message = "Payment not found"


class PaymentAlreadyCompleted(BusinessError):
    code = "payment_already_completed"
    message = "Payment already completed for this order"


class RefundNotAllowed(BusinessError):
    code = "refund_not_allowed"
    message = "Payment cannot be refunded"


# Reviews

class ReviewNotFound(BusinessError):
    code = "review_not_found"
    message = "Review not found"


class ReviewNotAllowed(BusinessError):
    code = "review_not_allowed"
    message = "You can only review restaurants you have ordered from and received delivery"


class ReviewAlreadyExists(BusinessError):
    code = "review_already_exists"
    message = "You have already reviewed this order"


class ReviewWindowExpired(BusinessError):
    code = "review_window_expired"
    message = "Reviews can only be changed within 24 hours of creation"


class NothingToUpdate(BusinessError):
    code = "nothing_to_update"
    message = "No fields to update"
