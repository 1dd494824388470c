"""Pydantic schemas for request/response validation"""

from food_delivery.schemas.common import PaginationResponse, MessageResponse
from food_delivery.schemas.auth import (
    Token,
    LoginRequest,
    RefreshRequest,
    UserCreate,
    UserUpdate,
    PasswordChange,
    UserResponse,
    RegisterResponse,
)
from food_delivery.schemas.address import AddressCreate, AddressUpdate, AddressResponse
from food_delivery.schemas.restaurant import (
    RestaurantSummary,
    RestaurantListResponse,
    RestaurantInfo,
    MenuItemResponse,
    MenuSectionResponse,
    RestaurantDetailResponse,
    SearchResponse,
)
from food_delivery.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse
from food_delivery.schemas.order import (
    OrderCreate,
    OrderPlacementResponse,
    OrderListResponse,
    OrderDetailResponse,
    OrderTrackingResponse,
)
from food_delivery.schemas.payment import (
    PaymentRequest,
    PaymentOutcomeResponse,
    PaymentRecordResponse,
    PaymentHistoryResponse,
    PaymentMethodsResponse,
    RefundRequest,
    RefundResponse,
)
from food_delivery.schemas.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewListResponse,
    ReviewStatsResponse,
)

__all__ = [
    "PaginationResponse",
    "MessageResponse",
    "Token",
    "LoginRequest",
    "RefreshRequest",
    "UserCreate",
    "UserUpdate",
    "PasswordChange",
    "UserResponse",
    "RegisterResponse",
    "AddressCreate",
    "AddressUpdate",
    "AddressResponse",
    "RestaurantSummary",
    "RestaurantListResponse",
    "RestaurantInfo",
    "MenuItemResponse",
    "MenuSectionResponse",
    "RestaurantDetailResponse",
    "SearchResponse",
    "CartItemAdd",
    "CartItemUpdate",
    "CartResponse",
    "OrderCreate",
    "OrderPlacementResponse",
    "OrderListResponse",
    "OrderDetailResponse",
    "OrderTrackingResponse",
    "PaymentRequest",
    "PaymentOutcomeResponse",
    "PaymentRecordResponse",
    "PaymentHistoryResponse",
    "PaymentMethodsResponse",
    "RefundRequest",
    "RefundResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewListResponse",
    "ReviewStatsResponse",
]
