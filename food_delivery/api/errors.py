"""Map service-layer failures to HTTP responses"""

from typing import Dict, Type

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from food_delivery.exceptions import (
    AddressNotFound,
    BusinessError,
    CartItemNotFound,
    CartRestaurantMismatch,
    EmailAlreadyRegistered,
    InfrastructureError,
    InvalidCredentials,
    MenuItemNotFound,
    OrderCannotBeCancelled,
    OrderNotFound,
    PaymentAlreadyCompleted,
    PaymentNotFound,
    RestaurantNotFound,
    ReviewAlreadyExists,
    ReviewNotFound,
    UserNotFound,
)

logger = structlog.get_logger()

# Business errors not listed here are 400 Bad Request
STATUS_CODES: Dict[Type[BusinessError], int] = {
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    AddressNotFound: status.HTTP_404_NOT_FOUND,
    CartItemNotFound: status.HTTP_404_NOT_FOUND,
    MenuItemNotFound: status.HTTP_404_NOT_FOUND,
    OrderNotFound: status.HTTP_404_NOT_FOUND,
    PaymentNotFound: status.HTTP_404_NOT_FOUND,
    RestaurantNotFound: status.HTTP_404_NOT_FOUND,
    ReviewNotFound: status.HTTP_404_NOT_FOUND,
    UserNotFound: status.HTTP_404_NOT_FOUND,
    CartRestaurantMismatch: status.HTTP_409_CONFLICT,
    EmailAlreadyRegistered: status.HTTP_409_CONFLICT,
    OrderCannotBeCancelled: status.HTTP_409_CONFLICT,
    PaymentAlreadyCompleted: status.HTTP_409_CONFLICT,
    ReviewAlreadyExists: status.HTTP_409_CONFLICT,
}


def status_code_for(exc: BusinessError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_400_BAD_REQUEST


async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(
        "Request rejected",
        path=request.url.path,
        code=exc.code,
        status_code=status_code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code, **exc.details},
        headers=headers,
    )


async def infrastructure_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Request failed", path=request.url.path, error_type=type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": InfrastructureError.message, "code": InfrastructureError.code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessError, business_error_handler)
    app.add_exception_handler(InfrastructureError, infrastructure_error_handler)
    app.add_exception_handler(SQLAlchemyError, infrastructure_error_handler)
