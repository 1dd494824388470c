"""Customer accounts: registration, login, tokens and profile"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.clock import utcnow
from food_delivery.database import transaction
from food_delivery.exceptions import EmailAlreadyRegistered, InvalidCredentials, UserNotFound
from food_delivery.models.user import User
from food_delivery.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)

logger = structlog.get_logger()

PROFILE_FIELDS = ("name", "phone")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_active_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise UserNotFound()
    return user


async def issue_tokens(db: AsyncSession, user: User) -> TokenPair:
    tokens = TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
    )

    async with transaction(db):
        user.refresh_token = tokens.refresh_token
        user.last_login = utcnow()

    return tokens


async def register_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
) -> User:
    """Create an account. Emails are stored lower-cased."""
    if await get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegistered()

    user = User(
        name=name,
        email=email.lower(),
        phone=phone,
        hashed_password=get_password_hash(password),
    )

    async with transaction(db):
        db.add(user)

    logger.info("User registered", user_id=user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> TokenPair:
    """Check credentials and issue a fresh token pair"""
    user = await get_user_by_email(db, email)

    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentials()
    if not user.is_active:
        raise InvalidCredentials("User account is disabled")

    return await issue_tokens(db, user)


async def refresh_tokens(db: AsyncSession, refresh_token: str) -> TokenPair:
    """Rotate the refresh token. Only the most recently issued one is accepted."""
    try:
        payload = decode_token(refresh_token)
    except JWTError:
        raise InvalidCredentials("Invalid refresh token")

    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != REFRESH_TOKEN:
        raise InvalidCredentials("Invalid refresh token")

    user = await db.get(User, int(user_id))
    if user is None or not user.is_active or user.refresh_token != refresh_token:
        raise InvalidCredentials("Invalid refresh token")

    return await issue_tokens(db, user)


async def logout(db: AsyncSession, user: User) -> None:
    async with transaction(db):
        user.refresh_token = None


async def update_profile(db: AsyncSession, user: User, changes: Dict[str, Any]) -> User:
    async with transaction(db):
        for key in PROFILE_FIELDS:
            if key in changes:
                setattr(user, key, changes[key])
    return user


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    """Replace the password and revoke the refresh token"""
    if not verify_password(current_password, user.hashed_password):
        raise InvalidCredentials("Current password is incorrect")

    async with transaction(db):
        user.hashed_password = get_password_hash(new_password)
        user.refresh_token = None

    logger.info("Password changed", user_id=user.id)


async def deactivate_account(db: AsyncSession, user: User) -> None:
    """Soft delete: the row stays for order history"""
    async with transaction(db):
        user.is_active = False
        user.refresh_token = None

    logger.info("Account deactivated", user_id=user.id)
