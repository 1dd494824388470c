"""Address aggregate

Owns the default-address invariant: a user with at least one address has
exactly one default, and the last remaining address cannot be deleted. All
writes to `Address.is_default` go through this module.
"""

from typing import Any, Dict, List

import structlog
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.database import transaction
from food_delivery.exceptions import AddressNotFound, LastAddressCannotBeDeleted
from food_delivery.models.address import Address

logger = structlog.get_logger()

EDITABLE_FIELDS = (
    "type",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "pincode",
    "latitude",
    "longitude",
)


async def _count_addresses(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(select(func.count(Address.id)).where(Address.user_id == user_id))
    return result.scalar() or 0


async def _clear_default(db: AsyncSession, user_id: int) -> None:
    await db.execute(
        update(Address)
        .where(Address.user_id == user_id, Address.is_default == True)
        .values(is_default=False)
        .execution_options(synchronize_session="fetch")
    )


async def list_addresses(db: AsyncSession, user_id: int) -> List[Address]:
    """Default address first, then newest first"""
    result = await db.execute(
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.created_at.desc(), Address.id.desc())
    )
    return list(result.scalars().all())


async def get_address(db: AsyncSession, user_id: int, address_id: int) -> Address:
    """Fetch an address owned by the user"""
    result = await db.execute(
        select(Address).where(Address.id == address_id, Address.user_id == user_id)
    )
    address = result.scalar_one_or_none()

    if address is None:
        raise AddressNotFound("Address not found")

    return address


async def add_address(db: AsyncSession, user_id: int, data: Dict[str, Any]) -> Address:
    """Create an address. The user's first address becomes the default."""
    is_first = await _count_addresses(db, user_id) == 0

    address = Address(
        user_id=user_id,
        is_default=is_first,
        **{key: data[key] for key in EDITABLE_FIELDS if key in data},
    )

    async with transaction(db):
        db.add(address)

    logger.info("Address added", user_id=user_id, address_id=address.id, is_default=is_first)
    return address


async def update_address(db: AsyncSession, user_id: int, address_id: int, data: Dict[str, Any]) -> Address:
    """Update address fields. The default flag is not editable here."""
    address = await get_address(db, user_id, address_id)

    async with transaction(db):
        for key in EDITABLE_FIELDS:
            if key in data:
                setattr(address, key, data[key])

    return address


async def set_default_address(db: AsyncSession, user_id: int, address_id: int) -> Address:
    address = await get_address(db, user_id, address_id)

    async with transaction(db):
        await _clear_default(db, user_id)
        address.is_default = True

    logger.info("Default address changed", user_id=user_id, address_id=address_id)
    return address


async def delete_address(db: AsyncSession, user_id: int, address_id: int) -> None:
    """
    Delete an address. Deleting the default promotes the most recently
    created remaining address.
    """
    address = await get_address(db, user_id, address_id)

    if await _count_addresses(db, user_id) <= 1:
        raise LastAddressCannotBeDeleted()

    was_default = bool(address.is_default)

    async with transaction(db):
        await db.delete(address)
        await db.flush()

        if was_default:
            result = await db.execute(
                select(Address)
                .where(Address.user_id == user_id)
                .order_by(Address.created_at.desc(), Address.id.desc())
                .limit(1)
            )
            replacement = result.scalar_one()
            replacement.is_default = True

    logger.info("Address deleted", user_id=user_id, address_id=address_id, was_default=was_default)
