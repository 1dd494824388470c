"""Delivery address API endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.api.auth import get_current_user
from food_delivery.database import get_db
from food_delivery.models.user import User
from food_delivery.schemas.address import AddressCreate, AddressResponse, AddressUpdate
from food_delivery.schemas.common import MessageResponse
from food_delivery.services import addresses

router = APIRouter()


@router.get("", response_model=List[AddressResponse])
async def list_addresses(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the user's addresses, default first"""
    return await addresses.list_addresses(db, current_user.id)


@router.post("", response_model=AddressResponse, status_code=201)
async def create_address(
    address_data: AddressCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add an address"""
    return await addresses.add_address(db, current_user.id, address_data.model_dump(mode="json"))


@router.get("/{address_id}", response_model=AddressResponse)
async def get_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get address details"""
    return await addresses.get_address(db, current_user.id, address_id)


@router.put("/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: int,
    address_data: AddressUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update address fields"""
    changes = address_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return await addresses.update_address(db, current_user.id, address_id, changes)


@router.put("/{address_id}/set-default", response_model=AddressResponse)
async def set_default_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Make this the default delivery address"""
    return await addresses.set_default_address(db, current_user.id, address_id)


@router.delete("/{address_id}", response_model=MessageResponse)
async def delete_address(
    address_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an address"""
    await addresses.delete_address(db, current_user.id, address_id)
    return MessageResponse(message="Address deleted successfully")
