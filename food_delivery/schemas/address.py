"""Address schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from food_delivery.models.address import AddressType


class AddressCreate(BaseModel):
    """Create address request"""
    type: AddressType = AddressType.HOME
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=4, max_length=10)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class AddressUpdate(BaseModel):
    """Update address request"""
    type: Optional[AddressType] = None
    address_line1: Optional[str] = Field(None, min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    pincode: Optional[str] = Field(None, min_length=4, max_length=10)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class AddressResponse(BaseModel):
    """Address response"""
    id: int
    type: str
    address_line1: str
    address_line2: Optional[str]
    city: str
    state: str
    pincode: str
    latitude: float
    longitude: float
    is_default: bool
    created_at: datetime

    class Config:
        from_attributes = True
