"""Delivery address model"""

import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, ForeignKey

from food_delivery.clock import utcnow
from food_delivery.database import Base


class AddressType(str, enum.Enum):
    """Address labels"""
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class Address(Base):
    """Delivery addresses owned by a user"""
    __tablename__ = "addresses"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), default=AddressType.HOME.value)
    
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255))
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    pincode = Column(String(10), nullable=False)
    
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    
    # Exactly one default per user with at least one address
    is_default = Column(Boolean, default=False, nullable=False)
    
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
