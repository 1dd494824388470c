"""User model for customer accounts"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from food_delivery.clock import utcnow
from food_delivery.database import Base


class User(Base):
    """Customer accounts"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    # Profile
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20))
    
    # Authentication
    hashed_password = Column(String(255), nullable=False)
    refresh_token = Column(String(500))
    
    # Status
    is_active = Column(Boolean, default=True)
    
    # Timestamps
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
