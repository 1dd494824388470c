"""Restaurant and menu models"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship

from food_delivery.clock import utcnow
from food_delivery.config import settings
from food_delivery.database import Base


class Restaurant(Base):
    """Restaurants delivering through the platform"""
    __tablename__ = "restaurants"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    cuisine_types = Column(JSON, default=list)  # ["North Indian", "Chinese", ...]
    
    # Contact and location
    address_line1 = Column(String(255))
    city = Column(String(100))
    phone = Column(String(20))
    email = Column(String(255))
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    
    # Operating hours, "HH:MM"
    opening_time = Column(String(5), default="09:00")
    closing_time = Column(String(5), default="23:00")
    is_open = Column(Boolean, default=True)
    is_veg_only = Column(Boolean, default=False)
    
    # Pricing in minor currency units
    delivery_fee_cents = Column(Integer, nullable=False, default=settings.default_delivery_fee_cents)
    min_order_amount_cents = Column(Integer, nullable=False, default=0)
    avg_preparation_time = Column(Integer, nullable=False, default=30)  # minutes
    
    # Aggregates maintained from reviews
    rating = Column(Float, default=0)
    total_reviews = Column(Integer, default=0)
    
    image_url = Column(String(500))
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    
    # Relationships
    categories = relationship("MenuCategory", back_populates="restaurant")
    menu_items = relationship("MenuItem", back_populates="restaurant")


class MenuCategory(Base):
    """Menu sections"""
    __tablename__ = "menu_categories"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="categories")
    items = relationship("MenuItem", back_populates="category")


class MenuItem(Base):
    """Menu items"""
    __tablename__ = "menu_items"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("menu_categories.id"))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price_cents = Column(Integer, nullable=False)  # Price in minor units to avoid float issues
    is_veg = Column(Boolean, default=False)
    is_available = Column(Boolean, default=True)
    image_url = Column(String(500))
    preparation_time = Column(Integer)
    calories = Column(Integer)
    allergens = Column(JSON, default=list)  # ["nuts", "dairy", etc.]
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    
    # Relationships
    restaurant = relationship("Restaurant", back_populates="menu_items")
    category = relationship("MenuCategory", back_populates="items")
