"""Order, order item and tracking models"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from food_delivery.clock import utcnow
from food_delivery.database import Base


class OrderStatus(str, enum.Enum):
    """Order lifecycle"""
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


CANCELLABLE_STATUSES = (OrderStatus.PLACED.value, OrderStatus.CONFIRMED.value)


class DeliveryPartner(Base):
    """Riders that can be assigned to an order"""
    __tablename__ = "delivery_partners"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    vehicle_type = Column(String(20), default="bike")  # bike, car, bicycle
    status = Column(String(20), default="available")  # available, busy, offline
    created_at = Column(DateTime, default=utcnow)


class Order(Base):
    """Delivery orders, created only by checkout"""
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(32), unique=True, nullable=False, index=True)  # external identifier
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)
    delivery_partner_id = Column(Integer, ForeignKey("delivery_partners.id"))
    
    # Status
    status = Column(String(50), nullable=False, default=OrderStatus.PLACED.value)
    payment_status = Column(String(50), nullable=False, default="pending")
    
    # Pricing in minor currency units
    subtotal_cents = Column(Integer, nullable=False)
    delivery_fee_cents = Column(Integer, nullable=False)
    tax_cents = Column(Integer, nullable=False)
    total_cents = Column(Integer, nullable=False)
    
    payment_method = Column(String(20), nullable=False)
    special_instructions = Column(Text)
    
    # Timing
    estimated_delivery_time = Column(DateTime)
    delivered_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    
    # Relationships
    items = relationship("OrderItem", back_populates="order")
    tracking_events = relationship(
        "OrderTracking",
        back_populates="order",
        order_by="OrderTracking.id",
    )


class OrderItem(Base):
    """Snapshot of a cart line taken at checkout"""
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"))
    item_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)
    total_price_cents = Column(Integer, nullable=False)
    special_instructions = Column(Text)
    
    # Relationships
    order = relationship("Order", back_populates="items")


class OrderTracking(Base):
    """Append-only status log of an order"""
    __tablename__ = "order_tracking"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    status = Column(String(50), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=utcnow)
    
    # Relationships
    order = relationship("Order", back_populates="tracking_events")
