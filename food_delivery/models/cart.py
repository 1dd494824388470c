"""Shopping cart model"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, UniqueConstraint

from food_delivery.clock import utcnow
from food_delivery.database import Base


class CartItem(Base):
    """One line of a user's cart. All lines of a user share one restaurant."""
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "menu_item_id", name="uq_cart_items_user_item"),
    )
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    special_instructions = Column(Text)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
