"""Restaurant review model"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint

from food_delivery.clock import utcnow
from food_delivery.database import Base


class Review(Base):
    """Reviews of delivered orders"""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "order_id", name="uq_reviews_user_order"),
    )
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    review_id = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    
    # Ratings 1-5
    rating = Column(Integer, nullable=False)
    food_rating = Column(Integer, nullable=False)
    delivery_rating = Column(Integer, nullable=False)
    comment = Column(Text)
    
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
