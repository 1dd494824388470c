"""Payment model"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text

from food_delivery.clock import utcnow
from food_delivery.database import Base


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods"""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"


class PaymentStatus(str, enum.Enum):
    """Payment outcomes"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Payment(Base):
    """Payment attempts and refunds. A refund is a negative-amount row."""
    __tablename__ = "payments"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    payment_id = Column(String(32), unique=True, nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    amount_cents = Column(Integer, nullable=False)
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False)
    transaction_id = Column(String(32))
    
    # Masked card metadata
    card_last_four = Column(String(4))
    card_type = Column(String(20))
    
    refund_reason = Column(Text)
    payment_date = Column(DateTime, default=utcnow)
