"""Base payment gateway interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GatewayResult:
    """Outcome of a charge or refund"""
    success: bool
    transaction_id: Optional[str] = None
    message: Optional[str] = None


class BasePaymentGateway(ABC):
    """Abstract base class for payment gateways"""
    
    name = "base"
    
    @abstractmethod
    async def charge(self, payment_id: str, amount_cents: int, method: str) -> GatewayResult:
        """Charge the customer for an order"""
        pass
    
    @abstractmethod
    async def refund(self, payment_id: str, amount_cents: int) -> GatewayResult:
        """Return a completed charge to the customer"""
        pass
