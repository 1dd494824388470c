"""Payment gateway implementations"""

from food_delivery.payments.base import BasePaymentGateway, GatewayResult
from food_delivery.payments.simulated import SimulatedPaymentGateway

__all__ = [
    "BasePaymentGateway",
    "GatewayResult",
    "SimulatedPaymentGateway",
]
