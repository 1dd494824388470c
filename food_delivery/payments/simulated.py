"""Simulated payment gateway

Decides success at random with configurable rates. Pass a seeded
`random.Random` for reproducible outcomes.
"""

import random
from typing import Optional

import structlog

from food_delivery.config import settings
from food_delivery.payments.base import BasePaymentGateway, GatewayResult
from food_delivery.services.identifiers import generate_transaction_id

logger = structlog.get_logger()


class SimulatedPaymentGateway(BasePaymentGateway):
    """In-process gateway that never talks to a real processor"""
    
    name = "simulated"
    
    def __init__(
        self,
        success_rate: Optional[float] = None,
        refund_success_rate: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.success_rate = settings.payment_success_rate if success_rate is None else success_rate
        self.refund_success_rate = (
            settings.refund_success_rate if refund_success_rate is None else refund_success_rate
        )
        self.rng = rng or random.Random()
    
    async def charge(self, payment_id: str, amount_cents: int, method: str) -> GatewayResult:
        if self.rng.random() < self.success_rate:
            return GatewayResult(success=True, transaction_id=generate_transaction_id())
        
        logger.info("Simulated charge declined", payment_id=payment_id, method=method)
        return GatewayResult(success=False, message="Payment failed")
    
    async def refund(self, payment_id: str, amount_cents: int) -> GatewayResult:
        if self.rng.random() < self.refund_success_rate:
            return GatewayResult(success=True, transaction_id=generate_transaction_id())
        
        logger.info("Simulated refund declined", payment_id=payment_id)
        return GatewayResult(success=False, message="Refund processing failed")
