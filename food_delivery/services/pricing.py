"""Geo and pricing calculations

Pure functions: results depend only on the arguments and, for the time-based
helpers, on the `now` passed in (defaulting to the current UTC time).
"""

import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from food_delivery.clock import utcnow

EARTH_RADIUS_KM = 6371
AVERAGE_DELIVERY_SPEED_KMH = 20
FLAT_FEE_RADIUS_KM = 2
DEFAULT_PER_KM_FEE_CENTS = 500
ETA_WINDOW_MINUTES = 5


@dataclass(frozen=True)
class DeliveryEstimate:
    """Preparation plus travel time for one order"""
    total_minutes: int
    estimated_time: datetime

    @property
    def window_end_minutes(self) -> int:
        return self.total_minutes + ETA_WINDOW_MINUTES

    @property
    def time_range(self) -> str:
        """Display range, e.g. "39-44 minutes" """
        return f"{self.total_minutes}-{self.window_end_minutes} minutes"


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km using the haversine formula, rounded to 2 decimals"""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def calculate_delivery_fee(
    distance_km: float,
    base_fee_cents: int,
    per_km_fee_cents: int = DEFAULT_PER_KM_FEE_CENTS,
) -> int:
    """
    Flat base fee up to 2 km, then one per-km charge for every started km beyond.
    """
    if distance_km <= FLAT_FEE_RADIUS_KM:
        return base_fee_cents
    return base_fee_cents + math.ceil(distance_km - FLAT_FEE_RADIUS_KM) * per_km_fee_cents


def travel_minutes(distance_km: float, speed_kmh: float = AVERAGE_DELIVERY_SPEED_KMH) -> int:
    return math.ceil(distance_km / speed_kmh * 60)


def estimate_delivery(
    preparation_minutes: int,
    distance_km: float,
    now: Optional[datetime] = None,
    speed_kmh: float = AVERAGE_DELIVERY_SPEED_KMH,
) -> DeliveryEstimate:
    """Estimate total delivery time and the absolute arrival time"""
    total = preparation_minutes + travel_minutes(distance_km, speed_kmh)
    now = now or utcnow()
    return DeliveryEstimate(
        total_minutes=total,
        estimated_time=now + timedelta(minutes=total),
    )


def calculate_tax(subtotal_cents: int, rate_percent: float) -> int:
    """Tax in whole minor units, rounded half up"""
    tax = Decimal(subtotal_cents) * Decimal(str(rate_percent)) / Decimal(100)
    return int(tax.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def is_restaurant_open(opening_time: str, closing_time: str, now: Optional[datetime] = None) -> bool:
    """
    Check operating hours. A closing time earlier than the opening time
    means the restaurant closes after midnight.
    """
    current = (now or utcnow()).time().replace(second=0, microsecond=0)
    opens = _parse_hhmm(opening_time)
    closes = _parse_hhmm(closing_time)

    if closes < opens:
        return current >= opens or current <= closes
    return opens <= current <= closes


def format_address(
    address_line1: Optional[str],
    address_line2: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    pincode: Optional[str] = None,
) -> str:
    """Join the non-empty address parts for display"""
    parts = [address_line1, address_line2, city, state, pincode]
    return ", ".join(part for part in parts if part)
