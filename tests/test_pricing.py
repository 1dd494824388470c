"""Tests for geo and pricing calculations"""

import re
from datetime import datetime

import pytest

from food_delivery.services.identifiers import (
    generate_order_id,
    generate_payment_id,
    generate_transaction_id,
)
from food_delivery.services.pagination import Pagination
from food_delivery.services.pricing import (
    calculate_delivery_fee,
    calculate_distance,
    calculate_tax,
    estimate_delivery,
    format_address,
    is_restaurant_open,
)


def test_distance_is_zero_for_same_point():
    assert calculate_distance(12.9716, 77.5946, 12.9716, 77.5946) == 0


def test_distance_is_symmetric_and_rounded():
    there = calculate_distance(12.9716, 77.5946, 12.9966, 77.5946)
    back = calculate_distance(12.9966, 77.5946, 12.9716, 77.5946)

    assert there == back == 2.78


@pytest.mark.parametrize(
    "distance, expected",
    [
        (0, 4000),
        (2.0, 4000),
        (2.01, 4500),
        (2.78, 4500),
        (3.0, 4500),
        (3.01, 5000),
        (7.5, 7000),
    ],
)
def test_delivery_fee_charges_every_started_km_beyond_two(distance, expected):
    assert calculate_delivery_fee(distance, 4000) == expected


def test_delivery_fee_is_monotonic():
    fees = [calculate_delivery_fee(d / 10, 4000, 500) for d in range(0, 150)]
    assert fees == sorted(fees)


def test_estimate_delivery_adds_travel_to_preparation():
    now = datetime(2024, 1, 15, 12, 0)
    estimate = estimate_delivery(30, 2.78, now=now)

    assert estimate.total_minutes == 39
    assert estimate.time_range == "39-44 minutes"
    assert estimate.estimated_time == datetime(2024, 1, 15, 12, 39)


def test_estimate_delivery_at_zero_distance_is_preparation_only():
    estimate = estimate_delivery(20, 0, now=datetime(2024, 1, 15, 12, 0))

    assert estimate.total_minutes == 20
    assert estimate.time_range == "20-25 minutes"


@pytest.mark.parametrize(
    "subtotal, expected",
    [
        (40000, 2000),
        (1010, 51),  # 50.5 rounds up
        (1009, 50),
        (0, 0),
    ],
)
def test_tax_rounds_half_up(subtotal, expected):
    assert calculate_tax(subtotal, 5.0) == expected


@pytest.mark.parametrize(
    "hour, minute, expected",
    [
        (8, 59, False),
        (9, 0, True),
        (15, 30, True),
        (22, 0, True),
        (22, 1, False),
    ],
)
def test_opening_hours_same_day(hour, minute, expected):
    now = datetime(2024, 1, 15, hour, minute, 30)
    assert is_restaurant_open("09:00", "22:00", now) is expected


@pytest.mark.parametrize(
    "hour, expected",
    [
        (17, False),
        (23, True),
        (1, True),
        (3, False),
    ],
)
def test_opening_hours_past_midnight(hour, expected):
    now = datetime(2024, 1, 15, hour, 30)
    assert is_restaurant_open("18:00", "02:00", now) is expected


def test_format_address_skips_empty_parts():
    assert format_address("12 MG Road", None, "Bangalore", "", "560001") == "12 MG Road, Bangalore, 560001"


def test_identifier_formats():
    assert re.fullmatch(r"ORD\d{6}[0-9A-Z]{6}", generate_order_id())
    assert re.fullmatch(r"PAY\d{6}[0-9A-Z]{6}", generate_payment_id())
    assert re.fullmatch(r"TXN\d{8}[0-9A-Z]{6}", generate_transaction_id())


def test_pagination_metadata():
    pagination = Pagination(page=2, limit=10, total=25)

    assert pagination.offset == 10
    assert pagination.total_pages == 3
    assert pagination.has_next
    assert pagination.has_prev

    empty = Pagination(page=1, limit=10, total=0)
    assert empty.total_pages == 0
    assert not empty.has_next
    assert not empty.has_prev
