"""External identifier generation

Identifiers are a prefix, the tail of the current millisecond timestamp and a
random base-36 suffix. Collisions are not checked; the unique constraints on
the identifier columns are the last line of defence.
"""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_uppercase


def _random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_identifier(prefix: str, timestamp_digits: int = 6) -> str:
    """Build a `PREFIX<timestamp tail><random>` identifier"""
    timestamp = str(int(time.time() * 1000))
    return f"{prefix}{timestamp[-timestamp_digits:]}{_random_suffix()}"


def generate_order_id() -> str:
    return generate_identifier("ORD")


def generate_payment_id() -> str:
    return generate_identifier("PAY")


def generate_transaction_id() -> str:
    return generate_identifier("TXN", timestamp_digits=8)


def generate_refund_id() -> str:
    return generate_identifier("REF")


def generate_review_id() -> str:
    return generate_identifier("REV")
