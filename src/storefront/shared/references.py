"""Human-readable reference numbers (checkout, order, shipment, tracking)."""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_uppercase


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def generate_reference(prefix: str) -> str:
    """``<PREFIX>-<epoch ms>-<9 random base36 chars>``, e.g. ``ORD-1718000000000-K3J9X0Q2A``."""
    return f"{prefix}-{_epoch_millis()}-{_random_suffix(9)}"


def generate_tracking_number() -> str:
    return f"TRK{_epoch_millis()}{_random_suffix(6)}"
