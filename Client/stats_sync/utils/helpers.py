"""
Helper Functions

Contains value coercion and identity helpers used throughout the client.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

import jwt


def to_amount(value: Any) -> float:
    """Coerce a wire value to a finite non-negative float; anything else is 0."""
    if not value or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def to_count(value: Any) -> int:
    """Coerce a wire value to a non-negative int; anything else is 0."""
    return int(to_amount(value))


def round_half_up(value: float, places: int = 1) -> float:
    """Round like JavaScript's ``toFixed``: ties go away from zero."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def to_percentage(value: Any) -> float:
    """Coerce to a percentage in [0, 100] with one decimal."""
    return round_half_up(min(to_amount(value), 100.0))


def user_id_from_token(token: Optional[str]) -> Optional[str]:
    """
    Read the ``user_id`` claim from a bearer token.

    The signature is not verified: the server is the authority on the token,
    the client only needs to know whose cache entry to read.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None
    user_id = payload.get("user_id")
    return str(user_id) if user_id else None
