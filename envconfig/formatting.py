"""Text forms of typed values, as written to help output and compared during resolution."""

import math
from decimal import Decimal


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_int(value: int) -> str:
    return str(int(value))


def format_float(value: float) -> str:
    """
    Shortest round-trip decimal form without an exponent.

    1e20 -> "100000000000000000000", 2.0 -> "2", -0.0 -> "-0".
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_default(value: object) -> str:
    """Render a declared default as the string the resolver hands to coercion."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, float):
        return format_float(value)
    return str(value)
