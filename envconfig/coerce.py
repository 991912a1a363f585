"""
Type coercion: one function per FieldKind.

Each coercer resolves the field, parses the result and returns the new
typed value. An empty resolved string returns the current value unchanged.
Only the numeric coercers can fail.
"""

import math
import re
from typing import Any, Callable

from envconfig.context import ResolutionContext
from envconfig.errors import FloatParseError, IntParseError
from envconfig.fields import FieldDescriptor, FieldKind
from envconfig.logger import get_coerce_logger
from envconfig.resolver import env_var_name, resolve

logger = get_coerce_logger()

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

Coercer = Callable[[FieldDescriptor, Any, ResolutionContext], Any]


def parse_int64(text: str) -> int:
    """Base-10 signed 64-bit integer. Raises ValueError."""
    if not _INT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError("value out of range")
    return value


def parse_float64(text: str) -> float:
    """
    64-bit float with ASCII-only syntax: decimal, hex with a p exponent
    (0x1p-2), inf/infinity with an optional sign, and unsigned nan.
    Overflow to infinity is an error.
    """
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError:
            raise ValueError("value out of range") from None
    if not _DEC_FLOAT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    value = float(text)
    if math.isinf(value):
        raise ValueError("value out of range")
    return value


def coerce_int(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    new_value = resolve(descriptor, current, ctx)
    if new_value == "":
        return current
    try:
        return parse_int64(new_value)
    except ValueError as e:
        name = env_var_name(descriptor.tag, ctx)
        logger.warning(f"{descriptor.name}: {new_value!r} is not a valid int ({e})")
        raise IntParseError(descriptor.name, name, new_value, str(e)) from e


def coerce_float(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    new_value = resolve(descriptor, current, ctx)
    if new_value == "":
        return current
    try:
        return parse_float64(new_value)
    except ValueError as e:
        name = env_var_name(descriptor.tag, ctx)
        logger.warning(f"{descriptor.name}: {new_value!r} is not a valid float ({e})")
        raise FloatParseError(descriptor.name, name, new_value, str(e)) from e


def coerce_string(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    new_value = resolve(descriptor, current, ctx)
    if new_value == "":
        return current
    return new_value


def coerce_bool(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    new_value = resolve(descriptor, current, ctx)
    if new_value == "":
        return current
    return new_value.lower() in ("true", "t", "1")


def coerce_collection(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    # Not implemented: no agreed serialization for list values in env vars.
    return current


COERCERS: dict[FieldKind, Coercer] = {
    FieldKind.INT: coerce_int,
    FieldKind.FLOAT: coerce_float,
    FieldKind.STRING: coerce_string,
    FieldKind.BOOL: coerce_bool,
    FieldKind.COLLECTION: coerce_collection,
}


def coerce(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> Any:
    return COERCERS[descriptor.kind](descriptor, current, ctx)
