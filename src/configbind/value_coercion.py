"""Kind-aware value coercion for bound properties.

Provides the coercion table used by the binder. Each coercer takes the raw
property value and the attribute name (for error messages) and returns the
value the attribute's writer expects.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from configbind.attributes import AttributeKind
from configbind.duration import parse_duration
from configbind.exceptions import CoercionError
from configbind.object_registry import ObjectRegistry, default_registry

logger = logging.getLogger(__name__)

_DECIMAL_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

_INT16_RANGE = (-(2**15), 2**15 - 1)
_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)

# sign plus the 19 digits of the widest 64-bit value
_MAX_DECIMAL_LENGTH = 20
__all__ = [
    "coerce_bool",
    "coerce_chars",
    "coerce_int16",
    "coerce_int32",
    "coerce_int64",
    "coerce_object",
    "coerce_string",
    "coerce_value",
]


def _parse_decimal(value: object, *, field_path: str, bounds: tuple[int, int], expected: str) -> int:
    text = str(value)
    if len(text) > _MAX_DECIMAL_LENGTH or not _DECIMAL_PATTERN.fullmatch(text):
        raise CoercionError.for_value(field_path, value, expected)
    number = int(text)
    low, high = bounds
    if number < low or number > high:
        raise CoercionError.for_value(field_path, value, expected)
    return number


def coerce_int32(value: object, *, field_path: str) -> int:
    """
    Convert a value to a 32-bit integer.

    Args:
        value: The value to coerce (its string form must be a signed decimal)
        field_path: Attribute name (for error messages)

    Returns:
        Integer value

    Raises:
        CoercionError: If the value is not a decimal integer in range
    """
    return _parse_decimal(value, field_path=field_path, bounds=_INT32_RANGE, expected="a 32-bit integer")


def coerce_int64(value: object, *, field_path: str) -> int:
    """
    Convert a value to a 64-bit integer, accepting duration tokens.

    A duration token (``30s``, ``5m``) yields milliseconds; anything else is
    parsed as a plain decimal and is not rescaled.

    Raises:
        CoercionError: If the value is neither a duration token nor a decimal
    """
    text = str(value)
    millis = parse_duration(text)
    if millis is not None:
        if millis > _INT64_RANGE[1]:
            raise CoercionError.for_value(field_path, value, "a 64-bit integer or duration")
        return millis
    return _parse_decimal(value, field_path=field_path, bounds=_INT64_RANGE, expected="a 64-bit integer or duration")


def coerce_int16(value: object, *, field_path: str) -> int:
    return _parse_decimal(value, field_path=field_path, bounds=_INT16_RANGE, expected="a 16-bit integer")


def coerce_bool(value: object, *, field_path: str) -> bool:
    """Only a case-insensitive ``true`` is truthy; never raises."""
    return str(value).lower() == "true"


def coerce_chars(value: object, *, field_path: str) -> List[str]:
    return list(str(value))


def coerce_string(value: object, *, field_path: str) -> str:
    return str(value)


def coerce_object(value: object, *, field_path: str, registry: Optional[ObjectRegistry] = None) -> Any:
    """
    Build an object from a registered factory name, or pass the value through.

    Args:
        value: Factory name, or an already constructed object
        field_path: Attribute name (for log messages)
        registry: Factory registry; defaults to the module-wide registry

    Returns:
        New instance when *value* names a registered factory that succeeds,
        otherwise *value* itself
    """
    active = registry if registry is not None else default_registry
    if not isinstance(value, str):
        return value

    logger.debug("Try to create a new instance of %r for %s", value, field_path)
    try:
        return active.create(value)
    except Exception as exc:  # Construction failure falls back to the raw value  # policy_guard: allow-silent-handler
        logger.debug("Factory %r not registered or could not build an instance (%s)", value, exc)
        return value


def _passthrough(value: object, *, field_path: str) -> Any:
    return value


_COERCERS: Dict[AttributeKind, Callable[..., Any]] = {
    AttributeKind.INT: coerce_int32,
    AttributeKind.LONG: coerce_int64,
    AttributeKind.SHORT: coerce_int16,
    AttributeKind.BOOL: coerce_bool,
    AttributeKind.CHARS: coerce_chars,
    AttributeKind.STRING: coerce_string,
    AttributeKind.ANY: _passthrough,
}


def coerce_value(kind: AttributeKind, value: object, *, field_path: str, registry: Optional[ObjectRegistry] = None) -> Any:
    """Dispatch *value* to the coercer for *kind*."""
    if kind is AttributeKind.OBJECT:
        return coerce_object(value, field_path=field_path, registry=registry)
    return _COERCERS[kind](value, field_path=field_path)
