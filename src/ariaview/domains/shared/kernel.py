"""Shared Kernel - Types shared across the codec, registry and view contexts.

These types are intentionally minimal:
- ElementHandle / ElementResolver describe the host collaborators
  (attribute store and identifier lookup) the core is written against.
- The coercion helpers reproduce the string and number conversions of
  the attribute store so every codec stringifies values the same way.
- The Annotated validators normalise attribute-table input before the
  registry is built.
"""

from __future__ import annotations

import math
import re
from typing import (
    Annotated,
    Any,
    List,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

from pydantic import BeforeValidator

ATTRIBUTE_PREFIX = "aria-"

# Names taken by public TypedView members; not usable as property names
RESERVED_PROPERTY_NAMES = frozenset({"accessor", "is_set", "names", "to_dict"})


def prefixed_key(name: str) -> str:
    """Return the raw attribute key for a logical property name.

    Examples:
        >>> prefixed_key("label")
        'aria-label'
    """
    return f"{ATTRIBUTE_PREFIX}{name}"


@runtime_checkable
class ElementHandle(Protocol):
    """An element carrying a flat string-keyed attribute store.

    Attribute names are expected to be case-insensitive, matching
    markup attribute semantics.
    """

    @property
    def id(self) -> str:
        """The element identifier ('' when the element has none)."""
        ...

    def get_attribute(self, key: str) -> Optional[str]:
        """Return the raw attribute value, or None when absent."""
        ...

    def set_attribute(self, key: str, value: str) -> None:
        """Store a raw attribute value."""
        ...

    def remove_attribute(self, key: str) -> None:
        """Remove the attribute entirely (no-op when absent)."""
        ...

    def has_attribute(self, key: str) -> bool:
        """Check whether the attribute is present."""
        ...


@runtime_checkable
class ElementResolver(Protocol):
    """Resolves opaque identifiers to element handles."""

    def get_element_by_id(self, element_id: str) -> Optional[ElementHandle]:
        """Return the element with the given identifier, or None."""
        ...


def is_element(value: Any) -> bool:
    """Check whether a value satisfies the ElementHandle protocol."""
    return not isinstance(value, str) and isinstance(value, ElementHandle)


# ============================================================
# Attribute-store coercions
# ============================================================

# Leading numeric prefix accepted by parseFloat-style parsing
_FLOAT_PREFIX = re.compile(
    r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

_WHITESPACE = " \t\n\r\f\v\u00a0\ufeff"


def parse_float(raw: str) -> float:
    """Parse the longest leading numeric prefix of a string.

    Mirrors attribute-store float parsing: leading whitespace is
    skipped, trailing garbage is ignored and a string without a numeric
    prefix yields NaN.

    Examples:
        >>> parse_float("12.5px")
        12.5
        >>> math.isnan(parse_float("abc"))
        True
    """
    match = _FLOAT_PREFIX.match(raw.lstrip(_WHITESPACE))
    if not match:
        return math.nan
    text = match.group(0)
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


# Whole-string radix literals accepted by number coercion ("0x1F", "0o17", "0b101")
_RADIX_LITERAL = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def _int_to_float(number: int) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def to_number(value: Any) -> float:
    """Coerce an arbitrary value to a float the way the store does.

    Booleans become 1/0, blank strings become 0, unsigned ``0x``/``0o``/``0b``
    literals are read in their radix, strings that are not a complete
    number become NaN, and anything non-numeric becomes NaN.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        text = value.strip(_WHITESPACE)
        if not text:
            return 0.0
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if _RADIX_LITERAL.fullmatch(text):
            return _int_to_float(int(text, 0))
        if "_" in text or text.lower() in (
            "inf", "+inf", "-inf", "infinity", "+infinity", "-infinity",
            "nan", "+nan", "-nan",
        ):
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    if value is None:
        return 0.0
    return math.nan


def truncate(number: float) -> Union[int, float]:
    """Truncate toward zero; non-finite values are returned unchanged."""
    if not math.isfinite(number):
        return number
    return int(number)


def _shortest_digits(number: float) -> Tuple[str, int]:
    """Split a positive finite float into significant digits and point position.

    The value equals ``0.<digits> * 10 ** point``.
    """
    mantissa, _, exponent = repr(number).partition("e")
    whole, _, fraction = mantissa.partition(".")
    digits = whole + fraction
    point = len(whole) + int(exponent or 0)
    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    return stripped.rstrip("0") or "0", point


def format_number(number: Union[int, float]) -> str:
    """Stringify a number the way the attribute store does.

    Magnitudes from 1e-6 up to, but not including, 1e21 are written in
    plain decimal form. Everything else uses exponent form with an
    explicit sign.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(float("nan"))
        'NaN'
        >>> format_number(1.5e-7)
        '1.5e-7'
        >>> format_number(1e300)
        '1e+300'
    """
    if isinstance(number, bool):
        return "true" if number else "false"
    if isinstance(number, int):
        if abs(number) < 10 ** 21:
            return str(number)
        number = _int_to_float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    digits, point = _shortest_digits(abs(number))
    count = len(digits)
    if count <= point <= 21:
        return sign + digits + "0" * (point - count)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    exponent = point - 1
    exponent_text = f"e+{exponent}" if exponent >= 0 else f"e-{-exponent}"
    if count == 1:
        return sign + digits + exponent_text
    return sign + digits[0] + "." + digits[1:] + exponent_text


def stringify(value: Any) -> str:
    """Convert a value to its stored string form."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if value is None:
        return "null"
    return str(value)


# ============================================================
# Attribute table coercion (pydantic Annotated validators)
# ============================================================


def _normalize_str(v: Any) -> Any:
    """Normalize string values to lowercase and strip whitespace."""
    return v.strip().lower() if isinstance(v, str) else v


def _coerce_token_list(v: Any) -> Any:
    """Coerce comma- or space-separated strings to lists of tokens.

    Handles table input written by hand:
    1. Space-separated:  'additions text'   -> ["additions", "text"]
    2. Comma-separated:  'additions, text'  -> ["additions", "text"]
    3. Tuple:            ('a', 'b')         -> ["a", "b"]

    Lists and None pass through unchanged.
    """
    if v is None or isinstance(v, list):
        return v
    if isinstance(v, tuple):
        return list(v)
    if isinstance(v, str):
        return [item for item in re.split(r"[,\s]+", v.strip()) if item]
    return v


CodecKindName = Annotated[str, BeforeValidator(_normalize_str)]
CoercedTokenList = Annotated[List[str], BeforeValidator(_coerce_token_list)]
OptionalCoercedTokenList = Annotated[
    Optional[List[str]], BeforeValidator(_coerce_token_list)
]
