"""Codec Primitives.

Stateless decode/encode pairs, one per attribute value domain:

    raw string (or None when absent)  <->  typed Python value

Every ``decode`` accepts ``None`` and answers with the domain default.
Input outside the domain is reported as ``CodecResult.invalid``; the
codecs themselves never raise for it.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional

from ariaview.domains.shared.kernel import (
    ElementResolver,
    format_number,
    is_element,
    parse_float,
    stringify,
    to_number,
    truncate,
)

from .value_objects import MIXED, AttributeFormatError, CodecResult

__all__ = [
    "Codec",
    "BooleanCodec",
    "TristateCodec",
    "OptionalBooleanCodec",
    "ElementReferenceCodec",
    "IntegerCodec",
    "NumberCodec",
    "StringCodec",
    "FunctionCodec",
]


def _truthy(value: Any) -> bool:
    # Attribute-store truthiness: only None, False, 0, NaN and "" are false
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _bool_text(value: Any) -> str:
    return "true" if _truthy(value) else "false"


class Codec(ABC):
    """Base class for attribute value codecs.

    Subclasses implement ``decode`` and ``encode``. Both must be pure:
    they only compute a result and never touch the attribute store.
    """

    #: Kind name used by the attribute table (e.g. "boolean")
    kind: ClassVar[str] = ""

    #: Whether decoded values are sequences
    is_list: ClassVar[bool] = False

    @abstractmethod
    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        """Convert a raw attribute value (None when absent) to a typed value."""

    @abstractmethod
    def encode(self, value: Any) -> CodecResult[str]:
        """Convert a typed value to the string to store."""

    @property
    def default(self) -> Any:
        """The value decoded for an absent attribute."""
        return self.decode(None).value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BooleanCodec(Codec):
    """true/false attribute; absent means False."""

    kind = "boolean"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None or raw == "false":
            return CodecResult.ok(False)
        if raw == "true":
            return CodecResult.ok(True)
        return CodecResult.invalid(f'"{raw}" is not true/false', raw)

    def encode(self, value: Any) -> CodecResult[str]:
        return CodecResult.ok(_bool_text(value))


class TristateCodec(Codec):
    """true/false/mixed attribute; absent means None."""

    kind = "tristate"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(None)
        if raw == "true":
            return CodecResult.ok(True)
        if raw == "false":
            return CodecResult.ok(False)
        if raw == MIXED:
            return CodecResult.ok(MIXED)
        return CodecResult.invalid(f'"{raw}" is not tristate', raw)

    def encode(self, value: Any) -> CodecResult[str]:
        if value == MIXED:
            return CodecResult.ok(MIXED)
        return CodecResult.ok(_bool_text(value))


class OptionalBooleanCodec(Codec):
    """true/false/undefined attribute; absent means None."""

    kind = "optional_boolean"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(None)
        if raw == "true":
            return CodecResult.ok(True)
        if raw == "false":
            return CodecResult.ok(False)
        return CodecResult.invalid(f'"{raw}" is not true/false/undefined', raw)

    def encode(self, value: Any) -> CodecResult[str]:
        return CodecResult.ok(_bool_text(value))


class ElementReferenceCodec(Codec):
    """ID reference to another element.

    Reading is lenient: an identifier that resolves to nothing decodes
    to None. Writing is strict: only element handles (stored by id) and
    strings (stored verbatim) are accepted.
    """

    kind = "reference"

    def __init__(self, resolver: ElementResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> ElementResolver:
        return self._resolver

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(None)
        return CodecResult.ok(self._resolver.get_element_by_id(raw))

    def encode(self, value: Any) -> CodecResult[str]:
        if isinstance(value, str):
            return CodecResult.ok(value)
        if is_element(value):
            return CodecResult.ok(value.id or "")
        return CodecResult.invalid(
            f"{type(value).__name__} is neither an element nor an element id", value
        )


class IntegerCodec(Codec):
    """Integer attribute; absent or unparsable means NaN."""

    kind = "integer"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(math.nan)
        return CodecResult.ok(truncate(parse_float(raw)))

    def encode(self, value: Any) -> CodecResult[str]:
        return CodecResult.ok(format_number(truncate(to_number(value))))


class NumberCodec(Codec):
    """Decimal attribute; absent or unparsable means NaN."""

    kind = "number"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(math.nan)
        return CodecResult.ok(parse_float(raw))

    def encode(self, value: Any) -> CodecResult[str]:
        return CodecResult.ok(format_number(to_number(value)))


class StringCodec(Codec):
    """Free-form string attribute; absent means None."""

    kind = "string"

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        return CodecResult.ok(raw)

    def encode(self, value: Any) -> CodecResult[str]:
        return CodecResult.ok(stringify(value))


class FunctionCodec(Codec):
    """Codec assembled from plain callables.

    A missing side behaves as the identity. Callables may signal a
    format error by raising ``AttributeFormatError`` or by returning a
    ``CodecResult``; every other exception propagates.

    Example:
        >>> parens = FunctionCodec(
        ...     decode=lambda raw: raw[1:-1],
        ...     encode=lambda value: f"({value})",
        ... )
        >>> parens.encode("x").value
        '(x)'
    """

    kind = "custom"

    def __init__(
        self,
        decode: Optional[Callable[[Optional[str]], Any]] = None,
        encode: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self._decode = decode
        self._encode = encode

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if self._decode is None:
            return CodecResult.ok(raw)
        try:
            value = self._decode(raw)
        except AttributeFormatError as exc:
            return CodecResult.invalid(str(exc), raw)
        if isinstance(value, CodecResult):
            return value
        return CodecResult.ok(value)

    def encode(self, value: Any) -> CodecResult[str]:
        if self._encode is None:
            return CodecResult.ok(stringify(value))
        try:
            encoded = self._encode(value)
        except AttributeFormatError as exc:
            return CodecResult.invalid(str(exc), value)
        if isinstance(encoded, CodecResult):
            return encoded
        return CodecResult.ok(stringify(encoded))
