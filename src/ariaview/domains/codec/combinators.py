"""Codec Combinators.

Build new codecs from existing ones:

    token(allowed, default_subset=None)  closed set of raw strings
    list_of(item_codec, default=None)    space-separated list of items

Example:
    >>> dropeffect = list_of(token(
    ...     ["copy", "move", "link", "execute", "popup", "none"],
    ...     default_subset=["none"],
    ... ))
    >>> dropeffect.decode(None).value
    ['none']
    >>> dropeffect.encode(["copy", "move"]).value
    'copy move'
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ariaview.domains.shared.errors import CodecConfigurationError
from ariaview.domains.shared.kernel import is_element

from .primitives import Codec
from .value_objects import CodecResult

__all__ = ["TokenCodec", "ListCodec", "token", "list_of"]

# Raw literals that decode to Python booleans when they are allowed tokens
_BOOLEAN_LITERALS: Dict[str, bool] = {"true": True, "false": False}


class TokenCodec(Codec):
    """Closed set of allowed raw strings.

    The first allowed token is the absence default. The literals
    ``"true"`` and ``"false"`` decode to booleans when allowed, and
    booleans encode back to those literals.

    Attributes:
        allowed: The legal raw strings, in declaration order.
        default_subset: Get-side default used when wrapped by ``list_of``.
    """

    kind = "token"

    def __init__(
        self,
        allowed: Sequence[str],
        default_subset: Optional[Sequence[str]] = None,
    ) -> None:
        if isinstance(allowed, str):
            raise CodecConfigurationError(
                "Allowed tokens must be a sequence of strings, not a string"
            )
        allowed = tuple(allowed)
        if not allowed:
            raise CodecConfigurationError("A token codec needs at least one allowed value")
        if len(set(allowed)) != len(allowed):
            raise CodecConfigurationError(f"Duplicate tokens in {list(allowed)}")
        subset = allowed if default_subset is None else tuple(default_subset)
        unknown = [item for item in subset if item not in allowed]
        if unknown:
            raise CodecConfigurationError(
                f"Default tokens {unknown} are not in allowed tokens {list(allowed)}"
            )
        self.allowed: Tuple[str, ...] = allowed
        self.default_subset: Tuple[str, ...] = subset

    def _literal(self, raw: str) -> Any:
        return _BOOLEAN_LITERALS.get(raw, raw)

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(self._literal(self.allowed[0]))
        if raw in self.allowed:
            return CodecResult.ok(self._literal(raw))
        return CodecResult.invalid(
            f'"{raw}" is not one of: {", ".join(self.allowed)}', raw
        )

    def encode(self, value: Any) -> CodecResult[str]:
        if isinstance(value, bool):
            literal = "true" if value else "false"
            if literal in self.allowed:
                return CodecResult.ok(literal)
        elif isinstance(value, str) and value in self.allowed:
            return CodecResult.ok(value)
        return CodecResult.invalid(
            f"{value!r} is not one of: {', '.join(self.allowed)}", value
        )

    @property
    def default_items(self) -> List[Any]:
        """The default subset decoded item by item."""
        return [self._literal(item) for item in self.default_subset]

    def __repr__(self) -> str:
        return f"TokenCodec({list(self.allowed)!r})"


class ListCodec(Codec):
    """Space-separated list of items handled by an item codec.

    Decoding splits on single spaces and keeps order and duplicates.
    Encoding accepts a scalar or any non-string iterable, drops items
    that encode to an empty string and joins the rest with one space.
    A format error on any item is a format error for the whole list.
    """

    kind = "list"
    is_list = True

    def __init__(self, item: Codec, default: Optional[Sequence[Any]] = None) -> None:
        if not isinstance(item, Codec):
            raise CodecConfigurationError(
                f"list_of() needs a Codec, got {type(item).__name__}"
            )
        if item.is_list:
            raise CodecConfigurationError("Nested list codecs are not supported")
        self.item = item
        if default is not None:
            self._default: Tuple[Any, ...] = tuple(default)
        elif isinstance(item, TokenCodec):
            self._default = tuple(item.default_items)
        else:
            self._default = ()

    def decode(self, raw: Optional[str]) -> CodecResult[Any]:
        if raw is None:
            return CodecResult.ok(list(self._default))
        values = []
        for part in raw.split(" "):
            result = self.item.decode(part)
            if result.is_format_error:
                return result
            values.append(result.value)
        return CodecResult.ok(values)

    def encode(self, value: Any) -> CodecResult[str]:
        encoded = []
        for item in self._as_sequence(value):
            result = self.item.encode(item)
            if result.is_format_error:
                return result
            if result.value:
                encoded.append(result.value)
        return CodecResult.ok(" ".join(encoded))

    @staticmethod
    def _as_sequence(value: Any) -> Iterable[Any]:
        if isinstance(value, (str, bytes)) or is_element(value):
            return (value,)
        if isinstance(value, Iterable):
            return value
        return (value,)

    def __repr__(self) -> str:
        return f"ListCodec({self.item!r})"


def token(allowed: Sequence[str], default_subset: Optional[Sequence[str]] = None) -> TokenCodec:
    """Create a token codec restricted to ``allowed``."""
    return TokenCodec(allowed, default_subset)


def list_of(item: Codec, default: Optional[Sequence[Any]] = None) -> ListCodec:
    """Create a list codec over ``item``."""
    return ListCodec(item, default)
