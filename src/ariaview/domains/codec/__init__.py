"""Codec Context - Typed conversion of raw attribute strings.

This bounded context provides:
- Codec primitives for each attribute value domain
- Combinators building token sets and space-separated lists
- The CodecResult / FormatError value objects used for recovery

Example usage:
    from ariaview.domains.codec import BooleanCodec, list_of, token

    hidden = BooleanCodec()
    hidden.decode(None).value            # False
    hidden.decode("maybe").is_format_error  # True

    relevant = list_of(token(
        ["additions", "removals", "text", "all"],
        default_subset=["additions", "text"],
    ))
    relevant.decode(None).value          # ['additions', 'text']
"""

# Value Objects
from .value_objects import (
    MIXED,
    AttributeFormatError,
    CodecResult,
    FormatError,
)

# Primitives
from .primitives import (
    BooleanCodec,
    Codec,
    ElementReferenceCodec,
    FunctionCodec,
    IntegerCodec,
    NumberCodec,
    OptionalBooleanCodec,
    StringCodec,
    TristateCodec,
)

# Combinators
from .combinators import (
    ListCodec,
    TokenCodec,
    list_of,
    token,
)

__all__ = [
    # Value Objects
    "MIXED",
    "AttributeFormatError",
    "CodecResult",
    "FormatError",
    # Primitives
    "BooleanCodec",
    "Codec",
    "ElementReferenceCodec",
    "FunctionCodec",
    "IntegerCodec",
    "NumberCodec",
    "OptionalBooleanCodec",
    "StringCodec",
    "TristateCodec",
    # Combinators
    "ListCodec",
    "TokenCodec",
    "list_of",
    "token",
]
