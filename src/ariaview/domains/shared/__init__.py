"""Shared Kernel - Types shared across bounded contexts.

This module contains the minimal set of types shared between the Codec,
Registry and View contexts, plus the common exception hierarchy.
"""

from ariaview.domains.shared.errors import (
    AriaViewError,
    AttributeTableError,
    CodecConfigurationError,
    DetachedViewError,
    RegistryDuplicateError,
    RegistryError,
    RegistryFrozenError,
    UnknownAttributeError,
    UnsupportedElementError,
)
from ariaview.domains.shared.kernel import (
    ATTRIBUTE_PREFIX,
    RESERVED_PROPERTY_NAMES,
    ElementHandle,
    ElementResolver,
    format_number,
    is_element,
    parse_float,
    prefixed_key,
    stringify,
    to_number,
    truncate,
)

__all__ = [
    # Kernel
    "ATTRIBUTE_PREFIX",
    "RESERVED_PROPERTY_NAMES",
    "ElementHandle",
    "ElementResolver",
    "format_number",
    "is_element",
    "parse_float",
    "prefixed_key",
    "stringify",
    "to_number",
    "truncate",
    # Errors
    "AriaViewError",
    "AttributeTableError",
    "CodecConfigurationError",
    "DetachedViewError",
    "RegistryDuplicateError",
    "RegistryError",
    "RegistryFrozenError",
    "UnknownAttributeError",
    "UnsupportedElementError",
]
