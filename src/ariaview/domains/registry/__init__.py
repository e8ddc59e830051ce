"""Attribute Registry Context - Property names bound to codecs.

This bounded context manages:
- Validated attribute definitions (one per table row)
- The AttributeRegistry aggregate (build-then-freeze)
- Construction of codecs from definitions
"""

# Value Objects
from ariaview.domains.registry.value_objects import (
    AttributeDefinition,
    CodecKind,
    RegistryEntry,
)

# Aggregates
from ariaview.domains.registry.aggregates import (
    AttributeRegistry,
)

# Services
from ariaview.domains.registry.services import (
    CODEC_FACTORIES,
    build_codec,
    build_registry,
)

__all__ = [
    # Value Objects
    "AttributeDefinition",
    "CodecKind",
    "RegistryEntry",
    # Aggregates
    "AttributeRegistry",
    # Services
    "CODEC_FACTORIES",
    "build_codec",
    "build_registry",
]
