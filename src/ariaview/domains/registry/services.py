"""Attribute Registry Domain Services.

Turns validated attribute definitions into registry entries by
constructing the codec each kind names. Building is side-effect free
beyond populating the returned registry, so calling it twice with the
same input yields two equivalent registries.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ariaview.domains.codec import (
    BooleanCodec,
    Codec,
    ElementReferenceCodec,
    IntegerCodec,
    NumberCodec,
    OptionalBooleanCodec,
    StringCodec,
    TristateCodec,
    list_of,
    token,
)
from ariaview.domains.shared.errors import CodecConfigurationError
from ariaview.domains.shared.kernel import ElementResolver

from .aggregates import AttributeRegistry
from .value_objects import AttributeDefinition, CodecKind

logger = logging.getLogger(__name__)

CodecFactory = Callable[[AttributeDefinition, ElementResolver], Codec]

CODEC_FACTORIES: Dict[CodecKind, CodecFactory] = {
    CodecKind.BOOLEAN: lambda d, r: BooleanCodec(),
    CodecKind.TRISTATE: lambda d, r: TristateCodec(),
    CodecKind.OPTIONAL_BOOLEAN: lambda d, r: OptionalBooleanCodec(),
    CodecKind.REFERENCE: lambda d, r: ElementReferenceCodec(r),
    CodecKind.REFERENCE_LIST: lambda d, r: list_of(ElementReferenceCodec(r)),
    CodecKind.INTEGER: lambda d, r: IntegerCodec(),
    CodecKind.NUMBER: lambda d, r: NumberCodec(),
    CodecKind.STRING: lambda d, r: StringCodec(),
    CodecKind.TOKEN: lambda d, r: token(d.tokens),
    CodecKind.TOKEN_LIST: lambda d, r: list_of(token(d.tokens, d.default)),
}


def build_codec(definition: AttributeDefinition, resolver: ElementResolver) -> Codec:
    """Construct the codec an attribute definition names.

    Raises:
        CodecConfigurationError: If no factory handles the kind
    """
    factory = CODEC_FACTORIES.get(definition.codec_kind)
    if factory is None:
        raise CodecConfigurationError(
            f"No codec factory for kind '{definition.kind}' ({definition.name})"
        )
    return factory(definition, resolver)


def build_registry(
    resolver: ElementResolver,
    definitions: Optional[List[AttributeDefinition]] = None,
    *,
    freeze: bool = True,
) -> AttributeRegistry:
    """Build an attribute registry from definitions.

    Args:
        resolver: Identifier resolver handed to element-reference codecs
        definitions: Validated definitions (defaults to the built-in ARIA table)
        freeze: Freeze the registry before returning it

    Returns:
        A populated AttributeRegistry
    """
    if definitions is None:
        from ariaview.config.attribute_table import default_attribute_definitions
        definitions = default_attribute_definitions()

    registry = AttributeRegistry()
    for definition in definitions:
        registry.register(definition.name, build_codec(definition, resolver))

    if freeze:
        registry.freeze()
    logger.debug(
        "Built attribute registry with %d attributes (frozen=%s)", len(registry), freeze
    )
    return registry
