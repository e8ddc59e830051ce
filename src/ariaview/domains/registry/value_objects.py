"""Value Objects for the Attribute Registry Context.

Value objects are immutable domain primitives that describe which codec
backs each logical property name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ariaview.domains.codec import Codec
from ariaview.domains.shared.kernel import (
    RESERVED_PROPERTY_NAMES,
    CodecKindName,
    OptionalCoercedTokenList,
)


class CodecKind(Enum):
    """Codec kinds an attribute table may name.

    Each kind corresponds to one codec primitive or to a combinator
    applied to a primitive.
    """
    BOOLEAN = "boolean"
    TRISTATE = "tristate"
    OPTIONAL_BOOLEAN = "optional_boolean"
    REFERENCE = "reference"
    REFERENCE_LIST = "reference_list"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    TOKEN = "token"
    TOKEN_LIST = "token_list"

    @classmethod
    def from_string(cls, value: str) -> "CodecKind":
        """Create a CodecKind from a string value.

        Args:
            value: The kind name (case-insensitive, '-' or '_' separated)

        Returns:
            The matching CodecKind

        Raises:
            ValueError: If the kind name is not recognized
        """
        normalized = value.lower().strip().replace("-", "_")
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ValueError(
            f"Unknown codec kind: '{value}'. "
            f"Valid kinds: {[k.value for k in cls]}"
        )

    @property
    def takes_tokens(self) -> bool:
        """Whether the kind is built from an allowed-token list."""
        return self in (CodecKind.TOKEN, CodecKind.TOKEN_LIST)

    @property
    def is_list(self) -> bool:
        """Whether the kind decodes to a list."""
        return self in (CodecKind.REFERENCE_LIST, CodecKind.TOKEN_LIST)


_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class AttributeDefinition(BaseModel):
    """One row of an attribute table, validated.

    Attributes:
        name: Logical property name (raw key is ``aria-`` + name).
        kind: Codec kind name, normalised to lowercase.
        tokens: Allowed tokens for token kinds.
        default: Default subset for token lists.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    kind: CodecKindName
    tokens: OptionalCoercedTokenList = None
    default: OptionalCoercedTokenList = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not _NAME_PATTERN.match(value):
            raise ValueError(
                f"Invalid attribute name: '{value}'. "
                "Use lowercase letters, digits and underscores"
            )
        if value in RESERVED_PROPERTY_NAMES:
            raise ValueError(f"Attribute name '{value}' is reserved by the view")
        return value

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, value: str) -> str:
        return CodecKind.from_string(value).value

    @model_validator(mode="after")
    def _check_tokens(self) -> "AttributeDefinition":
        kind = self.codec_kind
        if kind.takes_tokens and not self.tokens:
            raise ValueError(f"Attribute '{self.name}' of kind {kind.value} needs tokens")
        if not kind.takes_tokens and self.tokens:
            raise ValueError(f"Attribute '{self.name}' of kind {kind.value} takes no tokens")
        if self.default is not None and kind is not CodecKind.TOKEN_LIST:
            raise ValueError(
                f"Attribute '{self.name}': a default subset only applies to token lists"
            )
        return self

    @property
    def codec_kind(self) -> CodecKind:
        return CodecKind.from_string(self.kind)


@dataclass(frozen=True)
class RegistryEntry:
    """A logical property name bound to a fully constructed codec."""
    name: str
    codec: Codec

    @property
    def is_list(self) -> bool:
        return self.codec.is_list

    def __str__(self) -> str:
        return f"{self.name}: {self.codec!r}"


