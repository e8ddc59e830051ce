"""Aggregates for the Attribute Registry Context.

The AttributeRegistry is the aggregate root for this context. It maps
logical property names to fully constructed codecs and enforces the
registry invariants (unique names, build-then-freeze).
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ariaview.domains.codec import Codec
from ariaview.domains.shared.errors import (
    CodecConfigurationError,
    RegistryDuplicateError,
    RegistryFrozenError,
    UnknownAttributeError,
)
from ariaview.domains.shared.kernel import RESERVED_PROPERTY_NAMES

from .value_objects import RegistryEntry

logger = logging.getLogger(__name__)


class AttributeRegistry:
    """Aggregate root binding property names to codecs.

    The registry is populated during initialization and frozen before
    views are materialized. Registration order does not affect lookups.
    Once frozen, the registry is read-only and can be shared freely.

    Thread Safety: registration and freezing are serialized by a lock;
    reads of a frozen registry need no synchronization.
    """

    def __init__(self, entries: Optional[List[RegistryEntry]] = None) -> None:
        self._lock = threading.RLock()
        self._entries: Dict[str, RegistryEntry] = {}
        self._frozen = False
        for entry in entries or []:
            self.register(entry.name, entry.codec)

    def register(self, name: str, codec: Codec) -> RegistryEntry:
        """Bind ``name`` to ``codec``.

        Args:
            name: Logical property name (without the ``aria-`` prefix)
            codec: A fully constructed codec

        Returns:
            The created RegistryEntry

        Raises:
            RegistryFrozenError: If the registry has been frozen
            RegistryDuplicateError: If ``name`` is already registered
            CodecConfigurationError: If ``codec`` is not a Codec or ``name``
                is reserved by the view
        """
        if name in RESERVED_PROPERTY_NAMES:
            raise CodecConfigurationError(
                f"Attribute name '{name}' is reserved by the view"
            )
        if not isinstance(codec, Codec):
            raise CodecConfigurationError(
                f"Attribute '{name}' needs a Codec, got {type(codec).__name__}"
            )
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register '{name}': the attribute registry is frozen"
                )
            if name in self._entries:
                raise RegistryDuplicateError(name)
            entry = RegistryEntry(name=name, codec=codec)
            self._entries[name] = entry
        logger.debug("Registered attribute %s", entry)
        return entry

    def freeze(self) -> "AttributeRegistry":
        """Mark the registry read-only. Idempotent."""
        with self._lock:
            if not self._frozen:
                self._frozen = True
                self._entries = MappingProxyType(dict(self._entries))  # type: ignore[assignment]
                logger.debug("Attribute registry frozen with %d entries", len(self._entries))
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> RegistryEntry:
        """Return the entry for ``name``.

        Raises:
            UnknownAttributeError: If ``name`` is not registered
        """
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownAttributeError(name) from None

    def codec_for(self, name: str) -> Codec:
        """Return the codec bound to ``name``."""
        return self.get(name).codec

    def is_list_attribute(self, name: str) -> bool:
        """Check whether ``name`` decodes to a list (False when unknown)."""
        entry = self._entries.get(name)
        return entry is not None and entry.is_list

    def names(self) -> Tuple[str, ...]:
        """Registered property names, in registration order."""
        return tuple(self._entries)

    def entries(self) -> Tuple[RegistryEntry, ...]:
        """A snapshot of the registered entries."""
        with self._lock:
            return tuple(self._entries.values())

    def as_mapping(self) -> Mapping[str, Codec]:
        """Read-only name -> codec mapping."""
        return MappingProxyType({name: entry.codec for name, entry in self._entries.items()})

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"AttributeRegistry({len(self._entries)} attributes, {state})"
