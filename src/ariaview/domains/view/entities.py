"""Entities for the Typed View Context.

A PropertyAccessor binds one logical property of one element to its
codec. It is the only place where raw attribute values are read or
written, and the only place where format errors are recovered.
"""

from __future__ import annotations

import weakref
from typing import Any, Optional, Protocol

from ariaview.domains.codec import Codec, FormatError
from ariaview.domains.shared.errors import DetachedViewError
from ariaview.domains.shared.kernel import ElementHandle, prefixed_key


class AccessorObserver(Protocol):
    """Receives notice of recovered reads and dropped writes."""

    def format_error_recovered(
        self,
        accessor: "PropertyAccessor",
        element: ElementHandle,
        raw: Optional[str],
        error: FormatError,
        fallback: Any,
    ) -> None:
        ...

    def write_rejected(
        self,
        accessor: "PropertyAccessor",
        element: ElementHandle,
        value: Any,
        error: FormatError,
    ) -> None:
        ...


class PropertyAccessor:
    """get/set/delete for one (element, aria-key, codec) triple.

    The accessor holds only a weak reference to its element: views must
    not keep elements alive.

    Attributes:
        name: Logical property name.
        key: Raw attribute key (``aria-`` + name).
        codec: The codec converting between raw and typed values.
    """

    __slots__ = ("name", "key", "codec", "_element_ref", "_observer")

    def __init__(
        self,
        name: str,
        codec: Codec,
        element_ref: "weakref.ReferenceType[Any]",
        observer: Optional[AccessorObserver] = None,
    ) -> None:
        self.name = name
        self.key = prefixed_key(name)
        self.codec = codec
        self._element_ref = element_ref
        self._observer = observer

    @property
    def element(self) -> ElementHandle:
        """The bound element.

        Raises:
            DetachedViewError: If the element has been garbage collected
        """
        element = self._element_ref()
        if element is None:
            raise DetachedViewError(self.name)
        return element

    def get(self) -> Any:
        """Read and decode the attribute.

        Stored values outside the codec's domain yield the domain
        default. Exceptions raised by the codec propagate.
        """
        element = self.element
        raw = element.get_attribute(self.key)
        result = self.codec.decode(raw)
        if result.is_format_error:
            fallback = self.codec.decode(None).value
            if self._observer is not None:
                self._observer.format_error_recovered(self, element, raw, result.error, fallback)
            return fallback
        return result.value

    def set(self, value: Any) -> None:
        """Encode and store ``value``; None removes the attribute.

        Values outside the codec's domain are dropped and the store is
        left unchanged. Exceptions raised by the codec propagate.
        """
        element = self.element
        if value is None:
            element.remove_attribute(self.key)
            return
        result = self.codec.encode(value)
        if result.is_format_error:
            if self._observer is not None:
                self._observer.write_rejected(self, element, value, result.error)
            return
        element.set_attribute(self.key, result.value)

    def delete(self) -> None:
        """Remove the attribute."""
        self.element.remove_attribute(self.key)

    def is_set(self) -> bool:
        """Check whether the raw attribute is present."""
        return self.element.has_attribute(self.key)

    def __repr__(self) -> str:
        return f"PropertyAccessor({self.name!r}, {self.codec!r})"
