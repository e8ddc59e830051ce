"""In-memory element store.

A small DOM stand-in that satisfies the ElementHandle and
ElementResolver protocols, so typed views can be used and tested
without a browser host.

Attribute names are case-insensitive, values are always strings and
identifier lookup only sees elements attached to the document, as in
an HTML DOM.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from ariaview.domains.shared.kernel import stringify

logger = logging.getLogger(__name__)


class Element:
    """A tag name plus a flat string attribute map.

    Elements compare and hash by identity and support weak references.
    """

    __slots__ = ("tag_name", "_attributes", "_document", "__weakref__")

    def __init__(self, tag_name: str, attributes: Optional[Dict[str, str]] = None) -> None:
        self.tag_name = tag_name.lower()
        self._attributes: Dict[str, str] = {}
        self._document: Optional["Document"] = None
        for key, value in (attributes or {}).items():
            self.set_attribute(key, value)

    @property
    def id(self) -> str:
        return self._attributes.get("id", "")

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute("id", value)

    @property
    def document(self) -> Optional["Document"]:
        """The document this element is attached to, if any."""
        return self._document

    @property
    def attributes(self) -> Dict[str, str]:
        """A copy of the attribute map."""
        return dict(self._attributes)

    def get_attribute(self, key: str) -> Optional[str]:
        return self._attributes.get(key.lower())

    def set_attribute(self, key: str, value: str) -> None:
        self._attributes[key.lower()] = value if isinstance(value, str) else stringify(value)

    def remove_attribute(self, key: str) -> None:
        self._attributes.pop(key.lower(), None)

    def has_attribute(self, key: str) -> bool:
        return key.lower() in self._attributes

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag_name}{ident}>"


class Document:
    """An ordered collection of attached elements with identifier lookup."""

    def __init__(self) -> None:
        self._elements: List[Element] = []

    def create_element(self, tag_name: str, id: Optional[str] = None, **attributes: str) -> Element:
        """Create a detached element.

        Keyword arguments become attributes with ``_`` replaced by ``-``,
        so ``aria_label="x"`` sets ``aria-label``.
        """
        attrs = {key.replace("_", "-"): value for key, value in attributes.items()}
        if id is not None:
            attrs["id"] = id
        return Element(tag_name, attrs)

    def add_element(self, tag_name: str, id: Optional[str] = None, **attributes: str) -> Element:
        """Create an element and attach it to the document."""
        return self.append(self.create_element(tag_name, id, **attributes))

    def append(self, element: Element) -> Element:
        """Attach ``element``, moving it from any other document."""
        if element.document is self:
            return element
        if element.document is not None:
            element.document.remove(element)
        self._elements.append(element)
        element._document = self
        return element

    def remove(self, element: Element) -> None:
        """Detach ``element``. Detaching an element that is not attached is a no-op."""
        for index, candidate in enumerate(self._elements):
            if candidate is element:
                del self._elements[index]
                element._document = None
                logger.debug("Detached %r", element)
                return

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """Return the first attached element whose id is ``element_id``."""
        if not element_id:
            return None
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    def clear(self) -> None:
        for element in self._elements:
            element._document = None
        self._elements.clear()

    def __contains__(self, element: object) -> bool:
        return any(candidate is element for candidate in self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements))

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Document({len(self._elements)} elements)"
