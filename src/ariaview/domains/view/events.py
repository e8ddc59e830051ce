"""Typed View Domain Events.

Domain events record what happened while views were materialized and
used. They are published through the optional ``event_publisher``
callback of ViewFactory and are never required for correctness.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ViewMaterialized:
    """Emitted when a typed view is built for an element (cache miss).

    Attributes:
        element_id: Identifier of the element ('' when it has none).
        attribute_count: Number of properties on the new view.
        timestamp: When the view was built.
    """
    element_id: str
    attribute_count: int
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "ViewMaterialized",
            "element_id": self.element_id,
            "attribute_count": self.attribute_count,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class FormatErrorRecovered:
    """Emitted when a stored value could not be decoded.

    The reader received the domain default instead of an error.

    Attributes:
        attribute: Logical property name.
        raw_value: The stored string that failed to decode.
        message: Format error description.
        fallback: The default value returned to the reader.
        element_id: Identifier of the element.
        timestamp: When the read happened.
    """
    attribute: str
    raw_value: Optional[str]
    message: str
    fallback: Any
    element_id: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "FormatErrorRecovered",
            "attribute": self.attribute,
            "raw_value": self.raw_value,
            "message": self.message,
            "fallback": repr(self.fallback),
            "element_id": self.element_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class AttributeWriteRejected:
    """Emitted when an assigned value was outside the codec's domain.

    The store was left unchanged.

    Attributes:
        attribute: Logical property name.
        value_repr: repr() of the rejected value.
        message: Format error description.
        element_id: Identifier of the element.
        timestamp: When the write was attempted.
    """
    attribute: str
    value_repr: str
    message: str
    element_id: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "AttributeWriteRejected",
            "attribute": self.attribute,
            "value": self.value_repr,
            "message": self.message,
            "element_id": self.element_id,
            "timestamp": self.timestamp.isoformat(),
        }
