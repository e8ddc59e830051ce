"""Typed View Context - Property-style views over element attributes.

This bounded context manages:
- Property accessors binding one attribute key to one codec
- The sealed TypedView aggregate
- The identity-keyed, weak per-element view cache
- The ViewFactory service and its domain events
"""

# Entities
from ariaview.domains.view.entities import (
    AccessorObserver,
    PropertyAccessor,
)

# Aggregates
from ariaview.domains.view.aggregates import (
    TypedView,
)

# Events
from ariaview.domains.view.events import (
    AttributeWriteRejected,
    FormatErrorRecovered,
    ViewMaterialized,
)

# Repository
from ariaview.domains.view.repository import (
    ViewCache,
    WeakIdentityViewCache,
)

# Services
from ariaview.domains.view.services import (
    EventPublisher,
    ViewFactory,
)

__all__ = [
    # Entities
    "AccessorObserver",
    "PropertyAccessor",
    # Aggregates
    "TypedView",
    # Events
    "AttributeWriteRejected",
    "FormatErrorRecovered",
    "ViewMaterialized",
    # Repository
    "ViewCache",
    "WeakIdentityViewCache",
    # Services
    "EventPublisher",
    "ViewFactory",
]
