"""Typed View Domain Services.

The ViewFactory materializes typed views: it resolves identifiers,
consults the per-element cache and, on a miss, builds one accessor per
registered attribute. It is also the accessor observer that logs and
publishes recovered format errors and rejected writes.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Optional, Union

from ariaview.config.attribute_table import load_attribute_table
from ariaview.config.settings import ViewRuntimeConfig, load_view_config
from ariaview.domains.codec import FormatError
from ariaview.domains.registry import AttributeRegistry, build_registry
from ariaview.domains.shared.kernel import ElementHandle, ElementResolver, is_element

from .aggregates import TypedView
from .entities import PropertyAccessor
from .events import AttributeWriteRejected, FormatErrorRecovered, ViewMaterialized
from .repository import ViewCache, WeakIdentityViewCache

logger = logging.getLogger(__name__)

EventPublisher = Callable[[object], None]


def _element_id(element: Any) -> str:
    return getattr(element, "id", "") or ""


class ViewFactory:
    """Builds and caches typed views over elements.

    Responsibilities:
    - Resolve an element or an element identifier
    - Return the cached view for an element (same instance every time)
    - Build sealed views from the attribute registry on a cache miss
    - Report recovered reads and dropped writes
    """

    def __init__(
        self,
        registry: AttributeRegistry,
        resolver: ElementResolver,
        *,
        cache: Optional[ViewCache] = None,
        event_publisher: Optional[EventPublisher] = None,
        config: Optional[ViewRuntimeConfig] = None,
    ) -> None:
        """Initialize the factory.

        Args:
            registry: Attribute registry defining the view shape.
            resolver: Resolves identifiers passed to view_of.
            cache: Per-element view cache (defaults to a weak identity cache).
            event_publisher: Optional callback for publishing domain events.
            config: Runtime settings (defaults to ViewRuntimeConfig()).
        """
        self._registry = registry
        self._resolver = resolver
        self._cache = cache if cache is not None else WeakIdentityViewCache()
        self._event_publisher = event_publisher
        self._config = config or ViewRuntimeConfig()

    @classmethod
    def for_document(
        cls,
        document: ElementResolver,
        *,
        config: Optional[ViewRuntimeConfig] = None,
        event_publisher: Optional[EventPublisher] = None,
    ) -> "ViewFactory":
        """Create a factory whose registry resolves references in ``document``.

        The attribute table comes from ``config.attribute_table`` when
        set, otherwise the built-in table is used.
        """
        if config is None:
            config = load_view_config()
        definitions = None
        if config.attribute_table is not None:
            definitions = load_attribute_table(config.attribute_table)
        registry = build_registry(document, definitions, freeze=config.freeze_registry)
        return cls(registry, document, event_publisher=event_publisher, config=config)

    @property
    def registry(self) -> AttributeRegistry:
        return self._registry

    @property
    def resolver(self) -> ElementResolver:
        return self._resolver

    @property
    def cache(self) -> ViewCache:
        return self._cache

    def resolve(self, element_or_id: Union[ElementHandle, str, None]) -> Optional[ElementHandle]:
        """Resolve an element or identifier to an element.

        Returns:
            The element, or None for None, unknown identifiers and
            values that are neither strings nor elements
        """
        if element_or_id is None:
            return None
        if isinstance(element_or_id, str):
            return self._resolver.get_element_by_id(element_or_id)
        if is_element(element_or_id):
            return element_or_id
        logger.debug("Cannot resolve %s to an element", type(element_or_id).__name__)
        return None

    def view_of(self, element_or_id: Union[ElementHandle, str, None]) -> Optional[TypedView]:
        """Return the typed view for an element or identifier.

        The same element always yields the same view instance while the
        element is alive.

        Raises:
            UnsupportedElementError: If the element cannot be weakly referenced
        """
        element = self.resolve(element_or_id)
        if element is None:
            return None

        view, created = self._cache.get_or_create(element, self._build_view)
        if created:
            logger.debug(
                "Materialized typed view for element '%s' (%d properties)",
                _element_id(element),
                len(view),
            )
            self._publish_event(
                ViewMaterialized(element_id=_element_id(element), attribute_count=len(view))
            )
        return view

    __call__ = view_of

    def _build_view(self, element_ref: "weakref.ReferenceType[Any]") -> TypedView:
        accessors = {
            entry.name: PropertyAccessor(entry.name, entry.codec, element_ref, self)
            for entry in self._registry.entries()
        }
        return TypedView(accessors)

    # AccessorObserver

    def format_error_recovered(
        self,
        accessor: PropertyAccessor,
        element: ElementHandle,
        raw: Optional[str],
        error: FormatError,
        fallback: Any,
    ) -> None:
        logger.log(
            self._config.recovery_log_level,
            "Invalid %s=%r on element '%s' (%s); using %r",
            accessor.key,
            raw,
            _element_id(element),
            error.message,
            fallback,
        )
        self._publish_event(
            FormatErrorRecovered(
                attribute=accessor.name,
                raw_value=raw,
                message=error.message,
                fallback=fallback,
                element_id=_element_id(element),
            )
        )

    def write_rejected(
        self,
        accessor: PropertyAccessor,
        element: ElementHandle,
        value: Any,
        error: FormatError,
    ) -> None:
        logger.log(
            self._config.recovery_log_level,
            "Ignored write of %r to %s on element '%s' (%s)",
            value,
            accessor.key,
            _element_id(element),
            error.message,
        )
        self._publish_event(
            AttributeWriteRejected(
                attribute=accessor.name,
                value_repr=repr(value),
                message=error.message,
                element_id=_element_id(element),
            )
        )

    def _publish_event(self, event: object) -> None:
        """Publish a domain event.

        Args:
            event: The event to publish.
        """
        if self._event_publisher:
            try:
                self._event_publisher(event)
            except Exception as e:
                logger.error("Failed to publish event: %s", e)
