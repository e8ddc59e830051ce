"""Service container for aria-view.

Wires configuration, attribute registries and view factories together
for hosts that do not want to manage them by hand. The core domains do
not depend on it.

Usage:
    from ariaview.container import get_container

    container = get_container()
    view = container.view_of(document, "save-button")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

from ariaview.config.settings import ViewRuntimeConfig, load_view_config

if TYPE_CHECKING:
    from ariaview.domains.registry import AttributeRegistry
    from ariaview.domains.shared.kernel import ElementResolver
    from ariaview.domains.view import EventPublisher, TypedView, ViewFactory

logger = logging.getLogger(__name__)

# Singleton container instance
_container: Optional["ViewContainer"] = None


@dataclass
class ViewContainer:
    """Caches one ViewFactory (and its registry) per document.

    Factories are keyed by document and live until clear_document()
    or reset_container() releases them.

    Attributes:
        event_publisher: Callback handed to every factory created here
    """

    event_publisher: Optional["EventPublisher"] = None
    _config: Optional[ViewRuntimeConfig] = field(default=None, repr=False)
    _factories: Dict[Any, "ViewFactory"] = field(default_factory=dict, repr=False)
    _lock: Any = field(default_factory=threading.RLock, repr=False)

    @property
    def config(self) -> ViewRuntimeConfig:
        """Get the runtime configuration (loaded on first use)."""
        if self._config is None:
            self._config = load_view_config()
        return self._config

    def configure(self, config: ViewRuntimeConfig) -> None:
        """Replace the configuration and drop every cached factory."""
        with self._lock:
            self._config = config
            self._factories.clear()

    def get_factory(self, document: "ElementResolver") -> "ViewFactory":
        """Get or create the view factory for a document.

        Args:
            document: Resolver used for identifiers and element references

        Returns:
            ViewFactory for the document
        """
        with self._lock:
            factory = self._factories.get(document)
            if factory is None:
                from ariaview.domains.view import ViewFactory
                factory = ViewFactory.for_document(
                    document, config=self.config, event_publisher=self.event_publisher
                )
                self._factories[document] = factory
                logger.debug("Created view factory for %r", document)
            return factory

    def get_registry(self, document: "ElementResolver") -> "AttributeRegistry":
        """Get the attribute registry used for a document."""
        return self.get_factory(document).registry

    def view_of(self, document: "ElementResolver", element_or_id: Any) -> Optional["TypedView"]:
        """Return the typed view of an element (or identifier) in a document."""
        return self.get_factory(document).view_of(element_or_id)

    def clear_document(self, document: "ElementResolver") -> None:
        """Drop the factory and cached views for a document."""
        with self._lock:
            self._factories.pop(document, None)
        logger.debug("Cleared container data for %r", document)


def get_container() -> ViewContainer:
    """Get the singleton view container.

    Returns:
        The shared ViewContainer instance
    """
    global _container
    if _container is None:
        _container = ViewContainer()
    return _container


def reset_container() -> None:
    """Reset the container (for testing).

    Clears the singleton instance so a fresh container is created
    on next get_container() call.
    """
    global _container
    _container = None
