"""Repository for typed views.

Defines the cache protocol and an identity-keyed implementation that
holds elements only weakly. An entry disappears as soon as its element
is garbage collected.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from ariaview.domains.shared.errors import UnsupportedElementError

from .aggregates import TypedView

logger = logging.getLogger(__name__)


@runtime_checkable
class ViewCache(Protocol):
    """Protocol for per-element view caches."""

    def get(self, element: Any) -> Optional[TypedView]:
        """Return the cached view for ``element``, if any."""
        ...

    def get_or_create(
        self, element: Any, builder: Callable[["weakref.ReferenceType[Any]"], TypedView]
    ) -> Tuple[TypedView, bool]:
        """Return the cached view or build, store and return a new one."""
        ...

    def discard(self, element: Any) -> bool:
        """Drop the view for ``element``."""
        ...

    def clear(self) -> None:
        """Drop all views."""
        ...


class WeakIdentityViewCache:
    """Side table keyed by element identity.

    Each entry holds a weak reference to its element whose callback
    evicts the entry, so the cache never extends an element's lifetime.
    Elements are compared by identity, never by equality.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._views: Dict[int, Tuple["weakref.ReferenceType[Any]", TypedView]] = {}

    def _lookup(self, element: Any) -> Optional[TypedView]:
        entry = self._views.get(id(element))
        if entry is None:
            return None
        ref, view = entry
        # A dead ref means the id has been recycled for a new object
        if ref() is not element:
            return None
        return view

    def get(self, element: Any) -> Optional[TypedView]:
        with self._lock:
            return self._lookup(element)

    def get_or_create(
        self, element: Any, builder: Callable[["weakref.ReferenceType[Any]"], TypedView]
    ) -> Tuple[TypedView, bool]:
        """Return ``(view, created)`` for ``element``.

        ``builder`` receives the weak reference the cache uses for the
        element and must not store a strong one.

        Raises:
            UnsupportedElementError: If ``element`` cannot be weakly referenced
        """
        with self._lock:
            view = self._lookup(element)
            if view is not None:
                return view, False

            key = id(element)
            views = self._views

            def _evict(ref: "weakref.ReferenceType[Any]") -> None:
                entry = views.get(key)
                if entry is not None and entry[0] is ref:
                    views.pop(key, None)

            try:
                ref = weakref.ref(element, _evict)
            except TypeError as e:
                raise UnsupportedElementError(
                    f"{type(element).__name__} objects cannot be weakly referenced"
                ) from e

            view = builder(ref)
            self._views[key] = (ref, view)
            return view, True

    def discard(self, element: Any) -> bool:
        with self._lock:
            if self._lookup(element) is None:
                return False
            del self._views[id(element)]
            return True

    def clear(self) -> None:
        with self._lock:
            count = len(self._views)
            self._views.clear()
        logger.debug("Cleared %d cached views", count)

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for ref, _ in self._views.values() if ref() is not None)

    def __contains__(self, element: object) -> bool:
        return self.get(element) is not None
