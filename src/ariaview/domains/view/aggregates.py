"""Aggregates for the Typed View Context.

A TypedView is the property-style facade over one element. Its shape is
the set of names registered when it was built; it never grows, and
assignments to names outside that shape are silently ignored.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from .entities import PropertyAccessor


class TypedView:
    """Sealed property view over an element's ``aria-*`` attributes.

    Example:
        view = factory.view_of(element)
        view.hidden = True          # stores aria-hidden="true"
        view.valuenow               # float('nan') when absent
        view.label = None           # removes aria-label
    """

    __slots__ = ("_accessors", "__weakref__")

    def __init__(self, accessors: Mapping[str, PropertyAccessor]) -> None:
        object.__setattr__(self, "_accessors", MappingProxyType(dict(accessors)))

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not slots
        if name.startswith("_"):
            raise AttributeError(name)
        accessor = self._accessors.get(name)
        if accessor is None:
            return None
        return accessor.get()

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            raise AttributeError(f"TypedView attribute '{name}' is read-only")
        accessor = self._accessors.get(name)
        if accessor is not None:
            accessor.set(value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            raise AttributeError(f"TypedView attribute '{name}' is read-only")
        accessor = self._accessors.get(name)
        if accessor is not None:
            accessor.delete()

    def __getitem__(self, name: str) -> Any:
        accessor = self._accessors.get(name)
        return accessor.get() if accessor is not None else None

    def __setitem__(self, name: str, value: Any) -> None:
        accessor = self._accessors.get(name)
        if accessor is not None:
            accessor.set(value)

    def __delitem__(self, name: str) -> None:
        accessor = self._accessors.get(name)
        if accessor is not None:
            accessor.delete()

    def __contains__(self, name: object) -> bool:
        return name in self._accessors

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)

    def __dir__(self) -> List[str]:
        return sorted(set(object.__dir__(self)) | set(self._accessors))

    def names(self) -> Tuple[str, ...]:
        """Property names of this view, in registry order."""
        return tuple(self._accessors)

    def accessor(self, name: str) -> PropertyAccessor:
        """Return the accessor behind ``name``.

        Raises:
            KeyError: If ``name`` is not a property of this view
        """
        return self._accessors[name]

    def is_set(self, name: str) -> bool:
        """Check whether the raw attribute behind ``name`` is present.

        Unregistered names are never set.
        """
        accessor = self._accessors.get(name)
        return accessor is not None and accessor.is_set()

    def to_dict(self, only_set: bool = False) -> Dict[str, Any]:
        """Snapshot the current typed values.

        Args:
            only_set: Skip properties whose raw attribute is absent
        """
        return {
            name: accessor.get()
            for name, accessor in self._accessors.items()
            if not only_set or accessor.is_set()
        }

    def __repr__(self) -> str:
        present = [name for name, accessor in self._accessors.items() if accessor.is_set()]
        return f"TypedView({len(self._accessors)} properties, set={present})"
