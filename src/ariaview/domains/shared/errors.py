"""Exception hierarchy shared by all aria-view contexts.

Format errors raised by codecs are NOT part of this hierarchy's control
flow: codecs report them as ``CodecResult`` values. The exception form
(``AttributeFormatError``) lives with the codec value objects.
"""

from __future__ import annotations


class AriaViewError(Exception):
    """Base error for aria-view failures."""


class CodecConfigurationError(AriaViewError, ValueError):
    """A codec or combinator was constructed with invalid arguments."""


class RegistryError(AriaViewError):
    """Base error for attribute registry failures."""


class RegistryFrozenError(RegistryError):
    """Attempted to mutate a registry after it was frozen."""


class RegistryDuplicateError(RegistryError):
    """Attempted to register a property name twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Attribute '{name}' is already registered")


class UnknownAttributeError(RegistryError, KeyError):
    """Requested a property name the registry does not know."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Attribute '{self.name}' is not registered"


class AttributeTableError(AriaViewError, ValueError):
    """An attribute table file or mapping could not be loaded."""


class DetachedViewError(AriaViewError, ReferenceError):
    """A typed view was used after its element was garbage collected."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot access '{name}': the element behind this view no longer exists"
        )


class UnsupportedElementError(AriaViewError, TypeError):
    """The element cannot be weakly referenced and so cannot be cached."""
