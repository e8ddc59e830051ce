"""aria-view - Typed property views over ARIA attribute strings."""

from ariaview.adapters import Document, Element
from ariaview.container import get_container, reset_container
from ariaview.domains.codec import AttributeFormatError, Codec, CodecResult, FormatError
from ariaview.domains.registry import AttributeRegistry, build_registry
from ariaview.domains.shared.errors import AriaViewError, DetachedViewError
from ariaview.domains.view import TypedView, ViewFactory

__all__ = [
    "AriaViewError",
    "AttributeFormatError",
    "AttributeRegistry",
    "Codec",
    "CodecResult",
    "DetachedViewError",
    "Document",
    "Element",
    "FormatError",
    "TypedView",
    "ViewFactory",
    "build_registry",
    "get_container",
    "reset_container",
]

__version__ = "0.1.0"
