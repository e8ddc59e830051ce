"""Element store adapters.

Key Components:
    Element: In-memory element with a case-insensitive attribute map
    Document: Attached elements plus identifier lookup

Usage:
    from ariaview.adapters import Document

    document = Document()
    button = document.add_element("button", id="save", aria_pressed="false")
"""

from .memory_dom import Document, Element

__all__ = ["Document", "Element"]
