"""Unit tests for the in-memory element store.

Run with: uv run pytest tests/unit/test_memory_dom.py -v
"""

__test__ = True

import weakref

from ariaview.adapters import Document, Element
from ariaview.domains.shared.kernel import ElementHandle, ElementResolver, is_element


# =============================================================================
# Element
# =============================================================================


class TestElement:
    """Test the element attribute store."""

    def test_satisfies_protocol(self):
        element = Element("div")
        assert isinstance(element, ElementHandle)
        assert is_element(element)

    def test_tag_name_lowercased(self):
        assert Element("DIV").tag_name == "div"

    def test_attributes_case_insensitive(self):
        element = Element("div")
        element.set_attribute("Aria-Label", "Save")
        assert element.get_attribute("aria-label") == "Save"
        assert element.has_attribute("ARIA-LABEL")
        element.remove_attribute("aria-LABEL")
        assert element.get_attribute("aria-label") is None

    def test_remove_missing_is_noop(self):
        Element("div").remove_attribute("aria-hidden")

    def test_non_string_values_are_stringified(self):
        element = Element("div")
        element.set_attribute("aria-level", 2)
        element.set_attribute("aria-hidden", True)
        assert element.get_attribute("aria-level") == "2"
        assert element.get_attribute("aria-hidden") == "true"

    def test_id(self):
        element = Element("div", {"id": "main"})
        assert element.id == "main"
        element.id = "other"
        assert element.get_attribute("id") == "other"
        assert Element("div").id == ""

    def test_attributes_copy(self):
        element = Element("div", {"role": "button"})
        copy = element.attributes
        copy["role"] = "link"
        assert element.get_attribute("role") == "button"

    def test_identity_semantics(self):
        first = Element("div", {"id": "x"})
        second = Element("div", {"id": "x"})
        assert first != second
        assert len({first, second}) == 2

    def test_weakref(self):
        element = Element("div")
        assert weakref.ref(element)() is element

    def test_repr(self):
        assert repr(Element("div", {"id": "x"})) == "<div#x>"
        assert repr(Element("span")) == "<span>"


# =============================================================================
# Document
# =============================================================================


class TestDocument:
    """Test attached elements and identifier lookup."""

    def test_satisfies_resolver_protocol(self):
        assert isinstance(Document(), ElementResolver)

    def test_create_element_is_detached(self):
        document = Document()
        element = document.create_element("div", id="a")
        assert element.document is None
        assert document.get_element_by_id("a") is None

    def test_create_element_keyword_attributes(self):
        element = Document().create_element("button", aria_pressed="true", role="button")
        assert element.get_attribute("aria-pressed") == "true"
        assert element.get_attribute("role") == "button"

    def test_add_element_attaches(self):
        document = Document()
        element = document.add_element("div", id="a")
        assert element.document is document
        assert element in document
        assert document.get_element_by_id("a") is element

    def test_first_match_wins(self):
        document = Document()
        first = document.add_element("div", id="dup")
        document.add_element("div", id="dup")
        assert document.get_element_by_id("dup") is first

    def test_empty_id_never_matches(self):
        document = Document()
        document.add_element("div")
        assert document.get_element_by_id("") is None

    def test_remove(self):
        document = Document()
        element = document.add_element("div", id="a")
        document.remove(element)
        assert element.document is None
        assert document.get_element_by_id("a") is None
        document.remove(element)

    def test_append_moves_between_documents(self):
        source, target = Document(), Document()
        element = source.add_element("div", id="a")
        target.append(element)
        assert element not in source
        assert target.get_element_by_id("a") is element

    def test_append_twice_is_noop(self):
        document = Document()
        element = document.add_element("div")
        document.append(element)
        assert len(document) == 1

    def test_clear(self):
        document = Document()
        element = document.add_element("div")
        document.clear()
        assert len(document) == 0
        assert element.document is None

    def test_iteration_order(self):
        document = Document()
        elements = [document.add_element("li") for _ in range(3)]
        assert list(document) == elements
