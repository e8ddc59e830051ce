"""Unit tests for the Typed View domain.

Tests cover: ViewFactory.view_of, TypedView property access, error recovery,
custom codecs, sealing, the weak view cache and domain events.

Run with: uv run pytest tests/unit/test_typed_view.py -v
"""

__test__ = True

import gc
import logging
import math
import weakref

import pytest

from ariaview.config import ViewRuntimeConfig
from ariaview.domains.codec import FunctionCodec, StringCodec
from ariaview.domains.registry import AttributeRegistry
from ariaview.domains.shared.errors import DetachedViewError, UnsupportedElementError
from ariaview.domains.shared.kernel import RESERVED_PROPERTY_NAMES
from ariaview.domains.view import (
    AttributeWriteRejected,
    FormatErrorRecovered,
    PropertyAccessor,
    TypedView,
    ViewFactory,
    ViewMaterialized,
    WeakIdentityViewCache,
)


# =============================================================================
# view_of
# =============================================================================


class TestViewOf:
    """Test view materialization and identity."""

    def test_none_yields_none(self, factory):
        assert factory.view_of(None) is None

    def test_unknown_id_yields_none(self, factory):
        assert factory.view_of("missing") is None

    def test_non_element_yields_none(self, factory):
        assert factory.view_of(42) is None

    def test_element_yields_view(self, factory, element):
        view = factory.view_of(element)
        assert isinstance(view, TypedView)
        assert len(view) == len(factory.registry)

    def test_same_element_same_view(self, factory, element):
        assert factory.view_of(element) is factory.view_of(element)

    def test_id_and_element_share_view(self, factory, element):
        assert factory.view_of("save") is factory.view_of(element)

    def test_same_view_after_write(self, factory, element):
        view = factory.view_of(element)
        view.busy = True
        again = factory.view_of(element)
        assert again is view
        assert again.busy is True

    def test_factory_is_callable(self, factory, element):
        assert factory(element) is factory.view_of(element)

    def test_distinct_elements_distinct_views(self, factory, document):
        first = document.add_element("div", id="a")
        second = document.add_element("div", id="b")
        assert factory.view_of(first) is not factory.view_of(second)

    def test_detached_element_still_gets_view(self, factory, document):
        loose = document.create_element("div")
        view = factory.view_of(loose)
        view.hidden = True
        assert loose.get_attribute("aria-hidden") == "true"

    def test_shape_fixed_at_construction(self, document):
        registry = AttributeRegistry()
        registry.register("label", StringCodec())
        factory = ViewFactory(registry, document)
        view = factory.view_of(document.add_element("div"))
        registry.register("late", StringCodec())
        assert view.names() == ("label",)
        assert "late" not in view

    def test_unweakrefable_element_rejected(self, factory):
        class SlotElement:
            __slots__ = ("id",)

            def __init__(self):
                self.id = "x"

            def get_attribute(self, key):
                return None

            def set_attribute(self, key, value):
                pass

            def remove_attribute(self, key):
                pass

            def has_attribute(self, key):
                return False

        with pytest.raises(UnsupportedElementError):
            factory.view_of(SlotElement())


# =============================================================================
# Property access
# =============================================================================


class TestPropertyAccess:
    """Test typed reads and writes through the view."""

    def test_absent_defaults(self, factory, element):
        view = factory.view_of(element)
        assert view.hidden is False
        assert view.checked is None
        assert view.expanded is None
        assert view.activedescendant is None
        assert view.owns == []
        assert math.isnan(view.level)
        assert math.isnan(view.valuenow)
        assert view.label is None
        assert view.live == "off"
        assert view.invalid is False
        assert view.dropeffect == ["none"]
        assert view.relevant == ["additions", "text"]

    def test_boolean_round_trip(self, factory, element):
        view = factory.view_of(element)
        view.hidden = True
        assert element.get_attribute("aria-hidden") == "true"
        assert view.hidden is True

    def test_tristate_mixed(self, factory, element):
        view = factory.view_of(element)
        view.checked = "mixed"
        assert element.get_attribute("aria-checked") == "mixed"
        assert view.checked == "mixed"

    def test_none_removes_attribute(self, factory, element):
        view = factory.view_of(element)
        view.label = "Save"
        view.label = None
        assert not element.has_attribute("aria-label")
        assert view.label is None

    def test_del_removes_attribute(self, factory, element):
        view = factory.view_of(element)
        view.pressed = True
        del view.pressed
        assert not element.has_attribute("aria-pressed")

    def test_number_write(self, factory, element):
        view = factory.view_of(element)
        view.valuenow = 3.0
        assert element.get_attribute("aria-valuenow") == "3"
        view.valuenow = 0.25
        assert view.valuenow == 0.25

    def test_integer_write_truncates(self, factory, element):
        view = factory.view_of(element)
        view.level = 2.9
        assert element.get_attribute("aria-level") == "2"
        assert view.level == 2

    def test_reads_raw_written_outside(self, factory, element):
        view = factory.view_of(element)
        element.set_attribute("aria-level", "3")
        assert view.level == 3

    def test_attribute_names_are_case_insensitive(self, factory, element):
        element.set_attribute("ARIA-HIDDEN", "true")
        assert factory.view_of(element).hidden is True

    def test_reference_round_trip(self, factory, document, element):
        menu = document.add_element("ul", id="menu")
        view = factory.view_of(element)
        view.activedescendant = menu
        assert element.get_attribute("aria-activedescendant") == "menu"
        assert view.activedescendant is menu

    def test_reference_read_is_lenient(self, factory, element):
        element.set_attribute("aria-activedescendant", "gone")
        assert factory.view_of(element).activedescendant is None

    def test_reference_list(self, factory, document, element):
        title = document.add_element("h1", id="title")
        hint = document.add_element("p", id="hint")
        view = factory.view_of(element)
        view.labelledby = [title, hint]
        assert element.get_attribute("aria-labelledby") == "title hint"
        assert view.labelledby == [title, hint]

    def test_reference_list_scalar(self, factory, document, element):
        title = document.add_element("h1", id="title")
        view = factory.view_of(element)
        view.describedby = title
        assert view.describedby == [title]

    def test_token_list(self, factory, element):
        view = factory.view_of(element)
        view.dropeffect = ["copy", "move"]
        assert element.get_attribute("aria-dropeffect") == "copy move"
        assert view.dropeffect == ["copy", "move"]

    def test_token_with_boolean_literals(self, factory, element):
        view = factory.view_of(element)
        view.invalid = True
        assert element.get_attribute("aria-invalid") == "true"
        assert view.invalid is True
        view.invalid = "spelling"
        assert view.invalid == "spelling"

    def test_item_access(self, factory, element):
        view = factory.view_of(element)
        view["busy"] = True
        assert view["busy"] is True
        del view["busy"]
        assert view["busy"] is False

    def test_is_set(self, factory, element):
        view = factory.view_of(element)
        assert not view.is_set("label")
        view.label = ""
        assert view.is_set("label")
        assert view.label == ""
        assert not view.is_set("unregistered")

    def test_to_dict(self, factory, element):
        view = factory.view_of(element)
        view.label = "Save"
        view.hidden = True
        assert view.to_dict(only_set=True) == {"hidden": True, "label": "Save"}
        assert set(view.to_dict()) == set(view.names())

    def test_iteration_and_membership(self, factory, element):
        view = factory.view_of(element)
        assert "hidden" in view
        assert "color" not in view
        assert list(view) == list(view.names())
        assert "hidden" in dir(view)

    def test_accessor(self, factory, element):
        accessor = factory.view_of(element).accessor("label")
        assert isinstance(accessor, PropertyAccessor)
        assert accessor.key == "aria-label"


# =============================================================================
# Format error recovery
# =============================================================================


class TestFormatErrorRecovery:
    """Test that format errors never reach callers."""

    def test_invalid_boolean_reads_default(self, factory, element, events):
        element.set_attribute("aria-hidden", "maybe")
        assert factory.view_of(element).hidden is False
        recovered = [e for e in events if isinstance(e, FormatErrorRecovered)]
        assert len(recovered) == 1
        assert recovered[0].attribute == "hidden"
        assert recovered[0].raw_value == "maybe"
        assert recovered[0].fallback is False
        assert recovered[0].element_id == "save"

    def test_invalid_token_reads_default(self, factory, element):
        element.set_attribute("aria-live", "shouting")
        assert factory.view_of(element).live == "off"

    def test_invalid_token_list_reads_default(self, factory, element):
        element.set_attribute("aria-relevant", "text bogus")
        assert factory.view_of(element).relevant == ["additions", "text"]

    def test_invalid_write_is_dropped(self, factory, element, events):
        view = factory.view_of(element)
        view.live = "polite"
        view.live = "shouting"
        assert element.get_attribute("aria-live") == "polite"
        rejected = [e for e in events if isinstance(e, AttributeWriteRejected)]
        assert len(rejected) == 1
        assert rejected[0].value_repr == "'shouting'"

    def test_invalid_reference_write_is_dropped(self, factory, element):
        view = factory.view_of(element)
        view.activedescendant = 5
        assert not element.has_attribute("aria-activedescendant")

    def test_invalid_write_does_not_remove(self, factory, element):
        view = factory.view_of(element)
        view.dropeffect = ["copy"]
        view.dropeffect = ["copy", "teleport"]
        assert element.get_attribute("aria-dropeffect") == "copy"

    def test_recovery_logged_at_configured_level(self, registry, document, element, caplog):
        factory = ViewFactory(
            registry, document, config=ViewRuntimeConfig(recovery_log_level=logging.WARNING)
        )
        element.set_attribute("aria-busy", "nope")
        with caplog.at_level(logging.WARNING, logger="ariaview.domains.view.services"):
            assert factory.view_of(element).busy is False
        assert "aria-busy" in caplog.text

    def test_failing_publisher_is_logged(self, registry, document, element, caplog):
        def broken(event):
            raise RuntimeError("sink down")

        factory = ViewFactory(registry, document, event_publisher=broken)
        with caplog.at_level(logging.ERROR, logger="ariaview.domains.view.services"):
            view = factory.view_of(element)
        assert view is not None
        assert "sink down" in caplog.text


# =============================================================================
# Custom codecs
# =============================================================================


class TestCustomCodecs:
    """Test views over registries with user-supplied codecs."""

    def _factory(self, document, codec):
        registry = AttributeRegistry()
        registry.register("custom", codec)
        return ViewFactory(registry, document)

    def test_other_failures_propagate_on_read(self, document, element):
        def broken(raw):
            raise RuntimeError("codec bug")

        view = self._factory(document, FunctionCodec(decode=broken)).view_of(element)
        with pytest.raises(RuntimeError, match="codec bug"):
            view.custom

    def test_other_failures_propagate_on_write(self, document, element):
        def broken(value):
            raise RuntimeError("codec bug")

        view = self._factory(document, FunctionCodec(encode=broken)).view_of(element)
        with pytest.raises(RuntimeError, match="codec bug"):
            view.custom = "x"
        assert not element.has_attribute("aria-custom")

    def test_function_codec_round_trip(self, document, element):
        codec = FunctionCodec(
            decode=lambda raw: None if raw is None else raw.split(","),
            encode=lambda value: ",".join(value),
        )
        view = self._factory(document, codec).view_of(element)
        view.custom = ["a", "b"]
        assert element.get_attribute("aria-custom") == "a,b"
        assert view.custom == ["a", "b"]


# =============================================================================
# Sealing
# =============================================================================


class TestSealedView:
    """Test that unregistered names are inert."""

    def test_unregistered_read_is_none(self, factory, element):
        assert factory.view_of(element).color is None

    def test_unregistered_write_is_ignored(self, factory, element):
        view = factory.view_of(element)
        view.color = "red"
        assert view.color is None
        assert not element.has_attribute("aria-color")
        assert "color" not in view

    def test_unregistered_delete_is_ignored(self, factory, element):
        view = factory.view_of(element)
        del view.color
        del view["color"]

    def test_underscore_names_are_not_properties(self, factory, element):
        view = factory.view_of(element)
        with pytest.raises(AttributeError):
            view._secret
        with pytest.raises(AttributeError):
            view._secret = 1

    def test_shape_never_grows(self, factory, element):
        view = factory.view_of(element)
        before = view.names()
        view.color = "red"
        view["size"] = 3
        assert view.names() == before

    def test_reserved_names_match_view_members(self):
        public = {name for name in dir(TypedView) if not name.startswith("_")}
        assert public == RESERVED_PROPERTY_NAMES


# =============================================================================
# Weak cache
# =============================================================================


class TestWeakViewCache:
    """Test that views never keep elements alive."""

    def test_view_does_not_keep_element_alive(self, factory, document):
        element = document.add_element("div", id="temp")
        view = factory.view_of(element)
        ref = weakref.ref(element)
        document.remove(element)
        del element
        gc.collect()
        assert ref() is None
        assert len(factory.cache) == 0
        with pytest.raises(DetachedViewError):
            view.hidden
        with pytest.raises(ReferenceError):
            view.hidden = True

    def test_get_or_create(self, document):
        cache = WeakIdentityViewCache()
        element = document.add_element("div")
        built = []

        def builder(ref):
            built.append(ref)
            return TypedView({})

        view, created = cache.get_or_create(element, builder)
        again, created_again = cache.get_or_create(element, builder)
        assert created and not created_again
        assert view is again
        assert len(built) == 1
        assert built[0]() is element
        assert element in cache

    def test_discard_and_clear(self, document):
        cache = WeakIdentityViewCache()
        first = document.add_element("div")
        second = document.add_element("div")
        cache.get_or_create(first, lambda ref: TypedView({}))
        cache.get_or_create(second, lambda ref: TypedView({}))
        assert cache.discard(first)
        assert not cache.discard(first)
        assert len(cache) == 1
        cache.clear()
        assert len(cache) == 0
        assert cache.get(second) is None

    def test_discarded_view_is_rebuilt(self, factory, element):
        view = factory.view_of(element)
        factory.cache.discard(element)
        assert factory.view_of(element) is not view


# =============================================================================
# Events
# =============================================================================


class TestViewEvents:
    """Test domain events published by the factory."""

    def test_materialized_once(self, factory, element, events):
        factory.view_of(element)
        factory.view_of(element)
        materialized = [e for e in events if isinstance(e, ViewMaterialized)]
        assert len(materialized) == 1
        assert materialized[0].element_id == "save"
        assert materialized[0].attribute_count == len(factory.registry)

    def test_event_to_dict(self):
        event = FormatErrorRecovered(
            attribute="hidden", raw_value="x", message="bad", fallback=False
        )
        data = event.to_dict()
        assert data["event_type"] == "FormatErrorRecovered"
        assert data["fallback"] == "False"
        assert "timestamp" in data

    def test_rejected_to_dict(self):
        data = AttributeWriteRejected(attribute="live", value_repr="'x'", message="bad").to_dict()
        assert data["event_type"] == "AttributeWriteRejected"
        assert data["value"] == "'x'"

    def test_materialized_to_dict(self):
        data = ViewMaterialized(element_id="a", attribute_count=2).to_dict()
        assert data == {
            "event_type": "ViewMaterialized",
            "element_id": "a",
            "attribute_count": 2,
            "timestamp": data["timestamp"],
        }


# =============================================================================
# for_document
# =============================================================================


class TestForDocument:
    """Test factory construction from configuration."""

    def test_builtin_table(self, document):
        factory = ViewFactory.for_document(document, config=ViewRuntimeConfig())
        assert factory.registry.is_frozen
        assert "hidden" in factory.registry

    def test_table_from_file(self, document, tmp_path):
        path = tmp_path / "table.yaml"
        path.write_text("attributes:\n  boolean: [hidden]\n", encoding="utf-8")
        config = ViewRuntimeConfig(attribute_table=path, freeze_registry=False)
        factory = ViewFactory.for_document(document, config=config)
        assert factory.registry.names() == ("hidden",)
        assert not factory.registry.is_frozen
