"""Pytest configuration for the aria-view test suite."""

from __future__ import annotations

from typing import List

import pytest

from ariaview.adapters import Document, Element
from ariaview.config import ViewRuntimeConfig
from ariaview.config import settings
from ariaview.container import reset_container
from ariaview.domains.registry import AttributeRegistry, build_registry
from ariaview.domains.view import ViewFactory


# =============================================================================
# Element Store Fixtures
# =============================================================================


@pytest.fixture
def document() -> Document:
    """An empty in-memory document."""
    return Document()


@pytest.fixture
def element(document: Document) -> Element:
    """A button attached to ``document`` with id 'save'."""
    return document.add_element("button", id="save")


# =============================================================================
# View Fixtures
# =============================================================================


@pytest.fixture
def registry(document: Document) -> AttributeRegistry:
    """The built-in ARIA registry resolving references in ``document``."""
    return build_registry(document)


@pytest.fixture
def events() -> List[object]:
    """Collects published domain events."""
    return []


@pytest.fixture
def factory(registry: AttributeRegistry, document: Document, events: List[object]) -> ViewFactory:
    """A view factory publishing into ``events``."""
    return ViewFactory(registry, document, event_publisher=events.append, config=ViewRuntimeConfig())


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch):
    """Keep tests independent of the container singleton and any .env file."""
    monkeypatch.setattr(settings, "_ENV_LOADED", True)
    reset_container()
    yield
    reset_container()
