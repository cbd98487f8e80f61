"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration with markers and sample data
WHY: Enable test organization, filtering, and shared test utilities
HOW: Define pytest markers, fixtures, and small transcript helpers
"""

import pytest

from buynder.models.listing import Listing
from buynder.services.phrase_selector import FixedPhraseSelector, reset_phrase_selector


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (multiple components)"
    )
    config.addinivalue_line(
        "markers", "scenario: Reference negotiation walkthroughs"
    )


@pytest.fixture(autouse=True)
def reset_phrase_selector_singleton():
    """
    Reset phrase selector singleton before each test.

    WHAT: Clear selector cache between tests
    WHY: A test that patches PHRASE_SELECTION must not leak into the next
    HOW: Call reset_phrase_selector() before and after each test
    """
    reset_phrase_selector()
    yield
    reset_phrase_selector()


@pytest.fixture
def listing():
    """Bike listing asking $120."""
    return Listing(
        id="listing-1",
        title="Trek FX 3 Hybrid Bike",
        description="Lightly used commuter bike, new tires last spring.",
        condition="Used - Good",
        quality="good",
        asking_price=120,
        price="$120",
        location="Brooklyn, NY",
        image_url="https://example.com/bike.jpg",
        posted_at="2024-05-01T12:00:00Z",
        seller_name="Dana",
    )


@pytest.fixture
def first_selector():
    """Selector that always returns the first rendered variant."""
    return FixedPhraseSelector(0)

