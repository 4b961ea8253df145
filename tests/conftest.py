"""Pytest configuration for the intentui test suite."""

from __future__ import annotations

import pytest

from intentui.domains.constraints import create_default_constraints
from intentui.domains.intention import SelectionOption


@pytest.fixture
def default_constraints():
    return create_default_constraints()


@pytest.fixture
def severity_options():
    """Four options: below the searchable threshold."""
    return [
        SelectionOption(value="low", label="Low"),
        SelectionOption(value="medium", label="Medium"),
        SelectionOption(value="high", label="High"),
        SelectionOption(value="critical", label="Critical"),
    ]


@pytest.fixture
def country_options():
    """Eight options: above the searchable threshold."""
    names = ["Austria", "Belgium", "Croatia", "Denmark", "Estonia", "France", "Germany", "Hungary"]
    return [{"value": n.lower(), "label": n} for n in names]


class MockEventPublisher:
    """Collects published events."""

    def __init__(self):
        self.events: list = []

    def publish(self, event: object) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]


@pytest.fixture
def publisher():
    return MockEventPublisher()
