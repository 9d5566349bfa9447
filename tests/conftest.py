"""
Shared test fixtures for BasePlan tests.

Provides reusable building templates, links and configurations for the
geometry, simulation and layout file tests.
"""

import pytest
from typing import List

from baseplan.config import LayoutConfig
from baseplan.layout.abstraction import BuildingTemplate, Link, Shape


@pytest.fixture
def kitchen() -> BuildingTemplate:
    """An 8x6 rectangular kitchen."""
    return BuildingTemplate(
        id="kitchen",
        name="Kitchen",
        shape=Shape.RECTANGLE,
        width=8,
        height=6,
        color="#f97316",
    )


@pytest.fixture
def storage() -> BuildingTemplate:
    """An 8x8 rectangular storage room."""
    return BuildingTemplate(
        id="storage",
        name="Storage",
        shape=Shape.RECTANGLE,
        width=8,
        height=8,
        color="#6b7280",
    )


@pytest.fixture
def turret() -> BuildingTemplate:
    """A circular turret nest with diameter 4."""
    return BuildingTemplate(
        id="turret_nest",
        name="Turret Nest",
        shape=Shape.CIRCLE,
        width=4,
        height=4,
        color="#dc2626",
    )


@pytest.fixture
def square_buildings() -> List[BuildingTemplate]:
    """Three identical 4x4 rectangles A, B, C."""
    return [
        BuildingTemplate(id=ref, name=ref, shape=Shape.RECTANGLE, width=4, height=4)
        for ref in ("A", "B", "C")
    ]


@pytest.fixture
def kitchen_storage_link() -> Link:
    return Link(source="kitchen", target="storage", strength=6)


@pytest.fixture
def default_config() -> LayoutConfig:
    """Default configuration for testing."""
    return LayoutConfig()
