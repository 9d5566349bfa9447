"""
BasePlan - Building Layout Generator

Positions polygon-shaped buildings on a grid with a seeded force
simulation: weighted links pull related buildings together, collision
resolution keeps footprints apart and the cluster stays centered on the
canvas. Finished layouts rasterize into grid tiles for rendering/export.
"""

__version__ = "0.1.0"

from .config import LayoutConfig, load_config
from .layout.abstraction import Body, BuildingTemplate, Link, Shape
from .placement.simulation import LayoutResult, LayoutSimulation, generate_layout

__all__ = [
    "LayoutConfig",
    "load_config",
    "Body",
    "BuildingTemplate",
    "Link",
    "Shape",
    "LayoutResult",
    "LayoutSimulation",
    "generate_layout",
]
