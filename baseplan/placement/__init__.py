"""Layout engine: force simulation, collision resolution and rendering."""

from .forces import CenterForce, CollisionForce, ForceType, IndexedLink, LinkForce
from .simulation import (
    LayoutResult,
    LayoutSimulation,
    SimulationState,
    complete_links,
    generate_layout,
    total_overlap_area,
)
from .visualizer import export_svg, render_layout_svg

__all__ = [
    "CenterForce",
    "CollisionForce",
    "ForceType",
    "IndexedLink",
    "LinkForce",
    "LayoutResult",
    "LayoutSimulation",
    "SimulationState",
    "complete_links",
    "generate_layout",
    "total_overlap_area",
    "export_svg",
    "render_layout_svg",
]
