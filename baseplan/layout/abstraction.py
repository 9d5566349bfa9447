"""
Layout Abstraction Layer

Data model shared by the placement engine and its collaborators:
building templates supplied by the caller, weighted links between them,
and the simulation bodies derived from templates for one layout run.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Set, Tuple

from ..geometry.raster import Tile, polygon_to_grid_tiles, translate_tiles
from ..geometry.sat import Vector, polygon_normals
from ..geometry.shapes import DEFAULT_MARGIN, Polygon, create_polygons, polygon_radius


class Shape(Enum):
    """Supported building footprints."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"


@dataclass(frozen=True)
class BuildingTemplate:
    """Immutable building descriptor created by the caller.

    Circles use width as their diameter; height is still required to be
    positive so templates stay valid if the shape is switched.
    """
    id: str
    name: str
    shape: Shape
    width: float
    height: float
    color: str = "#6b7280"

    def __post_init__(self):
        if not self.id:
            raise ValueError("Building id must be a non-empty string")
        if not isinstance(self.shape, Shape):
            try:
                object.__setattr__(self, "shape", Shape(self.shape))
            except ValueError:
                raise ValueError(
                    f"Building '{self.id}': unknown shape '{self.shape}'. "
                    f"Expected one of: {', '.join(s.value for s in Shape)}"
                ) from None
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Building '{self.id}': width and height must be positive "
                f"(got {self.width}x{self.height})"
            )

    def create_polygons(self, margin: float = DEFAULT_MARGIN) -> Tuple[Polygon, Polygon]:
        """Build (outer, inner) local polygons for this template."""
        return create_polygons(self.shape.value, self.width, self.height, margin)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the exchange record shape."""
        return {
            "id": self.id,
            "name": self.name,
            "shape": self.shape.value,
            "width": self.width,
            "height": self.height,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildingTemplate":
        """Create from an exchange record."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            shape=data.get("shape", Shape.RECTANGLE.value),
            width=data["width"],
            height=data.get("height", data["width"]),
            color=str(data.get("color", "#6b7280")),
        )


@dataclass(frozen=True)
class Link:
    """Weighted, unordered relationship between two buildings.

    Larger strength pulls the pair closer. Self links are rejected.
    """
    source: str
    target: str
    strength: float = 1.0

    def __post_init__(self):
        if self.source == self.target:
            raise ValueError(f"Self link on '{self.source}' is not allowed")
        if self.strength <= 0:
            raise ValueError(
                f"Link {self.source}-{self.target}: strength must be positive "
                f"(got {self.strength})"
            )

    @property
    def pair(self) -> frozenset:
        """Unordered pair key."""
        return frozenset((self.source, self.target))

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "strength": self.strength}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            strength=data.get("strength", 1.0),
        )


@dataclass
class Body:
    """A building instance inside one simulation run."""
    id: str
    name: str
    color: str
    polygon: Polygon  # Outer polygon, collision footprint (local coords)
    inner_polygon: Polygon  # Visual footprint, rasterized into tiles
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    round_x: int = 0
    round_y: int = 0

    # Derived from the outer polygon once; polygons never rotate
    normals: List[Vector] = field(default_factory=list, repr=False)
    radius: float = field(default=0.0, repr=False)

    def __post_init__(self):
        if not self.normals:
            self.normals = polygon_normals(self.polygon)
        if not self.radius:
            self.radius = polygon_radius(self.polygon)

    @classmethod
    def from_template(cls, template: BuildingTemplate, x: float, y: float,
                      margin: float = DEFAULT_MARGIN) -> "Body":
        """Derive a body positioned at (x, y) from a template."""
        outer, inner = template.create_polygons(margin)
        body = cls(
            id=template.id,
            name=template.name,
            color=template.color,
            polygon=outer,
            inner_polygon=inner,
            x=x,
            y=y,
        )
        body.snap()
        return body

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def snap(self):
        """Floor the continuous position onto the integer grid."""
        self.round_x = int(math.floor(self.x))
        self.round_y = int(math.floor(self.y))

    def distance_to(self, other: "Body") -> float:
        """Center-to-center distance."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def tiles(self, grid_width: int = 100, grid_height: int = 100) -> Set[Tile]:
        """World-space tiles covered by the inner polygon at the grid position."""
        local = polygon_to_grid_tiles(self.inner_polygon, grid_width, grid_height)
        return translate_tiles(local, self.round_x, self.round_y)
