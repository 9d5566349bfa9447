"""Geometry primitives: seeded randomness, footprints, rasterization, SAT."""

from .seeded_random import SeededRandom
from .shapes import (
    Point,
    Polygon,
    rect_polygon,
    circle_polygon,
    create_polygons,
    translate_polygon,
    polygon_bounds,
)
from .raster import (
    Tile,
    point_in_polygon,
    polygon_to_grid_tiles,
    translate_tiles,
    tile_to_coords,
)
from .sat import CollisionResponse, polygon_collision, polygon_normals, overlap_area

__all__ = [
    "SeededRandom",
    "Point",
    "Polygon",
    "rect_polygon",
    "circle_polygon",
    "create_polygons",
    "translate_polygon",
    "polygon_bounds",
    "Tile",
    "point_in_polygon",
    "polygon_to_grid_tiles",
    "translate_tiles",
    "tile_to_coords",
    "CollisionResponse",
    "polygon_collision",
    "polygon_normals",
    "overlap_area",
]
