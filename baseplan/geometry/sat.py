"""
Separating Axis Theorem collision test for convex polygons.

Given two convex polygons in local coordinates plus their world positions,
polygon_collision() either proves them apart (a separating axis exists)
or reports the minimum translation vector: moving polygon A by
-overlap_v (or B by +overlap_v) separates the pair.

Touching polygons (projections meeting at a single value) count as
colliding with zero overlap, so a resolved pair is not pushed again.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from shapely.geometry import Polygon as ShapelyPolygon

from .shapes import Point, Polygon, translate_polygon

Vector = Tuple[float, float]


@dataclass
class CollisionResponse:
    """Result of a colliding SAT test."""
    overlap: float = math.inf
    overlap_n: Vector = (0.0, 0.0)  # Unit axis of least penetration (A -> B)
    a_in_b: bool = True
    b_in_a: bool = True

    @property
    def overlap_v(self) -> Vector:
        """Minimum translation vector (overlap_n scaled by overlap)."""
        return (self.overlap_n[0] * self.overlap, self.overlap_n[1] * self.overlap)


def polygon_normals(polygon: Sequence[Point]) -> List[Vector]:
    """Unit edge normals, one per edge (i -> i+1, wrapping)."""
    normals = []
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        ex, ey = x2 - x1, y2 - y1
        length = math.hypot(ex, ey)
        if length == 0:
            continue
        # Perpendicular (y, -x), normalized
        normals.append((ey / length, -ex / length))
    return normals


def _project(polygon: Sequence[Point], axis: Vector) -> Tuple[float, float]:
    ax, ay = axis
    lo = math.inf
    hi = -math.inf
    for x, y in polygon:
        d = x * ax + y * ay
        if d < lo:
            lo = d
        if d > hi:
            hi = d
    return lo, hi


def _is_separating_axis(a_pos: Point, b_pos: Point,
                        a_points: Sequence[Point], b_points: Sequence[Point],
                        axis: Vector, response: CollisionResponse) -> bool:
    """Project both polygons on the axis; record overlap if not separated."""
    a_min, a_max = _project(a_points, axis)
    b_min, b_max = _project(b_points, axis)

    offset = (b_pos[0] - a_pos[0]) * axis[0] + (b_pos[1] - a_pos[1]) * axis[1]
    b_min += offset
    b_max += offset

    if a_min > b_max or b_min > a_max:
        return True

    if a_min < b_min:
        response.a_in_b = False
        if a_max < b_max:
            overlap = a_max - b_min
            response.b_in_a = False
        else:
            option1 = a_max - b_min
            option2 = b_max - a_min
            overlap = option1 if option1 < option2 else -option2
    else:
        response.b_in_a = False
        if a_max > b_max:
            overlap = a_min - b_max
            response.a_in_b = False
        else:
            option1 = a_max - b_min
            option2 = b_max - a_min
            overlap = option1 if option1 < option2 else -option2

    abs_overlap = abs(overlap)
    if abs_overlap < response.overlap:
        response.overlap = abs_overlap
        if overlap < 0:
            response.overlap_n = (-axis[0], -axis[1])
        else:
            response.overlap_n = axis

    return False


def polygon_collision(a_pos: Point, a_points: Sequence[Point],
                      b_pos: Point, b_points: Sequence[Point],
                      a_normals: Optional[Sequence[Vector]] = None,
                      b_normals: Optional[Sequence[Vector]] = None,
                      ) -> Optional[CollisionResponse]:
    """Test two convex polygons for overlap.

    Args:
        a_pos: World position of polygon A
        a_points: Local vertices of polygon A
        b_pos: World position of polygon B
        b_points: Local vertices of polygon B
        a_normals: Precomputed edge normals of A (computed when omitted)
        b_normals: Precomputed edge normals of B (computed when omitted)

    Returns:
        CollisionResponse when the polygons overlap or touch, None otherwise
    """
    if a_normals is None:
        a_normals = polygon_normals(a_points)
    if b_normals is None:
        b_normals = polygon_normals(b_points)

    response = CollisionResponse()

    for axis in a_normals:
        if _is_separating_axis(a_pos, b_pos, a_points, b_points, axis, response):
            return None
    for axis in b_normals:
        if _is_separating_axis(a_pos, b_pos, a_points, b_points, axis, response):
            return None

    return response


def overlap_area(a_pos: Point, a_points: Polygon,
                 b_pos: Point, b_points: Polygon) -> float:
    """Area of the intersection of two polygons placed in world space."""
    poly_a = ShapelyPolygon(translate_polygon(a_points, a_pos[0], a_pos[1]))
    poly_b = ShapelyPolygon(translate_polygon(b_points, b_pos[0], b_pos[1]))
    if not poly_a.intersects(poly_b):
        return 0.0
    return poly_a.intersection(poly_b).area
