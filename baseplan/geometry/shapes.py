"""
Building footprint polygons.

Every building contributes two local-space polygons centered at the origin:
an inner polygon (visual footprint, rasterized into tiles) and an outer
polygon inflated by a fixed margin (used for collision resolution).
"""

import math
from typing import List, Tuple

Point = Tuple[float, float]
Polygon = List[Point]

DEFAULT_MARGIN = 1.0
CIRCLE_SEGMENTS = 32

SHAPE_RECTANGLE = "rectangle"
SHAPE_CIRCLE = "circle"


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def rect_polygon(width: float, height: float) -> Polygon:
    """Axis-aligned rectangle centered at the origin.

    Half extents are rounded to the nearest integer so the corners land on
    grid lines.
    """
    half_w = round_half_up(width / 2)
    half_h = round_half_up(height / 2)
    return [
        (-half_w, -half_h),
        (half_w, -half_h),
        (half_w, half_h),
        (-half_w, half_h),
    ]


def circle_polygon(diameter: float, segments: int = CIRCLE_SEGMENTS) -> Polygon:
    """Regular polygon approximating a circle of the given diameter."""
    radius = diameter / 2
    points = []
    for i in range(segments):
        angle = (i / segments) * math.pi * 2
        points.append((math.cos(angle) * radius, math.sin(angle) * radius))
    return points


def create_polygons(shape: str, width: float, height: float,
                    margin: float = DEFAULT_MARGIN) -> Tuple[Polygon, Polygon]:
    """Build the (outer, inner) polygon pair for a building shape.

    Args:
        shape: "rectangle" or "circle" (circles use width as the diameter)
        width: Footprint width in grid units
        height: Footprint height in grid units (ignored for circles)
        margin: Collision buffer added to the outer polygon

    Returns:
        (outer_polygon, inner_polygon) in local coordinates

    Raises:
        ValueError: If the shape is unknown or a dimension is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Footprint dimensions must be positive, got {width}x{height}")

    if shape == SHAPE_CIRCLE:
        inner = circle_polygon(width)
        outer = circle_polygon(width + margin / 2)
    elif shape == SHAPE_RECTANGLE:
        inner = rect_polygon(width, height)
        outer = rect_polygon(width + margin, height + margin)
    else:
        raise ValueError(f"Unknown shape '{shape}'. Expected 'rectangle' or 'circle'")

    return outer, inner


def translate_polygon(polygon: Polygon, dx: float, dy: float) -> Polygon:
    """Return the polygon moved by (dx, dy)."""
    return [(x + dx, y + dy) for x, y in polygon]


def polygon_bounds(polygon: Polygon) -> Tuple[float, float, float, float]:
    """Get (min_x, min_y, max_x, max_y) of a polygon."""
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    return (min(xs), min(ys), max(xs), max(ys))


def polygon_radius(polygon: Polygon) -> float:
    """Distance from the local origin to the farthest vertex."""
    return max(math.hypot(x, y) for x, y in polygon)
