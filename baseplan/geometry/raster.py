"""
Grid rasterization of building polygons.

A tile is an integer grid cell (x, y). A polygon covers a tile when the
tile's center (x + 0.5, y + 0.5) lies inside the polygon according to the
even-odd ray casting rule.

Edge behaviour of the ray cast: for an
axis-aligned rectangle, points on the minimum-x and minimum-y edges count
as inside, points on the maximum-x and maximum-y edges count as outside.
"""

import math
from typing import Iterable, List, Set, Tuple

from .shapes import Point, Polygon, polygon_bounds

Tile = Tuple[int, int]

DEFAULT_CELL_SIZE = 10
DEFAULT_GRID_WIDTH = 100
DEFAULT_GRID_HEIGHT = 100


def point_in_polygon(point: Point, polygon: Polygon) -> bool:
    """Ray casting algorithm for point-in-polygon test.

    Casts a ray from the point to the right and counts edge crossings.
    Odd number of crossings = inside, even = outside.
    """
    x, y = point
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]

        # Half-open comparison keeps horizontal edges from counting twice
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def sampling_window(grid_width: int = DEFAULT_GRID_WIDTH,
                    grid_height: int = DEFAULT_GRID_HEIGHT) -> Tuple[int, int, int, int]:
    """Cell range sampled by the rasterizer as (min_x, min_y, max_x, max_y).

    The window is three canvases wide and tall, with one full canvas of
    overhang on every side. Max bounds are exclusive.
    """
    return (-grid_width, -grid_height, 2 * grid_width, 2 * grid_height)


def polygon_to_grid_tiles(polygon: Polygon,
                          grid_width: int = DEFAULT_GRID_WIDTH,
                          grid_height: int = DEFAULT_GRID_HEIGHT) -> Set[Tile]:
    """Rasterize a local-space polygon into the set of covered tiles.

    Tiles are returned in the polygon's own (untranslated) coordinates;
    callers shift them by the building's grid position with translate_tiles().

    Only cells inside both the sampling window and the polygon's bounding
    box are tested, which yields the same set as testing the whole window.
    """
    tiles: Set[Tile] = set()
    if len(polygon) < 3:
        return tiles

    win_min_x, win_min_y, win_max_x, win_max_y = sampling_window(grid_width, grid_height)
    min_x, min_y, max_x, max_y = polygon_bounds(polygon)

    start_x = max(win_min_x, int(math.floor(min_x - 0.5)))
    start_y = max(win_min_y, int(math.floor(min_y - 0.5)))
    stop_x = min(win_max_x, int(math.ceil(max_x)) + 1)
    stop_y = min(win_max_y, int(math.ceil(max_y)) + 1)

    for y in range(start_y, stop_y):
        center_y = y + 0.5
        for x in range(start_x, stop_x):
            if point_in_polygon((x + 0.5, center_y), polygon):
                tiles.add((x, y))

    return tiles


def translate_tiles(tiles: Iterable[Tile], dx: int, dy: int) -> Set[Tile]:
    """Shift tiles by an integer grid offset."""
    return {(x + dx, y + dy) for x, y in tiles}


def tile_to_coords(tile: Tile, cell_size: float = DEFAULT_CELL_SIZE) -> Tuple[float, float]:
    """Convert a tile coordinate to canvas units."""
    return (tile[0] * cell_size, tile[1] * cell_size)


def sorted_tiles(tiles: Iterable[Tile]) -> List[Tile]:
    """Row-major ordering of tiles, for stable export."""
    return sorted(tiles, key=lambda t: (t[1], t[0]))
