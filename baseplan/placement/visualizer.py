"""Layout visualization.

Renders a finished layout as SVG: the canvas grid, each building's inner
tiles at its grid position, optional outer (collision) outlines and the
building names.
"""

import logging
from html import escape
from pathlib import Path
from typing import List, Optional

from ..config import LayoutConfig
from ..geometry.raster import polygon_to_grid_tiles, sorted_tiles, tile_to_coords
from .simulation import LayoutResult

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#1c1917"
GRID_COLOR = "#92400e"
TILE_STROKE = "#92400e"
OUTLINE_COLOR = "#fbbf24"
LABEL_COLOR = "#fbbf24"


def render_layout_svg(result: LayoutResult, config: Optional[LayoutConfig] = None,
                      show_outlines: bool = False) -> str:
    """Render a layout result as an SVG document.

    Args:
        result: Finished layout
        config: Canvas settings (defaults to the result's config)
        show_outlines: Also draw the outer collision polygons

    Returns:
        SVG string
    """
    config = config or result.config
    cell = config.cell_size
    width = config.grid_width * cell
    height = config.grid_height * cell

    svg_parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}">'
    ]

    # Background
    svg_parts.append(f'<rect width="100%" height="100%" fill="{BACKGROUND_COLOR}"/>')

    # Grid lines
    for i in range(config.grid_width + 1):
        x = i * cell
        svg_parts.append(
            f'<line x1="{x:g}" y1="0" x2="{x:g}" y2="{height:g}" '
            f'stroke="{GRID_COLOR}" stroke-width="0.5" opacity="0.3" class="grid-line"/>'
        )
    for i in range(config.grid_height + 1):
        y = i * cell
        svg_parts.append(
            f'<line x1="0" y1="{y:g}" x2="{width:g}" y2="{y:g}" '
            f'stroke="{GRID_COLOR}" stroke-width="0.5" opacity="0.3" class="grid-line"/>'
        )

    for body in result.bodies:
        origin_x = body.round_x * cell
        origin_y = body.round_y * cell
        svg_parts.append(f'<g class="building" data-id="{escape(body.id)}">')

        tiles = polygon_to_grid_tiles(body.inner_polygon, config.grid_width, config.grid_height)
        for tile in sorted_tiles(tiles):
            dx, dy = tile_to_coords(tile, cell)
            svg_parts.append(
                f'<rect x="{origin_x + dx:g}" y="{origin_y + dy:g}" '
                f'width="{cell:g}" height="{cell:g}" fill="{escape(body.color)}" '
                f'stroke="{TILE_STROKE}" stroke-width="1"/>'
            )

        if show_outlines:
            points = " ".join(
                f"{origin_x + x * cell:g},{origin_y + y * cell:g}" for x, y in body.polygon
            )
            svg_parts.append(
                f'<polygon points="{points}" fill="none" '
                f'stroke="{OUTLINE_COLOR}" stroke-width="2"/>'
            )

        svg_parts.append(
            f'<text x="{origin_x:g}" y="{origin_y - 5:g}" font-size="12" '
            f'text-anchor="middle" fill="{LABEL_COLOR}" font-weight="bold">'
            f'{escape(body.name)}</text>'
        )
        svg_parts.append('</g>')

    svg_parts.append('</svg>')
    return "\n".join(svg_parts)


def export_svg(result: LayoutResult, path: Path,
               config: Optional[LayoutConfig] = None,
               show_outlines: bool = False) -> Path:
    """Render a layout result and write it to a file."""
    path = Path(path)
    path.write_text(render_layout_svg(result, config, show_outlines))
    logger.info("Saved layout SVG: %s (%d buildings)", path, len(result.bodies))
    return path
