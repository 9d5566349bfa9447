"""
Layout Configuration

Tunables for the layout simulation: canvas size, force parameters and
the cooling schedule. Configurations can be loaded from YAML files whose
keys match the LayoutConfig field names.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

# Alpha decay that reaches alpha_min from 1.0 in 300 ticks
DEFAULT_ALPHA_MIN = 0.001
DEFAULT_ALPHA_DECAY = 1 - DEFAULT_ALPHA_MIN ** (1 / 300)


@dataclass
class LayoutConfig:
    """Configuration for layout generation."""
    # Canvas (grid cells) and rendering cell size (canvas units)
    grid_width: int = 100
    grid_height: int = 100
    cell_size: float = 10.0

    # Link (spring) force
    link_distance: float = 10.0  # Target separation between linked centers
    link_iterations: int = 1
    max_link_strength: float = 10.0  # Strength that maps to full stiffness
    auto_complete_links: bool = True
    auto_link_strength: float = 0.5  # Strength of synthesized links

    # Center force
    center_strength: float = 0.1  # Fraction of centroid offset removed per tick

    # Collision force
    collision_iterations: int = 10
    collision_damping: float = 0.5
    collision_exclude_ids: Tuple[str, ...] = ()
    polygon_margin: float = 1.0  # Outer polygon inflation

    # Initial placement
    initial_jitter: float = 1.0  # +/- range around canvas center

    # Cooling schedule
    alpha: float = 1.0
    alpha_min: float = DEFAULT_ALPHA_MIN
    alpha_decay: float = DEFAULT_ALPHA_DECAY
    alpha_target: float = 0.0
    velocity_decay: float = 0.6  # Velocity retained per tick

    # Logging
    log_every: int = field(default=50, repr=False)

    def __post_init__(self):
        if isinstance(self.collision_exclude_ids, str):
            self.collision_exclude_ids = (self.collision_exclude_ids,)
        self.collision_exclude_ids = tuple(self.collision_exclude_ids)

        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(
                f"Canvas must be positive, got {self.grid_width}x{self.grid_height}"
            )
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if not 0 < self.alpha_decay <= 1:
            raise ValueError(f"alpha_decay must be in (0, 1], got {self.alpha_decay}")
        if self.alpha_target >= self.alpha_min:
            raise ValueError(
                f"alpha_target ({self.alpha_target}) must be below alpha_min "
                f"({self.alpha_min}) or the simulation never converges"
            )
        if not 0 <= self.velocity_decay <= 1:
            raise ValueError(f"velocity_decay must be in [0, 1], got {self.velocity_decay}")
        if self.max_link_strength <= 0:
            raise ValueError(f"max_link_strength must be positive, got {self.max_link_strength}")
        if self.auto_link_strength <= 0:
            raise ValueError(f"auto_link_strength must be positive, got {self.auto_link_strength}")
        if self.collision_iterations < 1:
            raise ValueError(
                f"collision_iterations must be at least 1, got {self.collision_iterations}"
            )
        if self.polygon_margin < 0:
            raise ValueError(f"polygon_margin must not be negative, got {self.polygon_margin}")

    @property
    def center(self) -> Tuple[float, float]:
        """Canvas center in grid units."""
        return (self.grid_width / 2, self.grid_height / 2)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["collision_exclude_ids"] = list(self.collision_exclude_ids)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """Create from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown layout config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: Path) -> LayoutConfig:
    """
    Load a LayoutConfig from a YAML file.

    Args:
        path: YAML file with LayoutConfig field names as keys

    Returns:
        LayoutConfig (defaults for an empty file)

    Raises:
        ValueError: If the file is not a mapping or holds invalid values
    """
    path = Path(path)
    data = yaml.safe_load(path.read_text())

    if data is None:
        return LayoutConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Layout config {path} must be a mapping, got {type(data).__name__}")

    config = LayoutConfig.from_dict(data)
    logger.debug("Loaded layout config from %s", path)
    return config
