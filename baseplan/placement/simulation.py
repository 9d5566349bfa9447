"""
Layout Simulation

Seeded, deterministic force simulation that positions building footprints
on the grid. Each tick:

1. Cools alpha toward alpha_target
2. Link force updates velocities (scaled by alpha)
3. Velocities are damped and integrated into positions
4. Center force shifts the cluster toward the canvas center
5. Collision force separates overlapping outer polygons
6. Positions are floored onto the integer grid

The run is converged once alpha drops below alpha_min. Fast mode ticks to
convergence in one call; animated mode yields the state after every tick
so the caller controls pacing and may stop at any point.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from ..config import LayoutConfig
from ..geometry.raster import Tile, sorted_tiles
from ..geometry.sat import overlap_area
from ..geometry.seeded_random import SeededRandom
from ..layout.abstraction import Body, BuildingTemplate, Link
from .forces import (
    CenterForce,
    CollisionForce,
    IndexedLink,
    LinkForce,
    compute_link_parameters,
)

logger = logging.getLogger(__name__)

DEFAULT_SEED = 12345


@dataclass
class SimulationState:
    """Mutable state owned by one simulation run."""
    bodies: List[Body]
    links: List[IndexedLink]
    alpha: float = 1.0
    alpha_min: float = 0.001
    alpha_decay: float = 0.0228
    alpha_target: float = 0.0
    velocity_decay: float = 0.6
    tick: int = 0

    @property
    def converged(self) -> bool:
        return self.alpha < self.alpha_min


@dataclass
class LayoutResult:
    """Final building positions of a finished (or stopped) run."""
    bodies: List[Body] = field(default_factory=list)
    seed: int = DEFAULT_SEED
    ticks: int = 0
    converged: bool = True
    config: LayoutConfig = field(default_factory=LayoutConfig)

    def get(self, building_id: str) -> Optional[Body]:
        for body in self.bodies:
            if body.id == building_id:
                return body
        return None

    def positions(self) -> Dict[str, Tuple[int, int]]:
        """Grid position (round_x, round_y) per building id."""
        return {b.id: (b.round_x, b.round_y) for b in self.bodies}

    def tiles(self, building_id: str) -> Set[Tile]:
        """World-space inner tiles of one building."""
        body = self.get(building_id)
        if body is None:
            raise KeyError(building_id)
        return body.tiles(self.config.grid_width, self.config.grid_height)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export."""
        buildings = []
        for body in self.bodies:
            tiles = body.tiles(self.config.grid_width, self.config.grid_height)
            buildings.append({
                "id": body.id,
                "name": body.name,
                "color": body.color,
                "x": body.round_x,
                "y": body.round_y,
                "tiles": [list(t) for t in sorted_tiles(tiles)],
            })
        return {
            "seed": self.seed,
            "ticks": self.ticks,
            "converged": self.converged,
            "buildings": buildings,
        }


def complete_links(building_ids: Sequence[str], links: Iterable[Link],
                   weak_strength: float = 0.5) -> List[Link]:
    """Clean up explicit links and add weak links for every unlinked pair.

    Links naming an unknown id are dropped, as are repeats of an unordered
    pair (the first one wins). Every remaining pair of buildings without a
    link gets a synthesized link of weak_strength, so disconnected groups
    still attract each other.

    Returns:
        Explicit links first, then synthesized links in building order
    """
    known = set(building_ids)
    seen: Set[frozenset] = set()
    completed: List[Link] = []
    dropped = 0

    for link in links:
        if link.source not in known or link.target not in known:
            dropped += 1
            continue
        if link.pair in seen:
            dropped += 1
            continue
        seen.add(link.pair)
        completed.append(link)

    explicit = len(completed)
    ids = list(dict.fromkeys(building_ids))
    for i, source in enumerate(ids):
        for target in ids[i + 1:]:
            if frozenset((source, target)) not in seen:
                completed.append(Link(source=source, target=target, strength=weak_strength))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Links: explicit=%d synthesized=%d dropped=%d",
            explicit, len(completed) - explicit, dropped,
        )
    return completed


def total_overlap_area(bodies: Sequence[Body]) -> float:
    """Sum of pairwise outer-polygon intersection areas."""
    total = 0.0
    for i, a in enumerate(bodies):
        for b in bodies[i + 1:]:
            total += overlap_area(a.position, a.polygon, b.position, b.polygon)
    return total


class LayoutSimulation:
    """
    Position buildings with a link/center/collision force simulation.

    The simulation is a pure function of (buildings, links, seed, config):
    two instances built from the same inputs produce identical positions.
    """

    def __init__(
        self,
        buildings: Sequence[BuildingTemplate],
        links: Sequence[Link] = (),
        seed: int = DEFAULT_SEED,
        config: Optional[LayoutConfig] = None,
    ):
        self.config = config or LayoutConfig()
        self.seed = seed
        self.random = SeededRandom(seed)

        self.state = self._initialize_state(buildings, links)

        cx, cy = self.config.center
        self.link_force = LinkForce(
            links=self.state.links,
            distance=self.config.link_distance,
            iterations=self.config.link_iterations,
            random=self.random,
        )
        self.center_force = CenterForce(cx, cy, strength=self.config.center_strength)
        self.collision_force = CollisionForce(
            iterations=self.config.collision_iterations,
            damping=self.config.collision_damping,
            exclude_ids=self.config.collision_exclude_ids,
        )

    def _initialize_state(self, buildings: Sequence[BuildingTemplate],
                          links: Sequence[Link]) -> SimulationState:
        """Seed bodies around the canvas center and resolve links to indices."""
        cfg = self.config
        cx, cy = cfg.center
        jitter = cfg.initial_jitter

        bodies = []
        for template in buildings:
            x = cx + self.random.next_range(-jitter, jitter)
            y = cy + self.random.next_range(-jitter, jitter)
            bodies.append(Body.from_template(template, x, y, margin=cfg.polygon_margin))

        index = {body.id: i for i, body in enumerate(bodies)}
        ids = [body.id for body in bodies]

        unknown = [ref for ref in cfg.collision_exclude_ids if ref not in index]
        if unknown:
            logger.debug("Ignoring unknown collision_exclude_ids: %s", ", ".join(unknown))

        if cfg.auto_complete_links:
            resolved = complete_links(ids, links, cfg.auto_link_strength)
        else:
            resolved = [link for link in links if link.source in index and link.target in index]
        explicit_pairs = {link.pair for link in links}

        indexed = [
            IndexedLink(
                source=index[link.source],
                target=index[link.target],
                strength=link.strength,
                synthesized=link.pair not in explicit_pairs,
            )
            for link in resolved
        ]
        compute_link_parameters(indexed, len(bodies), cfg.max_link_strength)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Layout simulation start: seed=%d bodies=%d links=%d (synthesized=%d)",
                self.seed, len(bodies), len(indexed),
                sum(1 for link in indexed if link.synthesized),
            )

        return SimulationState(
            bodies=bodies,
            links=indexed,
            alpha=cfg.alpha,
            alpha_min=cfg.alpha_min,
            alpha_decay=cfg.alpha_decay,
            alpha_target=cfg.alpha_target,
            velocity_decay=cfg.velocity_decay,
        )

    @property
    def bodies(self) -> List[Body]:
        return self.state.bodies

    @property
    def converged(self) -> bool:
        return self.state.converged

    def tick(self) -> SimulationState:
        """Advance the simulation by one tick."""
        state = self.state
        bodies = state.bodies

        state.alpha += (state.alpha_target - state.alpha) * state.alpha_decay
        alpha = state.alpha

        self.link_force.apply(bodies, alpha)

        # Integrate before center and collision so the snapped positions are post-collision
        decay = state.velocity_decay
        for body in bodies:
            body.vx *= decay
            body.vy *= decay
            body.x += body.vx
            body.y += body.vy

        self.center_force.apply(bodies, alpha)
        contacts = self.collision_force.apply(bodies, alpha)

        for body in bodies:
            body.snap()

        state.tick += 1

        if logger.isEnabledFor(logging.DEBUG) and state.tick % self.config.log_every == 0:
            logger.debug("Tick %d: alpha=%.4f contacts=%d", state.tick, alpha, contacts)

        return state

    def iter_ticks(self) -> Iterator[SimulationState]:
        """Animated mode: yield the state after every tick until converged.

        Stopping iteration early leaves the run at its last yielded state.
        """
        if not self.state.bodies:
            return
        while not self.state.converged:
            yield self.tick()

    def run(self, callback: Optional[Callable[[SimulationState], None]] = None
            ) -> LayoutResult:
        """
        Fast mode: tick until converged.

        Args:
            callback: Optional function called once with the final state

        Returns:
            LayoutResult with floored grid positions
        """
        for _ in self.iter_ticks():
            pass

        if logger.isEnabledFor(logging.DEBUG) and self.state.bodies:
            logger.debug(
                "Converged after %d ticks: alpha=%.5f residual_overlap=%.4f",
                self.state.tick, self.state.alpha, total_overlap_area(self.state.bodies),
            )

        if callback:
            callback(self.state)

        return self.result()

    def result(self) -> LayoutResult:
        """Snapshot the current positions as a LayoutResult."""
        for body in self.state.bodies:
            body.snap()
        return LayoutResult(
            bodies=list(self.state.bodies),
            seed=self.seed,
            ticks=self.state.tick,
            converged=self.state.converged or not self.state.bodies,
            config=self.config,
        )


def generate_layout(
    buildings: Sequence[BuildingTemplate],
    links: Sequence[Link] = (),
    seed: int = DEFAULT_SEED,
    fast: bool = True,
    config: Optional[LayoutConfig] = None,
    callback: Optional[Callable[[SimulationState], None]] = None,
) -> LayoutResult:
    """
    Generate a layout for the given buildings and links.

    Args:
        buildings: Building templates (ids must be unique)
        links: Explicit links; unknown ids are dropped
        seed: Seed for the initial jitter
        fast: Run to convergence in one go (callback fires once at the end)
              instead of tick by tick (callback fires after every tick)
        config: Simulation configuration
        callback: Optional observer of the simulation state

    Returns:
        LayoutResult (empty for an empty building list)
    """
    simulation = LayoutSimulation(buildings, links, seed=seed, config=config)

    if fast:
        return simulation.run(callback=callback)

    for state in simulation.iter_ticks():
        if callback:
            callback(state)
    return simulation.result()
