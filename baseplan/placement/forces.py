"""
Layout Forces

The three forces applied to simulation bodies each tick, in order:

1. Link - springs pull linked bodies toward a target separation
   (velocity based, scaled by the cooling alpha)
2. Center - translates the whole cluster toward the canvas center
3. Collision - separates overlapping outer polygons using SAT
   (positional, several relaxation passes)

Each force exposes a single apply(bodies, alpha) operation and mutates
the body list it is given in place.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..geometry.sat import polygon_collision
from ..layout.abstraction import Body


class ForceType(Enum):
    """Forces in the simulation."""
    LINK = "link"            # Pulls linked buildings together
    CENTER = "center"        # Keeps the cluster centered on the canvas
    COLLISION = "collision"  # Prevents footprint overlap


@dataclass
class IndexedLink:
    """A link resolved to body indices for the hot loop."""
    source: int
    target: int
    strength: float
    synthesized: bool = False  # Added by auto-completion
    stiffness: float = 0.0
    bias: float = 0.5  # Share of the correction applied to the target


def compute_link_parameters(links: Sequence[IndexedLink], body_count: int,
                            max_strength: float):
    """Fill in stiffness and bias from link strengths and body degrees.

    Stiffness is the normalized strength divided by the smaller endpoint
    degree, so well-connected bodies get a weaker pull per link. Bias
    splits each correction by degree: the better-connected end moves less.
    """
    degree = [0] * body_count
    for link in links:
        degree[link.source] += 1
        degree[link.target] += 1

    for link in links:
        ds = degree[link.source]
        dt = degree[link.target]
        normalized = min(1.0, link.strength / max_strength)
        link.stiffness = normalized / max(1, min(ds, dt))
        link.bias = ds / (ds + dt)


@dataclass
class LinkForce:
    """Spring force between linked bodies."""
    links: List[IndexedLink]
    distance: float = 10.0
    iterations: int = 1
    random: Optional[Callable[[], float]] = None  # Source for coincident-body jiggle
    kind: ForceType = field(default=ForceType.LINK, init=False)

    def _jiggle(self) -> float:
        value = self.random() if self.random else 0.5
        return (value - 0.5) * 1e-6

    def apply(self, bodies: List[Body], alpha: float):
        for _ in range(self.iterations):
            for link in self.links:
                source = bodies[link.source]
                target = bodies[link.target]

                # Compare predicted positions (after this tick's velocity)
                x = target.x + target.vx - source.x - source.vx
                y = target.y + target.vy - source.y - source.vy
                if x == 0:
                    x = self._jiggle()
                if y == 0:
                    y = self._jiggle()

                length = math.sqrt(x * x + y * y)
                length = (length - self.distance) / length * alpha * link.stiffness
                x *= length
                y *= length

                b = link.bias
                target.vx -= x * b
                target.vy -= y * b
                b = 1 - b
                source.vx += x * b
                source.vy += y * b


@dataclass
class CenterForce:
    """Translates all bodies so their centroid moves toward the canvas center.

    Relative positions are untouched; this is a rigid shift applied to
    positions directly, independent of alpha.
    """
    x: float
    y: float
    strength: float = 0.1
    kind: ForceType = field(default=ForceType.CENTER, init=False)

    def apply(self, bodies: List[Body], alpha: float):
        n = len(bodies)
        if n == 0:
            return

        sx = sum(b.x for b in bodies) / n
        sy = sum(b.y for b in bodies) / n
        dx = (sx - self.x) * self.strength
        dy = (sy - self.y) * self.strength

        for body in bodies:
            body.x -= dx
            body.y -= dy


@dataclass
class CollisionForce:
    """Pairwise polygon-vs-polygon separation.

    Every pass tests all unordered pairs; an overlapping pair is pushed
    apart along the minimum translation vector. The vector is scaled by
    damping / 2 and applied twice to each side, so each body moves by
    damping * overlap and the pair separates by 2 * damping * overlap.

    Like the center force this works on positions directly and ignores
    alpha, so overlap keeps being resolved after the system has cooled.
    """
    iterations: int = 10
    damping: float = 0.5
    exclude_ids: Tuple[str, ...] = ()
    kind: ForceType = field(default=ForceType.COLLISION, init=False)

    def active_bodies(self, bodies: Iterable[Body]) -> List[Body]:
        """Bodies taking part in collision (excluded ids removed)."""
        if not self.exclude_ids:
            return list(bodies)
        return [b for b in bodies if b.id not in self.exclude_ids]

    def apply(self, bodies: List[Body], alpha: float = 1.0) -> int:
        """Run the relaxation passes.

        Returns:
            Number of colliding pair tests across all passes
        """
        active = self.active_bodies(bodies)
        count = len(active)
        scale = self.damping / 2
        contacts = 0

        for _ in range(self.iterations):
            moved = False
            for i in range(count):
                a = active[i]
                for j in range(i + 1, count):
                    b = active[j]

                    # Bounding circles apart means polygons apart
                    dx = b.x - a.x
                    dy = b.y - a.y
                    reach = a.radius + b.radius
                    if dx * dx + dy * dy > reach * reach:
                        continue

                    response = polygon_collision(
                        (a.x, a.y), a.polygon, (b.x, b.y), b.polygon,
                        a.normals, b.normals,
                    )
                    if response is None:
                        continue

                    contacts += 1
                    if response.overlap <= 0:
                        continue
                    moved = True
                    ox, oy = response.overlap_v
                    ox *= scale
                    oy *= scale

                    a.x -= ox * 2
                    a.y -= oy * 2
                    b.x += ox * 2
                    b.y += oy * 2

            # A pass without movement leaves every later pass identical
            if not moved:
                break

        return contacts
