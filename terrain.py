"""terrain.py

Rough-ground generator: a field of fixed boxes spread by a skewed 2D gaussian.
https://en.wikipedia.org/wiki/Gaussian_function#Two-dimensional_Gaussian_function

Box size follows the gaussian density at the box's own center, so the bumps are
largest around (TERRAIN_XC, TERRAIN_YC) and shrink towards the edges. Locations
are drawn from +-(spread - 0.1) around the center, which cuts off the skirts of
the bell where boxes would be too small to matter.

On a tilted ground each box is lifted/lowered by tan(tilt) * -x and rotated by
-tilt, so it sits flush with the slope.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

import numpy as np

import constants as c

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Obstacle:
    """One terrain box. Coordinates are the box center in world frame (metres)."""

    x: float
    y: float
    z: float
    width: float
    depth: float
    height: float
    rotation: float  # about y, same axis as the ground tilt
    amplitude: float
    fixed: bool = True

    @property
    def half_extents(self):
        return (self.width / 2, self.depth / 2, self.height / 2)

    @property
    def position(self):
        return (self.x, self.y, self.z)


def obstacle_size(x, y, amplitude, xc=c.TERRAIN_XC, yc=c.TERRAIN_YC, spread=c.TERRAIN_SPREAD):
    """Gaussian bump height at (x, y) for the given amplitude."""
    two_s2 = 2 * spread ** 2
    return amplitude * math.exp(-(((x - xc) ** 2) / two_s2 + ((y - yc) ** 2) / two_s2))


def generate_obstacles(count: int, size_scale: int, tilt: float = 0.0, rng=None) -> List[Obstacle]:
    """Draw `count` obstacles.

    Args:
        count: number of boxes, >= 0 (0 gives flat ground).
        size_scale: amplitudes are uniform in [0.002, size_scale / 1000].
        tilt: ground inclination in radians.
        rng: numpy Generator; a fresh unseeded one if None.
    """
    if count < 0:
        raise ValueError(f"obstacle count must be >= 0, got {count}")
    if size_scale <= 0:
        raise ValueError(f"obstacle size scale must be > 0, got {size_scale}")
    if rng is None:
        rng = np.random.default_rng()

    xc, yc, s = c.TERRAIN_XC, c.TERRAIN_YC, c.TERRAIN_SPREAD
    loc = s - 0.1
    slope = math.tan(tilt)

    obstacles = []
    for _ in range(count):
        a = float(rng.uniform(c.TERRAIN_MIN_AMPLITUDE, size_scale / 1000))
        x = float(rng.uniform(-loc, loc)) + xc
        y = float(rng.uniform(-loc, loc)) + yc

        bsize = obstacle_size(x, y, a, xc, yc, s)
        obstacles.append(Obstacle(
            x=x,
            y=y,
            z=bsize / 2 + slope * -x,
            width=bsize * c.FOOTPRINT_STRETCH,
            depth=bsize * c.FOOTPRINT_STRETCH,
            height=bsize,
            rotation=-tilt,
            amplitude=a,
        ))
    return obstacles


def Build_Terrain(world, obstacles, viewer=None):
    """Add each obstacle to the world as a fixed ground body; returns body ids."""
    ids = []
    for ob in obstacles:
        body_id = world.Add_Static_Body(ob)
        if viewer is not None:
            viewer.Show(body_id)
        ids.append(body_id)
    logger.debug("terrain: %d boxes, largest %.4f m", len(obstacles),
                 max((ob.height for ob in obstacles), default=0.0))
    return ids
