# field.py
"""
Owns the collection of particles.

This module defines the ParticleField class, which (re)initializes the
particle collection, handles click-driven spawning and removal, and runs the
pairwise connection pass that draws the constellation lines.
"""
import logging
from typing import Iterator, List, Optional

import numpy as np
from numba import jit

from constants import CONNECTION_COLOR, CONNECTION_LINE_WIDTH
from context import SimulationContext, Viewport
from particle import Particle, draw_mass
from surface import DrawingSurface

# --- Data Contracts ---
#
# class ParticleField:
#   - initialize(self, count: int, viewport: Viewport) -> None:
#     - Side Effects: Replaces the collection with `count` fresh particles.
#     - Invariants: len(self) == count; every particle is inside the viewport.
#
#   - connect(self, surface, proximity_threshold=None) -> np.ndarray:
#     - Outputs: (M, 2) int array of index pairs (a < b) closer than the
#       threshold, in ascending order.
#     - Side Effects: Exactly one stroke_segments call on the surface.
#
#   - spawn_near(self, x, y) -> Particle / remove_random(self) -> Optional[Particle]
#     - remove_random is a no-op returning None on an empty field.


@jit(nopython=True)
def _find_connections_numba(positions, threshold):
    """
    Numba-jitted O(n^2) scan over every unordered pair.

    Returns the index pairs whose Euclidean distance is strictly below
    `threshold`.
    """
    n = positions.shape[0]
    pairs = np.empty((n * (n - 1) // 2, 2), dtype=np.int64)
    count = 0
    for a in range(n):
        for b in range(a + 1, n):
            dx = positions[a, 0] - positions[b, 0]
            dy = positions[a, 1] - positions[b, 1]
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < threshold:
                pairs[count, 0] = a
                pairs[count, 1] = b
                count += 1
    return pairs[:count]


class ParticleField:
    """
    A container for all particles in the simulation.
    """
    def __init__(self, context: SimulationContext):
        self.context = context
        self.particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def initialize(self, count: int, viewport: Viewport) -> None:
        """
        Replaces the whole collection with freshly spawned particles.

        Args:
            count (int): Number of particles to create.
            viewport (Viewport): Bounds for the random initial positions.
        """
        rng = self.context.rng
        params = self.context.params
        self.particles = [Particle.spawn(rng, params, viewport) for _ in range(count)]

        logging.info(
            f"ParticleField initialized with {count} particles "
            f"for a {viewport.width:.0f}x{viewport.height:.0f} viewport."
        )

    def spawn_near(self, x: float, y: float) -> Particle:
        """Adds one particle jittered around (x, y), at rest, with a fresh mass."""
        rng = self.context.rng
        params = self.context.params
        jitter = params.spawn_jitter
        particle = Particle(
            x + rng.uniform(-jitter, jitter),
            y + rng.uniform(-jitter, jitter),
            draw_mass(rng, params),
        )
        self.particles.append(particle)
        logging.debug(f"Spawned {particle!r}")
        return particle

    def remove_random(self) -> Optional[Particle]:
        """Removes a uniformly random particle. Does nothing if the field is empty."""
        if not self.particles:
            return None

        index = int(self.context.rng.integers(len(self.particles)))
        # Swap with the last element so the removal is O(1).
        last = len(self.particles) - 1
        self.particles[index], self.particles[last] = self.particles[last], self.particles[index]
        removed = self.particles.pop()
        logging.debug(f"Removed {removed!r}")
        return removed

    def positions(self) -> np.ndarray:
        """Snapshot of all positions as an (N, 2) float64 array."""
        return np.array(
            [(p.x, p.y) for p in self.particles], dtype=np.float64
        ).reshape(-1, 2)

    def average_speed(self) -> float:
        if not self.particles:
            return 0.0
        velocities = np.array([(p.dx, p.dy) for p in self.particles], dtype=np.float64)
        return float(np.mean(np.linalg.norm(velocities, axis=1)))

    def connect(self, surface: DrawingSurface, proximity_threshold: Optional[float] = None) -> np.ndarray:
        """
        Draws a line between every pair of particles closer than the threshold.

        All qualifying segments go out in a single batched stroke.

        Returns:
            np.ndarray: The (M, 2) index pairs that were connected.
        """
        if proximity_threshold is None:
            proximity_threshold = self.context.params.connection_distance

        positions = self.positions()
        pairs = _find_connections_numba(positions, float(proximity_threshold))

        segments = [
            (self.particles[a].position, self.particles[b].position)
            for a, b in pairs
        ]
        surface.stroke_segments(segments, CONNECTION_COLOR, CONNECTION_LINE_WIDTH)
        return pairs
