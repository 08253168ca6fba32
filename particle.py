# particle.py
"""
A single drifting particle and its per-frame physics.

Each particle idles with a small mass-scaled random drift, is pushed away
from a moving pointer, loses a little speed every frame, bounces softly off
the viewport edges, and respawns somewhere inside the viewport once it has
escaped far beyond it.
"""
import math
from typing import Tuple

import numpy as np

from constants import PARTICLE_COLOR, PARTICLE_SIZE_SCALE
from context import PhysicsParams, SimulationContext, Viewport
from surface import DrawingSurface

# --- Data Contracts ---
#
# class Particle:
#   - spawn(rng, params, viewport) -> Particle:
#     - Outputs: a particle at a uniform random position inside the viewport,
#       mass uniform in [mass_min, mass_max), zero velocity.
#
#   - update(self, context: SimulationContext, surface: DrawingSurface) -> None:
#     - Side Effects: Mutates position, velocity and possibly mass (on
#       respawn). Draws the particle onto the surface.
#     - Invariants: radius == mass * PARTICLE_SIZE_SCALE at all times;
#       mass_min <= mass <= mass_max.


def draw_mass(rng: np.random.Generator, params: PhysicsParams) -> float:
    """Draws a mass uniformly from the configured range."""
    return float(rng.uniform(params.mass_min, params.mass_max))


class Particle:
    """
    Kinematic state of one particle. Radius is derived from mass and has no
    setter, so the two can never disagree.
    """
    __slots__ = ('x', 'y', 'dx', 'dy', 'mass')

    def __init__(self, x: float, y: float, mass: float, dx: float = 0.0, dy: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.mass = float(mass)
        self.dx = float(dx)
        self.dy = float(dy)

    @property
    def radius(self) -> float:
        return self.mass * PARTICLE_SIZE_SCALE

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.dx, self.dy

    @property
    def speed(self) -> float:
        return math.hypot(self.dx, self.dy)

    @classmethod
    def spawn(cls, rng: np.random.Generator, params: PhysicsParams, viewport: Viewport) -> "Particle":
        particle = cls(0.0, 0.0, params.mass_min)
        particle.reset(rng, params, viewport)
        return particle

    def reset(self, rng: np.random.Generator, params: PhysicsParams, viewport: Viewport) -> None:
        """Respawns in place: new random position and mass, zero velocity."""
        self.x = float(rng.uniform(0, viewport.width))
        self.y = float(rng.uniform(0, viewport.height))
        self.mass = draw_mass(rng, params)
        self.dx = 0.0
        self.dy = 0.0

    def is_far_outside(self, viewport: Viewport, margin: float) -> bool:
        return (
            self.x < -margin
            or self.x > viewport.width + margin
            or self.y < -margin
            or self.y > viewport.height + margin
        )

    def update(self, context: SimulationContext, surface: DrawingSurface) -> None:
        """
        Advances the particle by one frame and draws it.

        Args:
            context (SimulationContext): Pointer, viewport, params and RNG.
            surface (DrawingSurface): Where the particle renders itself.
        """
        params = context.params
        pointer = context.pointer
        viewport = context.viewport
        rng = context.rng

        # 1. Idle drift, weaker for heavier particles
        idle_force = params.idle_drift / self.mass
        self.dx += (rng.random() - 0.5) * idle_force
        self.dy += (rng.random() - 0.5) * idle_force

        # 2. Pointer repulsion replaces the velocity outright
        if pointer.is_moving and pointer.position is not None:
            px, py = pointer.position
            away_x = self.x - px
            away_y = self.y - py
            dist = math.sqrt(away_x * away_x + away_y * away_y)

            if dist < params.mouse_radius:
                angle = math.atan2(away_y, away_x)
                falloff = (params.mouse_radius - dist) / params.mouse_radius
                repel = (falloff * params.max_repulsion) / self.mass
                self.dx = math.cos(angle) * repel
                self.dy = math.sin(angle) * repel

        # 3. Ambient resistance
        self.dx *= params.drift_damping
        self.dy *= params.drift_damping

        # 4. Explicit Euler, one unit step per frame
        self.x += self.dx
        self.y += self.dy

        # 5. Inelastic edge bounce; position is not clamped
        if self.x <= 0 or self.x >= viewport.width:
            self.dx *= params.bounce_factor
        if self.y <= 0 or self.y >= viewport.height:
            self.dy *= params.bounce_factor

        # 6. Escaped particles come back as fresh ones
        if self.is_far_outside(viewport, params.respawn_margin):
            self.reset(rng, params, viewport)

        self.draw(surface)

    def draw(self, surface: DrawingSurface) -> None:
        surface.fill_circle(self.x, self.y, self.radius, PARTICLE_COLOR)

    def __repr__(self):
        return (
            f"Particle(pos=({self.x:.2f}, {self.y:.2f}), "
            f"vel=({self.dx:.2f}, {self.dy:.2f}), mass={self.mass:.2f})"
        )
