# context.py
"""
Shared simulation state passed explicitly to every component.

The SimulationContext bundles the physics parameters, the viewport, the
pointer state, the random generator and the clock. Nothing in the
simulation reads these from module globals, so tests can build isolated,
seeded contexts.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

# --- Data Contracts ---
#
# PhysicsParams.from_config(params: Dict[str, Any]) -> PhysicsParams:
#   - Inputs: the "simulation_parameters" section of config.json. Missing
#     keys fall back to the defaults declared on the dataclass.
#   - Outputs: a validated, immutable PhysicsParams.
#   - Side Effects: Logs CRITICAL and raises ValueError on invalid values.
#
# PointerState:
#   - Invariants: is_moving is True only until expire_if_idle() sees more
#     than the idle timeout elapsed since last_move_time. position is None
#     whenever the pointer is idle or has never been seen.


@dataclass(frozen=True)
class PhysicsParams:
    """Tunable constants read once from configuration."""
    seed: Optional[int] = None
    particle_count: int = 80
    mass_min: float = 0.5
    mass_max: float = 3.0
    idle_drift: float = 0.02
    mouse_radius: float = 80.0
    max_repulsion: float = 2.5
    drift_damping: float = 0.995
    bounce_factor: float = -0.7
    respawn_margin: float = 200.0
    connection_distance: float = 100.0
    spawn_jitter: float = 15.0
    pointer_idle_timeout_ms: float = 100.0

    @property
    def pointer_idle_timeout(self) -> float:
        """Idle timeout in seconds, matching the context clock."""
        return self.pointer_idle_timeout_ms / 1000.0

    @classmethod
    def from_config(cls, params: Dict[str, Any]) -> "PhysicsParams":
        defaults = cls()
        seed = params.get('seed', defaults.seed)
        physics = cls(
            seed=None if seed is None else int(seed),
            particle_count=int(params.get('particle_count', defaults.particle_count)),
            mass_min=float(params.get('mass_min', defaults.mass_min)),
            mass_max=float(params.get('mass_max', defaults.mass_max)),
            idle_drift=float(params.get('idle_drift', defaults.idle_drift)),
            mouse_radius=float(params.get('mouse_radius', defaults.mouse_radius)),
            max_repulsion=float(params.get('max_repulsion', defaults.max_repulsion)),
            drift_damping=float(params.get('drift_damping', defaults.drift_damping)),
            bounce_factor=float(params.get('bounce_factor', defaults.bounce_factor)),
            respawn_margin=float(params.get('respawn_margin', defaults.respawn_margin)),
            connection_distance=float(params.get('connection_distance', defaults.connection_distance)),
            spawn_jitter=float(params.get('spawn_jitter', defaults.spawn_jitter)),
            pointer_idle_timeout_ms=float(
                params.get('pointer_idle_timeout_ms', defaults.pointer_idle_timeout_ms)
            ),
        )
        physics.validate()
        return physics

    def validate(self) -> None:
        """Raises ValueError if any parameter is outside its usable range."""
        problems = []
        if self.particle_count < 0:
            problems.append(f"particle_count must be >= 0, got {self.particle_count}")
        if self.mass_min <= 0:
            problems.append(f"mass_min must be > 0, got {self.mass_min}")
        if self.mass_min > self.mass_max:
            problems.append(
                f"mass_min ({self.mass_min}) must not exceed mass_max ({self.mass_max})"
            )
        if self.mouse_radius <= 0:
            problems.append(f"mouse_radius must be > 0, got {self.mouse_radius}")
        if self.connection_distance <= 0:
            problems.append(f"connection_distance must be > 0, got {self.connection_distance}")
        if not 0 < self.drift_damping <= 1:
            problems.append(f"drift_damping must be in (0, 1], got {self.drift_damping}")
        if self.respawn_margin < 0:
            problems.append(f"respawn_margin must be >= 0, got {self.respawn_margin}")
        if self.pointer_idle_timeout_ms < 0:
            problems.append(
                f"pointer_idle_timeout_ms must be >= 0, got {self.pointer_idle_timeout_ms}"
            )

        if problems:
            msg = "Configuration error: " + "; ".join(problems)
            logging.critical(msg)
            raise ValueError(msg)


@dataclass
class Viewport:
    """Drawable area in pixels."""
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    def is_drawable(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass
class PointerState:
    """Last known pointer position and whether it is actively moving."""
    position: Optional[Tuple[float, float]] = None
    is_moving: bool = False
    last_move_time: float = 0.0

    def record_move(self, x: float, y: float, now: float) -> None:
        self.position = (float(x), float(y))
        self.is_moving = True
        self.last_move_time = now

    def expire_if_idle(self, now: float, timeout: float) -> bool:
        """
        Clears the moving flag and position once the pointer has been still
        for longer than `timeout` seconds.

        Returns:
            bool: True if the pointer state was cleared by this call.
        """
        if self.is_moving and now - self.last_move_time > timeout:
            self.is_moving = False
            self.position = None
            return True
        return False


@dataclass
class SimulationContext:
    """Everything a particle or the field needs to advance one frame."""
    params: PhysicsParams
    viewport: Viewport
    pointer: PointerState = field(default_factory=PointerState)
    rng: Optional[np.random.Generator] = None
    clock: Callable[[], float] = time.monotonic

    def __post_init__(self):
        # All randomness is controlled by a single master seed.
        if self.rng is None:
            self.rng = np.random.default_rng(self.params.seed)
