# simulation.py
"""
Drives the simulation one frame at a time.

This module defines the SimulationLoop class, which sequences a single tick
(clear, update every particle, connect, schedule the next tick, expire an
idle pointer) and the FrameScheduler abstraction that decides when the next
tick runs. The loop itself holds no physics logic.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from context import SimulationContext
from field import ParticleField
from surface import DrawingSurface

# --- Data Contracts ---
#
# class FrameScheduler:
#   - schedule_next(self, callback: Callable[[], None]) -> None:
#     - Side Effects: Arranges for `callback` to run once, on the next frame.
#
# class SimulationLoop:
#   - __init__(self, context, field, surface, scheduler, log_throttle_steps=600)
#   - start(self) -> None:
#     - Side Effects: Validates startup preconditions, initializes the field
#       if it is empty, and schedules the first tick.
#     - Raises: RuntimeError if no drawing surface was supplied;
#       ValueError if the viewport has zero width or height.
#   - tick(self) -> None:
#     - Side Effects: Renders one frame and reschedules itself.
#     - Invariants: All particle updates finish before the connection pass.


class FrameScheduler(ABC):
    """Decides when the next frame callback runs."""

    @abstractmethod
    def schedule_next(self, callback: Callable[[], None]) -> None:
        """Runs `callback` once on the next frame."""


class SteppedFrameScheduler(FrameScheduler):
    """
    A deterministic scheduler that only advances when asked to.

    Used for tests and headless runs: each call to step() runs the callback
    that was pending at that moment.
    """
    def __init__(self):
        self.pending: Optional[Callable[[], None]] = None

    def schedule_next(self, callback: Callable[[], None]) -> None:
        self.pending = callback

    def step(self, frames: int = 1) -> int:
        """
        Runs up to `frames` pending callbacks.

        Returns:
            int: The number of callbacks actually run.
        """
        ran = 0
        for _ in range(frames):
            if self.pending is None:
                break
            callback, self.pending = self.pending, None
            callback()
            ran += 1
        return ran


class SimulationLoop:
    """
    Sequences one frame per scheduled tick.
    """
    def __init__(
        self,
        context: SimulationContext,
        field: ParticleField,
        surface: Optional[DrawingSurface],
        scheduler: FrameScheduler,
        log_throttle_steps: int = 600,
    ):
        self.context = context
        self.field = field
        self.surface = surface
        self.scheduler = scheduler
        self.log_throttle_steps = max(1, int(log_throttle_steps))
        self.frame_count = 0

    def start(self) -> None:
        """Checks startup preconditions and schedules the first tick."""
        if self.surface is None:
            msg = "Cannot start simulation: no drawing surface was provided."
            logging.critical(msg)
            raise RuntimeError(msg)

        viewport = self.context.viewport
        if not viewport.is_drawable():
            msg = (
                f"Cannot start simulation: viewport is {viewport.width}x{viewport.height}, "
                f"both dimensions must be positive."
            )
            logging.critical(msg)
            raise ValueError(msg)

        if not self.field.particles:
            self.field.initialize(self.context.params.particle_count, viewport)

        logging.info("Simulation loop started.")
        self.scheduler.schedule_next(self.tick)

    def tick(self) -> None:
        """
        Executes one frame of the simulation.
        """
        context = self.context

        # 1. Clear the previous frame
        self.surface.clear()

        # 2. Move and draw every particle
        for particle in self.field.particles:
            particle.update(context, self.surface)

        # 3. Constellation lines against this frame's final positions
        self.field.connect(self.surface)

        # 4. Next frame
        self.scheduler.schedule_next(self.tick)

        # 5. The loop, not the input source, expires a still pointer
        now = context.clock()
        if context.pointer.expire_if_idle(now, context.params.pointer_idle_timeout):
            logging.debug("Pointer idle; repulsion disabled.")

        self.frame_count += 1

        # Hot loops must throttle logs
        if self.frame_count % self.log_throttle_steps == 0:
            logging.info(f"Simulation frame {self.frame_count}")
            logging.debug(
                f"Frame {self.frame_count} | Particles: {len(self.field)} | "
                f"Average Speed: {self.field.average_speed():.4f}"
            )
