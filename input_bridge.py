# input_bridge.py
"""
Translates raw input into simulation facts.

Pointer moves update the shared PointerState, clicks move one particle to
the pointer, and resizes rebuild the whole field for the new viewport.
"""
import logging

import pygame

from context import SimulationContext
from field import ParticleField


class InputBridge:
    """Applies pointer-move, click and resize input to the simulation."""

    def __init__(self, context: SimulationContext, field: ParticleField):
        self.context = context
        self.field = field

    def on_pointer_move(self, x: float, y: float) -> None:
        self.context.pointer.record_move(x, y, self.context.clock())

    def on_click(self) -> None:
        """Removes a random particle and spawns one near the pointer."""
        self.field.remove_random()

        # An idle pointer has no position, so fall back to the middle.
        position = self.context.pointer.position
        if position is None:
            position = self.context.viewport.center

        spawned = self.field.spawn_near(*position)
        logging.info(
            f"Click: particle respawned at ({spawned.x:.1f}, {spawned.y:.1f}), "
            f"field size {len(self.field)}."
        )

    def on_resize(self, width: float, height: float) -> None:
        viewport = self.context.viewport
        viewport.width = width
        viewport.height = height
        logging.info(f"Viewport resized to {width}x{height}. Reinitializing particles.")
        self.field.initialize(self.context.params.particle_count, viewport)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Dispatches a pygame event.

        Returns:
            bool: True if the event was relevant to the simulation.
        """
        if event.type == pygame.MOUSEMOTION:
            self.on_pointer_move(*event.pos)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.on_click()
            return True

        if event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)
            return True

        return False
