# visualization.py
"""
Handles the window, drawing and frame pacing using Pygame.
"""
import logging
import math
from typing import Callable, Optional, Sequence, Tuple

import pygame

from constants import BACKGROUND_COLOR, FPS, FULLSCREEN, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from input_bridge import InputBridge
from simulation import FrameScheduler
from surface import Color, DrawingSurface, Segment

# Smallest radius pygame will actually rasterise.
MIN_DRAW_RADIUS = 1.0

# --- Data Contracts ---
#
# class PygameSurface(DrawingSurface):
#   - __init__(self, screen: pygame.Surface)
#     - Side Effects: Allocates an SRCALPHA line layer the size of the screen.
#   - fill_circle(self, x, y, radius, color) -> None:
#     - Side Effects: Alpha-blends a dot of at least MIN_DRAW_RADIUS onto
#       the screen.
#   - compose(self) -> None:
#     - Side Effects: Blits the line layer over the screen. Does not flip
#       the display.
#
# class Visualizer:
#   - process_events(self, bridge: InputBridge) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Resizes the drawing surface on window resize and
#       forwards input to the bridge.
#
# class DisplayFrameScheduler(FrameScheduler):
#   - run(self) -> int:
#     - Outputs: The number of frames rendered before the user quit.


class PygameSurface(DrawingSurface):
    """
    Immediate-mode drawing over the screen.

    Particles are alpha-blended straight onto the screen, one dot at a time,
    so overlapping translucent particles brighten. Lines go onto their own
    SRCALPHA layer that compose() blits on top.
    """
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._allocate_layers()

    def _allocate_layers(self) -> None:
        self.line_layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)

    @property
    def size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def resize(self, screen: pygame.Surface) -> None:
        """Adopts a new screen surface and reallocates the line layer to match."""
        self.screen = screen
        self._allocate_layers()
        logging.debug(f"Drawing layers reallocated at {self.size[0]}x{self.size[1]}.")

    def clear(self) -> None:
        self.screen.fill(BACKGROUND_COLOR)
        self.line_layer.fill((0, 0, 0, 0))

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        # pygame draws nothing below a 1px radius; the particle's own radius is untouched.
        draw_radius = max(radius, MIN_DRAW_RADIUS)
        left = math.floor(x - draw_radius) - 1
        top = math.floor(y - draw_radius) - 1
        size = int(math.ceil(draw_radius * 2)) + 3

        dot = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(dot, color, (x - left, y - top), draw_radius)
        self.screen.blit(dot, (left, top))

    def stroke_segments(self, segments: Sequence[Segment], color: Color, width: float) -> None:
        # Pygame only strokes whole-pixel widths.
        line_width = max(1, int(round(width)))
        for start, end in segments:
            pygame.draw.line(self.line_layer, color, start, end, line_width)

    def compose(self) -> None:
        self.screen.blit(self.line_layer, (0, 0))


class Visualizer:
    """
    Owns the Pygame window and its drawing surface.
    """
    def __init__(self, fullscreen: bool = FULLSCREEN, size: Tuple[int, int] = (WINDOW_WIDTH, WINDOW_HEIGHT)):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()

        if fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = size
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.surface = PygameSurface(self.screen)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def process_events(self, bridge: InputBridge) -> bool:
        """
        Handles pending Pygame events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                # The surface must match the new size before the field is rebuilt.
                self.screen = pygame.display.get_surface()
                self.surface.resize(self.screen)

            bridge.handle_event(event)

        return True

    def present(self) -> None:
        self.surface.compose()
        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()


class DisplayFrameScheduler(FrameScheduler):
    """
    Runs one scheduled callback per display refresh, capped at FPS.
    """
    def __init__(self, visualizer: Visualizer, bridge: InputBridge):
        self.visualizer = visualizer
        self.bridge = bridge
        self.pending: Optional[Callable[[], None]] = None

    def schedule_next(self, callback: Callable[[], None]) -> None:
        self.pending = callback

    def run(self) -> int:
        """Pumps events and frames until the user quits or nothing is scheduled."""
        frames = 0
        while self.pending is not None:
            # Input is handled between ticks, never during one.
            if not self.visualizer.process_events(self.bridge):
                break

            callback, self.pending = self.pending, None
            callback()
            self.visualizer.present()
            self.visualizer.clock.tick(FPS)
            frames += 1
        return frames
