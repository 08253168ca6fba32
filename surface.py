# surface.py
"""
The drawing-surface interface the simulation renders through.

The simulation only ever needs three immediate-mode primitives. The pygame
implementation lives in `visualization.py`; tests provide a recording one.
"""
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

Color = Tuple[int, int, int, int]
Segment = Tuple[Tuple[float, float], Tuple[float, float]]


class DrawingSurface(ABC):
    """A 2D immediate-mode drawing context sized to the viewport."""

    @abstractmethod
    def clear(self) -> None:
        """Erases everything drawn during the previous frame."""

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        """Draws a filled circle centred on (x, y)."""

    @abstractmethod
    def stroke_segments(self, segments: Sequence[Segment], color: Color, width: float) -> None:
        """Strokes every segment in one batched draw call."""
