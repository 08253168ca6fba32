import numpy as np
import pytest

from context import PhysicsParams, SimulationContext, Viewport
from field import ParticleField
from surface import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Remembers every draw call in order."""

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(('clear',))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(('circle', x, y, radius, color))

    def stroke_segments(self, segments, color, width):
        self.calls.append(('stroke', list(segments), color, width))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def params():
    return PhysicsParams(seed=1234)


@pytest.fixture
def context(params, clock):
    return SimulationContext(
        params=params,
        viewport=Viewport(800, 600),
        rng=np.random.default_rng(params.seed),
        clock=clock,
    )


@pytest.fixture
def field(context):
    return ParticleField(context)
