import dataclasses
import math

import numpy as np
import pytest

from constants import PARTICLE_COLOR, PARTICLE_SIZE_SCALE
from context import PhysicsParams, SimulationContext, Viewport
from particle import Particle


@pytest.fixture
def still_context(context):
    """A context with idle drift switched off so motion is exact."""
    context.params = dataclasses.replace(context.params, idle_drift=0.0)
    return context


def test_radius_follows_mass():
    particle = Particle(10, 10, mass=2.0)
    assert particle.radius == 2.0 * PARTICLE_SIZE_SCALE

    particle.mass = 0.5
    assert particle.radius == 0.5 * PARTICLE_SIZE_SCALE


def test_radius_cannot_be_assigned():
    particle = Particle(10, 10, mass=2.0)
    with pytest.raises(AttributeError):
        particle.radius = 5


def test_spawn_is_inside_viewport_and_at_rest(context):
    for _ in range(200):
        particle = Particle.spawn(context.rng, context.params, context.viewport)
        assert 0 <= particle.x <= 800
        assert 0 <= particle.y <= 600
        assert context.params.mass_min <= particle.mass <= context.params.mass_max
        assert particle.velocity == (0.0, 0.0)
        assert particle.radius == particle.mass * 1.5


def test_idle_drift_is_small_and_mass_scaled(context, surface):
    particle = Particle(400, 300, mass=2.0)
    particle.update(context, surface)

    limit = 0.5 * (0.02 / 2.0) * 0.995
    assert abs(particle.dx) <= limit
    assert abs(particle.dy) <= limit


def test_repulsion_pushes_away_from_moving_pointer(context, surface):
    context.pointer.record_move(400, 300, now=0.0)
    particle = Particle(420, 300, mass=1.0)

    particle.update(context, surface)

    expected = (60 / 80) * 2.5 / 1.0 * 0.995
    assert particle.dx == pytest.approx(expected)
    assert particle.dy == pytest.approx(0.0, abs=1e-12)
    assert particle.dx <= context.params.max_repulsion / particle.mass
    assert particle.x == pytest.approx(420 + expected)


def test_repulsion_replaces_existing_velocity(context, surface):
    context.pointer.record_move(400, 300, now=0.0)
    particle = Particle(400, 330, mass=2.0, dx=5.0, dy=-5.0)

    particle.update(context, surface)

    # Straight down from the pointer, regardless of the old velocity.
    assert particle.dx == pytest.approx(0.0, abs=1e-12)
    assert particle.dy == pytest.approx((50 / 80) * 2.5 / 2.0 * 0.995)


def test_pointer_outside_radius_has_no_effect(still_context, surface):
    still_context.pointer.record_move(0, 0, now=0.0)
    particle = Particle(400, 300, mass=1.0)

    particle.update(still_context, surface)

    assert particle.velocity == (0.0, 0.0)


def test_idle_pointer_does_not_repel(still_context, surface):
    still_context.pointer.position = (400, 300)
    still_context.pointer.is_moving = False
    particle = Particle(410, 300, mass=1.0)

    particle.update(still_context, surface)

    assert particle.velocity == (0.0, 0.0)


def test_damping_applies_every_frame(still_context, surface):
    particle = Particle(400, 300, mass=1.0, dx=1.0, dy=-2.0)

    particle.update(still_context, surface)

    assert particle.dx == pytest.approx(0.995)
    assert particle.dy == pytest.approx(-1.99)
    assert particle.position == pytest.approx((400.995, 298.01))


def test_bounce_inverts_and_attenuates_without_clamping(still_context, surface):
    particle = Particle(799.9, 300, mass=1.0, dx=1.0)

    particle.update(still_context, surface)

    assert particle.x > 800
    assert particle.dx == pytest.approx(-0.7 * 0.995)


def test_bounce_on_top_edge(still_context, surface):
    particle = Particle(400, 0.5, mass=1.0, dy=-1.0)

    particle.update(still_context, surface)

    assert particle.y < 0
    assert particle.dy == pytest.approx(0.7 * 0.995)


@pytest.mark.parametrize('x, y', [
    (1100, 300),   # beyond the right edge
    (-250, 300),   # beyond the left edge
    (400, -250),   # above the top edge
    (400, 850),    # below the bottom edge
    (1100, -250),  # past a corner
])
def test_far_outside_particle_respawns_inside(context, surface, x, y):
    particle = Particle(x, y, mass=2.0, dx=3.0, dy=3.0)

    particle.update(context, surface)

    assert 0 <= particle.x <= 800
    assert 0 <= particle.y <= 600
    assert particle.velocity == (0.0, 0.0)
    assert context.params.mass_min <= particle.mass <= context.params.mass_max
    assert particle.radius == particle.mass * 1.5


def test_exactly_at_margin_is_not_respawned(still_context, surface):
    particle = Particle(1000, 300, mass=1.0)

    particle.update(still_context, surface)

    assert particle.x == 1000


def test_update_draws_particle_at_new_position(still_context, surface):
    particle = Particle(100, 100, mass=2.0, dx=1.0)

    particle.update(still_context, surface)

    assert surface.calls == [('circle', particle.x, particle.y, 3.0, PARTICLE_COLOR)]


def test_pointer_on_top_of_particle_pushes_along_x(context, surface):
    context.pointer.record_move(300, 300, now=0.0)
    particle = Particle(300, 300, mass=1.0)

    particle.update(context, surface)

    assert particle.dx == pytest.approx(2.5 * 0.995)
    assert math.isfinite(particle.dy)


def test_reset_keeps_invariants_across_seeds():
    params = PhysicsParams(mass_min=0.5, mass_max=3.0)
    viewport = Viewport(320, 240)
    particle = Particle(0, 0, mass=1.0)
    for seed in range(25):
        particle.reset(np.random.default_rng(seed), params, viewport)
        assert 0.5 <= particle.mass <= 3.0
        assert particle.radius == particle.mass * 1.5
        assert 0 <= particle.x <= 320 and 0 <= particle.y <= 240


def test_context_without_explicit_rng_is_usable(surface):
    context = SimulationContext(params=PhysicsParams(seed=5), viewport=Viewport(200, 200))
    particle = Particle.spawn(context.rng, context.params, context.viewport)
    particle.update(context, surface)
    assert len(surface.calls) == 1
