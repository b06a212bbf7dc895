import numpy as np
import pytest

from ocean_world.creature.agent import SteeringAgent, SteeringMode, spawn_agent

W, H = 400.0, 300.0


def make_agent(x=100.0, y=150.0, size=20.0, speed=3.0, target=(100.0, 150.0), deadline=1e9):
    return SteeringAgent(x=x, y=y, size=size, speed=speed,
                         target_x=target[0], target_y=target[1], next_retarget=deadline)


def test_stays_within_bounds_chasing_outside_target(rng):
    agent = make_agent(speed=7.0)
    for pointer in [(-500.0, -500.0), (1000.0, 1000.0), (1000.0, -50.0)]:
        for _ in range(200):
            agent.update(W, H, 0.0, 3000.0, rng, pointer)
            assert agent.size <= agent.x <= W - agent.size
            assert agent.size <= agent.y <= H - agent.size


def test_converges_on_fixed_pointer_then_stops(rng):
    agent = make_agent(x=100.0, y=150.0)
    pointer = (200.0, 150.0)
    for _ in range(40):
        agent.update(W, H, 0.0, 3000.0, rng, pointer)
    assert agent.distance_to_target() <= 5.0
    x, y = agent.x, agent.y
    agent.update(W, H, 0.0, 3000.0, rng, pointer)
    assert (agent.x, agent.y) == (x, y)


def test_pointer_sets_pursuing_mode(rng):
    agent = make_agent()
    agent.update(W, H, 0.0, 3000.0, rng, (50.0, 60.0))
    assert agent.mode is SteeringMode.PURSUING
    assert (agent.target_x, agent.target_y) == (50.0, 60.0)


def test_no_retarget_before_deadline(rng):
    agent = make_agent(target=(300.0, 200.0), deadline=1000.0)
    assert agent.update(W, H, 999.0, 3000.0, rng) is False
    assert (agent.target_x, agent.target_y) == (300.0, 200.0)


def test_retarget_at_deadline(rng):
    agent = make_agent(target=(300.0, 200.0), deadline=1000.0)
    assert agent.update(W, H, 1000.0, 3000.0, rng) is True
    assert agent.mode is SteeringMode.AUTONOMOUS
    assert 2000.0 <= agent.next_retarget < 5000.0
    margin = 2 * agent.size
    assert margin <= agent.target_x <= W - margin
    assert margin <= agent.target_y <= H - margin


def test_pointer_overrides_due_deadline(rng):
    agent = make_agent(deadline=0.0)
    assert agent.update(W, H, 5000.0, 3000.0, rng, (10.0, 10.0)) is False
    assert agent.is_pursuing


def test_heading_faces_target(rng):
    agent = make_agent(x=200.0, y=150.0)
    agent.update(W, H, 0.0, 3000.0, rng, (100.0, 150.0))
    assert agent.heading == pytest.approx(np.pi)
    assert agent.facing_left
    agent.update(W, H, 0.0, 3000.0, rng, (390.0, 150.0))
    assert not agent.facing_left


def test_tail_wags_within_limits(rng):
    agent = make_agent()
    angles = []
    for _ in range(50):
        agent.update(W, H, 0.0, 3000.0, rng)
        angles.append(agent.tail_angle)
    assert max(abs(a) for a in angles) <= 0.5 + 0.2 + 1e-9
    assert min(angles) < 0 < max(angles)


def test_oversized_agent_collapses_to_low_bound(rng):
    agent = make_agent(size=300.0)
    agent.update(W, H, 0.0, 3000.0, rng, (10.0, 10.0))
    assert agent.x == 300.0
    assert agent.y == 300.0


def test_spawn_in_bounds(rng):
    for _ in range(100):
        agent = spawn_agent(W, H, 40.0, 3.0, 500.0, 3000.0, rng)
        assert 40.0 <= agent.x <= W - 40.0
        assert 40.0 <= agent.y <= H - 40.0
        assert 500.0 <= agent.next_retarget < 3500.0
        assert agent.mode is SteeringMode.AUTONOMOUS
        assert agent.color.startswith("hsl(")


def test_spawn_with_pointer_pursues(rng):
    agent = spawn_agent(W, H, 40.0, 3.0, 0.0, 3000.0, rng, pointer=(120.0, 80.0))
    assert agent.is_pursuing
    assert (agent.target_x, agent.target_y) == (120.0, 80.0)
