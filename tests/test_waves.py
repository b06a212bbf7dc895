import numpy as np
import pytest

from ocean_world.world.waves import WaveField, WaveOscillator
from ocean_world.core.constants import DEFAULT_WAVE_COLORS


def test_layer_parameters_scale_with_index():
    field = WaveField()
    field.rebuild(3, ["a", "b"], baseline_y=100.0)
    assert [o.y for o in field] == [100.0, 115.0, 130.0]
    assert [o.amplitude for o in field] == [10.0, 15.0, 20.0]
    assert [o.frequency for o in field] == pytest.approx([0.01, 0.015, 0.02])
    assert [o.speed for o in field] == pytest.approx([0.02, 0.03, 0.04])


def test_colors_round_robin():
    field = WaveField()
    field.rebuild(5, ["a", "b"], 0.0)
    assert [o.color for o in field] == ["a", "b", "a", "b", "a"]


def test_empty_palette_falls_back():
    field = WaveField()
    field.rebuild(2, [], 0.0)
    assert [o.color for o in field] == list(DEFAULT_WAVE_COLORS[:2])


def test_zero_layers():
    field = WaveField()
    field.rebuild(0, ["a"], 0.0)
    assert len(field) == 0
    field.advance()


def test_rebuild_resets_phase():
    field = WaveField()
    field.rebuild(2, ["a"], 0.0)
    field.advance()
    field.rebuild(2, ["a"], 0.0)
    assert all(o.phase == 0.0 for o in field)
    assert field.rebuild_count == 2


def test_phase_strictly_increases():
    field = WaveField()
    field.rebuild(3, ["a"], 0.0)
    previous = [o.phase for o in field]
    for _ in range(1000):
        field.advance()
        current = [o.phase for o in field]
        assert all(c > p for c, p in zip(current, previous))
        previous = current


def test_wrapped_phase_in_range():
    osc = WaveOscillator(y=0, amplitude=1, frequency=0.01, speed=0.02, color="a", phase=1e6)
    assert 0.0 <= osc.wrapped_phase < 2 * np.pi


def test_height_periodic_in_phase():
    osc = WaveOscillator(y=50, amplitude=10, frequency=0.01, speed=0.02, color="a", phase=0.7)
    shifted = WaveOscillator(y=50, amplitude=10, frequency=0.01, speed=0.02, color="a",
                             phase=0.7 + 2 * np.pi * 300)
    xs = np.arange(0, 500, 5.0)
    np.testing.assert_allclose(WaveField.height_at(osc, xs), WaveField.height_at(shifted, xs), atol=1e-6)


def test_height_bounded_by_amplitude():
    osc = WaveOscillator.for_layer(2, 80.0, "a")
    xs = np.linspace(0, 1000, 400)
    heights = WaveField.height_at(osc, xs)
    assert np.all(np.abs(heights - osc.y) <= osc.amplitude + 1e-9)


def test_profile_samples_width_at_step():
    field = WaveField()
    field.rebuild(1, ["a"], 20.0)
    profile = field.profile(field.oscillators[0], 100.0)
    assert profile.shape == (20, 2)
    assert profile[0, 0] == 0.0
    assert profile[-1, 0] == 95.0
