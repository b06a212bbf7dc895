import numpy as np
import pytest

from ocean_world.core.config import SceneConfiguration, ConfigPatch, BackgroundGradient
from ocean_world.core.constants import DEFAULT_WAVE_COLORS, DEFAULT_BACKGROUND_COLORS
from ocean_world.core.errors import ConfigurationError


def test_defaults():
    cfg = SceneConfiguration.from_options()
    assert cfg.creature_count == 1
    assert cfg.creature_size == 40.0
    assert cfg.creature_speed == 3.0
    assert cfg.wave_count == 3
    assert cfg.bubble_count == 30
    assert cfg.water_level == 0.2
    assert cfg.retarget_interval == 3000.0
    assert cfg.enable_bubbles and cfg.enable_background and cfg.enable_pursuit
    assert cfg.wave_colors == DEFAULT_WAVE_COLORS
    assert cfg.background_gradient.colors == DEFAULT_BACKGROUND_COLORS
    assert cfg.background_gradient.stops == (0.0, 0.2, 1.0)


def test_default_stops_follow_water_level():
    cfg = SceneConfiguration.from_options({"water_level": 0.35})
    assert cfg.background_gradient.stops == (0.0, 0.35, 1.0)


def test_explicit_stops_win_over_water_level():
    cfg = SceneConfiguration.from_options(
        {"water_level": 0.35, "background_gradient": {"stops": [0, 0.5, 1]}}
    )
    assert cfg.background_gradient.stops == (0.0, 0.5, 1.0)
    assert cfg.background_gradient.colors == DEFAULT_BACKGROUND_COLORS


def test_kwargs_override_options():
    cfg = SceneConfiguration.from_options({"creature_count": 2}, creature_count=4)
    assert cfg.creature_count == 4


def test_unknown_keys_dropped():
    patch = ConfigPatch.from_mapping({"wave_count": 4, "turbo": True})
    assert patch.changed_fields() == ("wave_count",)
    assert ConfigPatch.unrecognized({"wave_count": 4, "turbo": True}) == ("turbo",)


def test_values_coerced():
    patch = ConfigPatch.from_mapping({"wave_count": 4.0, "creature_speed": 2, "wave_colors": ["red"]})
    assert patch.wave_count == 4
    assert isinstance(patch.wave_count, int)
    assert isinstance(patch.creature_speed, float)
    assert patch.wave_colors == ("red",)


@pytest.mark.parametrize("options", [
    {"creature_count": -1},
    {"bubble_count": -3},
    {"creature_speed": -0.5},
    {"water_level": 1.5},
    {"background_gradient": {"stops": [0, 2]}},
])
def test_out_of_domain_rejected(options):
    with pytest.raises(ConfigurationError):
        SceneConfiguration.from_options(options)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        SceneConfiguration(wave_count=-1)


def test_patch_apply_leaves_original_untouched():
    cfg = SceneConfiguration.from_options()
    new = ConfigPatch(wave_count=5).apply(cfg)
    assert new.wave_count == 5
    assert cfg.wave_count == 3
    assert ConfigPatch().apply(cfg) is cfg


def test_gradient_merged_field_by_field():
    cfg = SceneConfiguration.from_options()
    new = ConfigPatch.from_mapping({"background_gradient": {"colors": ["#000", "#fff"]}}).apply(cfg)
    assert new.background_gradient.colors == ("#000", "#fff")
    assert new.background_gradient.stops == cfg.background_gradient.stops


def test_gradient_stop_fallback_spacing():
    gradient = BackgroundGradient(colors=("a", "b", "c", "d", "e"), stops=(0.0,))
    assert gradient.stop_for(0) == 0.0
    assert gradient.stop_for(2) == pytest.approx(0.5)
    assert gradient.stop_for(4) == pytest.approx(1.0)


@pytest.mark.parametrize("options", [
    {"enable_bubbles": "false"},
    {"enable_pursuit": 0},
    {"wave_colors": "red"},
    {"background_gradient": {"colors": "#000000"}},
    {"creature_count": 2.7},
    {"wave_count": "4"},
    {"creature_speed": "fast"},
    {"bubble_count": True},
])
def test_wrongly_typed_values_rejected(options):
    with pytest.raises(ConfigurationError):
        ConfigPatch.from_mapping(options)


def test_numpy_values_accepted():
    patch = ConfigPatch.from_mapping({"wave_count": np.int64(4), "enable_bubbles": np.bool_(False)})
    assert patch.wave_count == 4
    assert patch.enable_bubbles is False


@pytest.mark.parametrize("options", [
    {"wave_colors": ["rgba(0, 50, 100, 0.6)", "not-a-color"]},
    {"background_gradient": {"colors": ["#1a2980", "nope"]}},
])
def test_invalid_colors_rejected(options):
    with pytest.raises(ConfigurationError):
        SceneConfiguration.from_options(options)
