import numpy as np
import pytest

from ocean_world.visualization.colors import parse_color, lighten_color, with_alpha, gradient_column


def test_parse_rgba():
    assert parse_color("rgba(0, 50, 100, 0.6)") == pytest.approx((0.0, 50 / 255, 100 / 255, 0.6))


def test_parse_rgb_defaults_opaque():
    assert parse_color("rgb(255, 0, 0)") == pytest.approx((1.0, 0.0, 0.0, 1.0))


def test_parse_hsl():
    assert parse_color("hsl(0, 100%, 50%)") == pytest.approx((1.0, 0.0, 0.0, 1.0))
    assert parse_color("hsla(120, 100%, 50%, 0.5)") == pytest.approx((0.0, 1.0, 0.0, 0.5))


def test_parse_matplotlib_specs():
    assert parse_color("#1a2980") == pytest.approx((26 / 255, 41 / 255, 128 / 255, 1.0))
    assert parse_color("white") == (1.0, 1.0, 1.0, 1.0)


def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_color("not-a-color")


def test_lighten_color():
    assert lighten_color("#000000", 20) == "#333333"
    assert lighten_color("#ffffff", 20) == "#ffffff"


def test_with_alpha_clipped():
    assert with_alpha("white", 1.7) == (1.0, 1.0, 1.0, 1.0)
    assert with_alpha("black", 0.3)[3] == 0.3


def test_gradient_column_endpoints():
    column = gradient_column(["#000000", "#ffffff"], [0.0, 1.0], samples=11)
    assert column.shape == (11, 1, 4)
    np.testing.assert_allclose(column[0, 0], [0, 0, 0, 1])
    np.testing.assert_allclose(column[-1, 0], [1, 1, 1, 1])
    np.testing.assert_allclose(column[5, 0, :3], [0.5, 0.5, 0.5])


def test_gradient_column_unsorted_stops():
    column = gradient_column(["#ffffff", "#000000"], [1.0, 0.0], samples=3)
    np.testing.assert_allclose(column[0, 0, :3], [0, 0, 0])
