import math

import pytest

from mandelbrot_explorer.kernel import BLACK, Color, color_at, escape_color, pixel_to_world


@pytest.mark.parametrize("max_depth", [1, 2, 40, 500])
def test_origin_is_inside_the_set(max_depth):
    assert color_at((0.0, 0.0), max_depth) == BLACK


@pytest.mark.parametrize("point", [(-1.0, 0.0), (-0.1, 0.1), (0.25, 0.0)])
def test_points_inside_the_set_are_black(point):
    assert color_at(point, 200) == BLACK


def test_point_escaping_on_first_iteration_matches_reference_color():
    # |z1|^2 = 8, smoothed count = 2 - log2(log 8)
    assert color_at((2.0, 2.0), 40) == Color(6, 2, 25)


def test_escape_on_last_permitted_iteration_counts_as_inside():
    assert color_at((2.0, 2.0), 1) == BLACK


def test_far_point_saturates_negative_channels_to_zero():
    # smoothed count is about -2.79 here; red would wrap to 251 without saturation
    assert color_at((1e6, 0.0), 40) == Color(0, 0, 13)


def test_channels_stay_in_range():
    for i in range(-20, 21):
        for j in range(-20, 21):
            color = color_at((i / 8.0, j / 8.0), 64)
            assert all(0 <= channel < 255 for channel in color)


def test_color_at_returns_named_color():
    color = color_at((-2.5, 0.0), 40)
    assert isinstance(color, Color)
    assert color != BLACK
    assert color == Color(7, 3, 26)


def test_escape_color_is_deterministic():
    assert escape_color(-0.7436, 0.1318, 300) == escape_color(-0.7436, 0.1318, 300)


def test_pixel_to_world_corners_of_square_screen():
    assert pixel_to_world(0, 0, 0.0, 0.0, 1.0, 11, 11) == (-1.0, -1.0)
    wx, wy = pixel_to_world(10, 10, 0.0, 0.0, 1.0, 11, 11)
    assert math.isclose(wx, 1.0)
    assert math.isclose(wy, 1.0)
