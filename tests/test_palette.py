import math

import numpy as np
import pytest

from mandelbrot_explorer.errors import InvalidParameter
from mandelbrot_explorer.palette import generate_palette, hsb_to_rgb


def test_hsb_primary_colors():
    assert hsb_to_rgb(0.0, 1.0, 1.0) == (255, 0, 0)
    assert hsb_to_rgb(0.5, 1.0, 1.0) == (0, 255, 255)


def test_hsb_hue_wraps_by_fractional_part():
    assert hsb_to_rgb(1.5, 1.0, 1.0) == hsb_to_rgb(0.5, 1.0, 1.0)
    assert hsb_to_rgb(-0.5, 1.0, 1.0) == hsb_to_rgb(0.5, 1.0, 1.0)


def test_hsb_clamps_brightness_and_saturation():
    assert hsb_to_rgb(0.5, 1.0, 1.7) == (0, 255, 255)
    assert hsb_to_rgb(0.5, 3.0, 1.0) == (0, 255, 255)
    assert hsb_to_rgb(0.2, 0.0, 0.5) == (128, 128, 128)


def test_default_palette_shape_and_first_color():
    palette = generate_palette(100, 100, 1000, 0.33)

    assert palette.shape == (100, 3)
    assert palette.dtype == np.uint8

    # hue and brightness accumulate as float32
    hue = float(np.float32(0.33) + np.float32(1 / (math.log(2) * 100)))
    brightness = float(np.float32(1.0) + np.float32(1 / (math.log(2) * 1000)))
    assert tuple(palette[0]) == hsb_to_rgb(hue, 1.0, brightness)


def test_default_palette_colors_are_distinct():
    palette = generate_palette(100, 100, 1000, 0.33)
    assert len({tuple(color) for color in palette}) >= 90


def test_palette_is_memoized_and_read_only():
    first = generate_palette(64, 120, 900, 0.4)
    second = generate_palette(64, 120, 900, 0.4)

    assert first is second
    assert not first.flags.writeable


def test_single_color_palette():
    assert generate_palette(1).shape == (1, 3)


def test_negative_factors_still_produce_a_palette():
    palette = generate_palette(20, -100, -1000, 0.9)
    assert palette.shape == (20, 3)


@pytest.mark.parametrize("count", [0, -5])
def test_rejects_non_positive_count(count):
    with pytest.raises(InvalidParameter):
        generate_palette(count)


@pytest.mark.parametrize("hue_factor, brightness_factor", [(0, 1000), (100, 0)])
def test_rejects_zero_factors(hue_factor, brightness_factor):
    with pytest.raises(InvalidParameter):
        generate_palette(50, hue_factor, brightness_factor)


@pytest.mark.parametrize("initial_hue", [math.nan, math.inf, -math.inf])
def test_rejects_non_finite_initial_hue(initial_hue):
    with pytest.raises(InvalidParameter):
        generate_palette(50, initial_hue=initial_hue)


def test_large_initial_hue_wraps_to_fractional_part():
    assert np.array_equal(generate_palette(30, initial_hue=1e12 + 0.25),
                          generate_palette(30, initial_hue=0.25))


def test_positive_brightness_factors_give_the_same_palette():
    assert np.array_equal(generate_palette(80, 100, 1000), generate_palette(80, 100, 10))


def test_negative_brightness_factor_darkens_later_colors():
    bright = generate_palette(80, 100, 1000)
    dark = generate_palette(80, 100, -50)

    assert not np.array_equal(bright, dark)
    assert dark[-1].max() < bright[-1].max()
