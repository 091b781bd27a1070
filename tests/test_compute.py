import math

import numpy as np
import pytest

from mandelbrot_explorer.compute import (
    MAX_ITERATIONS_CAP,
    blend_color,
    compute_max_iterations,
    escape_time,
    smooth_iteration,
)
from mandelbrot_explorer.errors import InvalidParameter


PALETTE = np.array([[0, 0, 0], [100, 200, 40], [255, 255, 255]], dtype=np.uint8)


def test_budget_for_default_view():
    assert compute_max_iterations(1 / 3) == 69


def test_budget_for_unit_width():
    assert compute_max_iterations(1.0) == 99


def test_budget_never_below_one():
    # 5 * 0.2 == 1 makes the heuristic exactly zero
    assert compute_max_iterations(0.2) == 1


@pytest.mark.parametrize("scale", [1e12, 1e300, 1e308, float("inf")])
def test_budget_clamps_to_cap(scale):
    assert compute_max_iterations(scale) == MAX_ITERATIONS_CAP


def test_budget_grows_with_zoom():
    scales = [0.25, 0.5, 1, 2, 10, 100, 1e3, 1e5, 1e10]
    budgets = [compute_max_iterations(s) for s in scales]

    assert budgets == sorted(budgets)
    assert all(1 <= b <= MAX_ITERATIONS_CAP for b in budgets)


@pytest.mark.parametrize("scale", [0, -1.0, float("nan")])
def test_budget_rejects_bad_scale(scale):
    with pytest.raises(InvalidParameter):
        compute_max_iterations(scale)


def test_origin_never_escapes():
    iteration, zr, zi = escape_time(0.0, 0.0, 50)
    # budget plus the two overshoot steps
    assert iteration == 52
    assert (zr, zi) == (0.0, 0.0)


def test_minus_two_stays_on_the_boundary():
    iteration, _, _ = escape_time(-2.0, 0.0, 50)
    assert iteration == 52


def test_three_escapes_on_first_step():
    iteration, zr, zi = escape_time(3.0, 0.0, 50)
    # escaped at 1, then 3 -> 12 -> 147 during overshoot
    assert iteration == 3
    assert zr == 147.0
    assert zi == 0.0


def test_smooth_iteration_formula():
    mu = smooth_iteration(3, 147.0, 0.0, 50, 50)
    assert mu == pytest.approx(4 - math.log(math.log(147.0)) / math.log(2.0))


def test_smooth_iteration_rescales_to_palette_length():
    full = smooth_iteration(3, 147.0, 0.0, 50, 50)
    half = smooth_iteration(3, 147.0, 0.0, 50, 25)
    assert half == pytest.approx(full / 2)


def test_blend_midpoint():
    assert blend_color(0.5, PALETTE) == (50, 100, 20)


@pytest.mark.parametrize("mu", [3.0, 6.0, 0.0])
def test_blend_at_palette_length_multiples_is_first_color(mu):
    assert blend_color(mu, PALETTE) == (0, 0, 0)


def test_blend_wraps_last_color_into_first():
    assert blend_color(2.5, PALETTE) == (127, 127, 127)


def test_blend_wraps_negative_mu():
    assert blend_color(-0.5, PALETTE) == (127, 127, 127)
    assert blend_color(-2.75, PALETTE) == (25, 50, 10)
