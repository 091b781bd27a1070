import numpy as np
import pytest

from mandelbrot_explorer.commands import (
    SHIFT,
    Pan,
    Reset,
    Screenshot,
    SetParameters,
    Update,
    Zoom,
    dispatch,
    drag_bounds,
    normalize_corners,
    pan_bounds,
)
from mandelbrot_explorer.engine import FractalEngine, RenderParameters, Viewport
from mandelbrot_explorer.errors import InvalidParameter


VIEWPORT = Viewport(100, 100, -2.0, 1.0, 2.0)


@pytest.fixture
def engine():
    return FractalEngine(40, 40)


def test_normalize_corners_any_drag_direction():
    assert normalize_corners((60, 5), (10, 20)) == ((10, 5), (60, 20))
    assert normalize_corners((10, 20), (60, 5)) == ((10, 5), (60, 20))


def test_drag_bounds_maps_rectangle_to_plane():
    real_start, imaginary_start, real_end = drag_bounds(VIEWPORT, (60, 20), (10, 5))

    assert real_start == pytest.approx(-1.6)
    assert imaginary_start == pytest.approx(0.8)
    assert real_end == pytest.approx(0.4)


def test_zero_width_drag_is_ignored():
    assert drag_bounds(VIEWPORT, (30, 10), (30, 80)) is None


def test_pan_bounds_moves_by_pixels():
    real_start, imaginary_start, real_end = pan_bounds(VIEWPORT, SHIFT, 0)
    assert real_start == pytest.approx(-2.0 + 0.04 * SHIFT)
    assert imaginary_start == 1.0
    assert real_end == pytest.approx(2.0 + 0.04 * SHIFT)

    _, imaginary_start, _ = pan_bounds(VIEWPORT, 0, -SHIFT)
    assert imaginary_start == pytest.approx(1.0 - 0.04 * SHIFT)


def test_zoom_command_renders_selection(engine):
    step = engine.step
    image = dispatch(engine, Zoom((30, 20), (10, 4)))

    assert image.shape == (40, 40, 3)
    assert engine.real_start == pytest.approx(-2.15 + 10 * step)
    assert engine.imaginary_start == pytest.approx(1.5 - 4 * step)
    assert engine.real_end == pytest.approx(-2.15 + 30 * step)


def test_zero_width_zoom_leaves_engine_alone(engine):
    request = engine.request
    assert dispatch(engine, Zoom((12, 3), (12, 30))) is None
    assert engine.request is request


def test_pan_command(engine):
    step = engine.step
    dispatch(engine, Pan(dx=-SHIFT))
    assert engine.real_start == pytest.approx(-2.15 - step * SHIFT)
    assert engine.step == pytest.approx(step)


def test_reset_after_gestures(engine):
    initial = engine.render_default()
    dispatch(engine, Zoom((5, 5), (25, 25)))
    dispatch(engine, Pan(dy=SHIFT))

    assert np.array_equal(dispatch(engine, Reset()), initial)


def test_update_rerenders_current_view(engine):
    assert np.array_equal(dispatch(engine, Update()), engine.render_default())


def test_set_parameters_keeps_budget(engine):
    budget = engine.max_iterations
    dispatch(engine, SetParameters(50, 500, 0.5))

    assert engine.parameters == RenderParameters(50, 500, 0.5)
    assert engine.max_iterations == budget


def test_invalid_parameters_change_nothing(engine):
    with pytest.raises(InvalidParameter):
        dispatch(engine, SetParameters(200, 0, 0.5))
    assert engine.parameters == RenderParameters()


def test_screenshot_is_not_an_engine_command(engine):
    with pytest.raises(TypeError):
        dispatch(engine, Screenshot())
