"""
Commands the interactive shell sends to the engine.

User gestures are turned into small immutable command values and applied
through `dispatch`, which translates pixel-space gestures into plane
coordinates using the engine's current viewport. Commands that change the
frame return the new image; commands that don't return None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .engine import FractalEngine, RenderParameters, Viewport


# Pixels moved by one arrow-key press
SHIFT = 80

Point = Tuple[int, int]


@dataclass(frozen=True)
class Zoom:
    """Zoom into the rectangle spanned by two pixel corners."""
    start: Point
    end: Point


@dataclass(frozen=True)
class Pan:
    """Shift the view by pixels; positive dx is right, positive dy is up."""
    dx: int = 0
    dy: int = 0


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Update:
    """Re-render the current view with the current parameters."""
    pass


@dataclass(frozen=True)
class SetParameters:
    """Change the palette look and re-render the current view."""
    hue_factor: int
    brightness_factor: int
    initial_hue: float


@dataclass(frozen=True)
class Screenshot:
    """Save the frame on screen. Handled by the shell, not the engine."""
    pass


def normalize_corners(p1: Point, p2: Point) -> Tuple[Point, Point]:
    """Return (top_left, bottom_right) of the rectangle spanned by two points."""
    top_left = (min(p1[0], p2[0]), min(p1[1], p2[1]))
    bottom_right = (max(p1[0], p2[0]), max(p1[1], p2[1]))
    return top_left, bottom_right


def drag_bounds(viewport: Viewport, start: Point,
                end: Point) -> Optional[Tuple[float, float, float]]:
    """
    Plane bounds (real_start, imaginary_start, real_end) for a drag rectangle.

    Only the rectangle's width and top edge matter: the pixel grid is square,
    so the height follows from the width. Returns None for a zero-width drag.
    """
    if start[0] == end[0]:
        return None
    top_left, bottom_right = normalize_corners(start, end)
    step = viewport.step
    return (
        viewport.real_start + top_left[0] * step,
        viewport.imaginary_start - top_left[1] * step,
        viewport.real_start + bottom_right[0] * step,
    )


def pan_bounds(viewport: Viewport, dx: int, dy: int) -> Tuple[float, float, float]:
    step = viewport.step
    return (
        viewport.real_start + step * dx,
        viewport.imaginary_start + step * dy,
        viewport.real_end + step * dx,
    )


def _zoom(engine, command):
    bounds = drag_bounds(engine.viewport, command.start, command.end)
    if bounds is None:
        return None
    return engine.render_with_viewport(*bounds)


def _pan(engine, command):
    return engine.render_with_viewport(*pan_bounds(engine.viewport, command.dx, command.dy))


def _reset(engine, command):
    return engine.reset_viewport()


def _update(engine, command):
    return engine.render_default()


def _set_parameters(engine, command):
    # Validate all three together so a bad value changes nothing
    RenderParameters(command.hue_factor, command.brightness_factor, command.initial_hue)
    engine.set_hue_factor(command.hue_factor)
    engine.set_brightness_factor(command.brightness_factor)
    engine.set_initial_hue(command.initial_hue)
    return engine.render_default()


_HANDLERS = {
    Zoom: _zoom,
    Pan: _pan,
    Reset: _reset,
    Update: _update,
    SetParameters: _set_parameters,
}


def dispatch(engine: FractalEngine, command) -> Optional[np.ndarray]:
    """
    Apply a command to the engine.

    Returns:
        The newly rendered image, or None if the command left the view as is

    Raises:
        InvalidViewport / InvalidParameter: the change was rejected; the
            engine keeps its previous state
        TypeError: the command is not one the engine handles
    """
    try:
        handler = _HANDLERS[type(command)]
    except KeyError:
        raise TypeError(f"engine cannot handle {type(command).__name__}") from None
    return handler(engine, command)
