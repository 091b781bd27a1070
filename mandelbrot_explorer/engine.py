"""
Render requests and the fractal engine.

A render is a pure function of an immutable RenderRequest: the viewport,
the palette parameters and the iteration budget. FractalEngine is a thin
stateful wrapper for interactive callers; it holds the "current" request and
swaps it for a new one on every pan, zoom, reset or parameter change.

Usage:
    engine = FractalEngine(800, 800)
    image = engine.render_default()                  # (800, 800, 3) uint8
    image = engine.render_with_viewport(-0.8, 0.2, -0.6)
    image = engine.reset_viewport()
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

import numpy as np

from .compute import compute_max_iterations, render_pixels
from .errors import InvalidParameter, InvalidViewport
from .palette import (
    DEFAULT_BRIGHTNESS_FACTOR,
    DEFAULT_HUE_FACTOR,
    DEFAULT_INITIAL_HUE,
    generate_palette,
)


REAL_START_DEFAULT = -2.15
IMAGINARY_START_DEFAULT = 1.50
REAL_END_DEFAULT = 0.85


@dataclass(frozen=True)
class Viewport:
    """Rectangular region of the complex plane mapped onto the pixel grid."""

    pixel_width: int
    pixel_height: int
    real_start: float = REAL_START_DEFAULT
    imaginary_start: float = IMAGINARY_START_DEFAULT
    real_end: float = REAL_END_DEFAULT

    def __post_init__(self) -> None:
        if self.pixel_width <= 0 or self.pixel_height <= 0:
            raise InvalidViewport(
                f"pixel dimensions must be positive, got {self.pixel_width}x{self.pixel_height}"
            )
        # Written as a negation so NaN bounds are rejected too
        if not self.real_end > self.real_start:
            raise InvalidViewport(
                f"real_end ({self.real_end}) must be greater than real_start ({self.real_start})"
            )
        if not math.isfinite(self.real_end - self.real_start):
            raise InvalidViewport(
                f"real range {self.real_start}..{self.real_end} is too wide to represent"
            )
        if not math.isfinite(self.imaginary_start):
            raise InvalidViewport(f"imaginary_start must be finite, got {self.imaginary_start}")

    @property
    def step(self) -> float:
        """Plane distance covered by one pixel."""
        return (self.real_end - self.real_start) / self.pixel_width

    @property
    def scale(self) -> float:
        return 1 / (self.real_end - self.real_start)

    @property
    def imaginary_end(self) -> float:
        return self.imaginary_start - self.step * self.pixel_height

    def with_bounds(self, real_start: float, imaginary_start: float, real_end: float) -> Viewport:
        """Same pixel grid, new region."""
        return replace(self, real_start=real_start, imaginary_start=imaginary_start,
                       real_end=real_end)


@dataclass(frozen=True)
class RenderParameters:
    """Palette look, independent of the viewport."""

    hue_factor: int = DEFAULT_HUE_FACTOR
    brightness_factor: int = DEFAULT_BRIGHTNESS_FACTOR
    initial_hue: float = DEFAULT_INITIAL_HUE

    def __post_init__(self) -> None:
        if self.hue_factor == 0:
            raise InvalidParameter("hue factor must be nonzero")
        if self.brightness_factor == 0:
            raise InvalidParameter("brightness factor must be nonzero")
        if not math.isfinite(self.initial_hue):
            raise InvalidParameter(f"initial hue must be finite, got {self.initial_hue}")


@dataclass(frozen=True)
class RenderRequest:
    """Everything needed to produce one frame."""

    viewport: Viewport
    parameters: RenderParameters = field(default_factory=RenderParameters)
    max_iterations: int = 100

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise InvalidParameter(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )

    @classmethod
    def for_viewport(cls, viewport: Viewport,
                     parameters: RenderParameters | None = None) -> RenderRequest:
        """Build a request whose budget is derived from the viewport's zoom scale."""
        if parameters is None:
            parameters = RenderParameters()
        return cls(viewport, parameters, compute_max_iterations(viewport.scale))

    def palette(self) -> np.ndarray:
        """Palette sized to this request's iteration budget."""
        params = self.parameters
        return generate_palette(self.max_iterations, params.hue_factor,
                                params.brightness_factor, params.initial_hue)


def render_frame(viewport: Viewport, palette: np.ndarray, max_iterations: int) -> np.ndarray:
    """
    Render one frame of the Mandelbrot set.

    Returns:
        Fresh (pixel_height, pixel_width, 3) uint8 RGB array
    """
    if len(palette) == 0:
        raise InvalidParameter("palette must not be empty")
    if max_iterations < 1:
        raise InvalidParameter(f"max_iterations must be at least 1, got {max_iterations}")
    return render_pixels(
        float(viewport.real_start), float(viewport.imaginary_start), float(viewport.step),
        int(viewport.pixel_width), int(viewport.pixel_height), int(max_iterations),
        palette,
    )


def render(request: RenderRequest) -> np.ndarray:
    """Render the frame described by `request`."""
    return render_frame(request.viewport, request.palette(), request.max_iterations)


class FractalEngine:
    """
    Holds the current render request for an interactive caller.

    Every mutator builds a complete new request before replacing the old
    one, so a rejected change (InvalidViewport / InvalidParameter) leaves
    the engine exactly as it was. Only one render should be in flight at a
    time; the engine does no locking of its own.
    """

    REAL_START_DEFAULT = REAL_START_DEFAULT
    IMAGINARY_START_DEFAULT = IMAGINARY_START_DEFAULT
    REAL_END_DEFAULT = REAL_END_DEFAULT

    def __init__(self, pixel_width: int, pixel_height: int,
                 parameters: RenderParameters | None = None):
        viewport = Viewport(pixel_width, pixel_height)
        self.request = RenderRequest.for_viewport(viewport, parameters)

    def render_default(self) -> np.ndarray:
        """Render at the current viewport and budget, with the current palette parameters."""
        return render(self.request)

    def render_with_viewport(self, real_start: float, imaginary_start: float,
                             real_end: float) -> np.ndarray:
        """Move to a new region, recompute the budget, and render it."""
        viewport = self.request.viewport.with_bounds(real_start, imaginary_start, real_end)
        self.request = RenderRequest.for_viewport(viewport, self.request.parameters)
        return render(self.request)

    def reset_viewport(self) -> np.ndarray:
        return self.render_with_viewport(
            self.REAL_START_DEFAULT, self.IMAGINARY_START_DEFAULT, self.REAL_END_DEFAULT
        )

    def set_hue_factor(self, value: int) -> None:
        self._update_parameters(hue_factor=value)

    def set_brightness_factor(self, value: int) -> None:
        self._update_parameters(brightness_factor=value)

    def set_initial_hue(self, value: float) -> None:
        self._update_parameters(initial_hue=value)

    def _update_parameters(self, **changes) -> None:
        parameters = replace(self.request.parameters, **changes)
        self.request = replace(self.request, parameters=parameters)

    @property
    def viewport(self) -> Viewport:
        return self.request.viewport

    @property
    def parameters(self) -> RenderParameters:
        return self.request.parameters

    @property
    def max_iterations(self) -> int:
        return self.request.max_iterations

    @property
    def step(self) -> float:
        return self.request.viewport.step

    @property
    def real_start(self) -> float:
        return self.request.viewport.real_start

    @property
    def real_end(self) -> float:
        return self.request.viewport.real_end

    @property
    def imaginary_start(self) -> float:
        return self.request.viewport.imaginary_start

    @property
    def pixel_width(self) -> int:
        return self.request.viewport.pixel_width

    @property
    def pixel_height(self) -> int:
        return self.request.viewport.pixel_height
