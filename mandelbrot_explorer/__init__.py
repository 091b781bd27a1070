"""
Mandelbrot Set Explorer Package

Renders the Mandelbrot set over any rectangle of the complex plane using
escape-time iteration with smooth coloring, Numba for the JIT-compiled
pixel loop, and Pygame for the interactive window.

Quick Start:
    from mandelbrot_explorer import FractalEngine
    engine = FractalEngine(800, 800)
    image = engine.render_default()

Or from command line:
    python -m mandelbrot_explorer

Package Structure:
    - palette.py: HSB palette generation (log-spaced hue/brightness steps)
    - compute.py: JIT-compiled escape-time and smooth-coloring kernels
    - engine.py: Immutable render requests and the FractalEngine
    - commands.py: Zoom/pan/reset commands and their dispatch
    - sidebar.py: Boundary readout and palette controls
    - app.py: Main application and event loop

Controls:
    - Click+Drag: Zoom into the selected rectangle
    - Arrows: Shift the view
    - R: Reset to default view
    - S: Take a screenshot
    - ESC: Quit
"""

from .compute import MAX_ITERATIONS_CAP, compute_max_iterations
from .engine import (
    FractalEngine,
    RenderParameters,
    RenderRequest,
    Viewport,
    render,
    render_frame,
)
from .errors import InvalidParameter, InvalidViewport, MandelbrotError
from .palette import generate_palette, hsb_to_rgb

__version__ = "1.0.0"
__all__ = [
    "FractalEngine",
    "InvalidParameter",
    "InvalidViewport",
    "MAX_ITERATIONS_CAP",
    "MandelbrotError",
    "RenderParameters",
    "RenderRequest",
    "Viewport",
    "compute_max_iterations",
    "generate_palette",
    "hsb_to_rgb",
    "render",
    "render_frame",
]
