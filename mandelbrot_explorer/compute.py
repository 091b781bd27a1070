"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains the performance-critical parts of the renderer:
- Escape-time iteration of z² + c, followed by two overshoot steps
- Smooth (continuous) iteration count and palette interpolation
- The full-frame pixel loop, parallelised over image rows
- The adaptive max-iteration heuristic tied to zoom depth

The kernels are pure: they read their arguments and return fresh values,
so concurrent calls on different frames never interfere.
"""

import math

import numpy as np
from numba import jit, prange

from .errors import InvalidParameter


ESCAPE_RADIUS = 2.0
MAX_ITERATIONS_CAP = 550
OVERSHOOT_STEPS = 2

# Empirical constant of the iteration heuristic. Changing it shifts colors.
ITERATION_SCALE = 66.5


@jit(nopython=True, cache=True)
def iterate_step(zr, zi, cr, ci):
    """Apply z <- z² + c once, on split real/imaginary parts."""
    return zr * zr - zi * zi + cr, 2.0 * zr * zi + ci


@jit(nopython=True, cache=True)
def escape_time(cr, ci, max_iter):
    """
    Run escape-time iteration for a single point c = cr + i·ci.

    The first step is always taken. Iteration continues while |z| <= 2 and
    the counter is below max_iter, then OVERSHOOT_STEPS more steps are
    applied unconditionally so that |z| is far enough past the escape
    radius for log(log|z|) to be stable. Every step, overshoot included,
    increments the counter.

    Returns:
        (iteration, zr, zi): final counter and the final value of z
    """
    zr = 0.0
    zi = 0.0
    iteration = 0
    while True:
        zr, zi = iterate_step(zr, zi, cr, ci)
        iteration += 1
        if not (math.sqrt(zr * zr + zi * zi) <= ESCAPE_RADIUS and iteration < max_iter):
            break

    for _ in range(OVERSHOOT_STEPS):
        zr, zi = iterate_step(zr, zi, cr, ci)
        iteration += 1

    return iteration, zr, zi


@jit(nopython=True, cache=True)
def smooth_iteration(iteration, zr, zi, max_iter, num_colors):
    """
    Continuous iteration count, rescaled to palette units.

    mu = n + 1 - log(log|z|) / log(2), then mu / max_iter * num_colors.
    """
    modulus = math.sqrt(zr * zr + zi * zi)
    mu = iteration + 1 - math.log(math.log(modulus)) / math.log(ESCAPE_RADIUS)
    return mu / max_iter * num_colors


@jit(nopython=True, cache=True)
def blend_color(mu, palette):
    """
    Linear blend between the two palette entries bracketing mu.

    The index wraps modulo the palette length in both directions, so a
    negative mu or one past the end still lands inside the table. Channels
    are truncated to ints.
    """
    num_colors = palette.shape[0]
    base = math.floor(mu)
    t = mu - base
    idx0 = int(base) % num_colors
    idx1 = (idx0 + 1) % num_colors

    r = int(palette[idx0, 0] * (1.0 - t) + palette[idx1, 0] * t)
    g = int(palette[idx0, 1] * (1.0 - t) + palette[idx1, 1] * t)
    b = int(palette[idx0, 2] * (1.0 - t) + palette[idx1, 2] * t)
    return r, g, b


@jit(nopython=True, parallel=True, cache=True)
def render_pixels(real_start, imaginary_start, step, width, height, max_iter, palette):
    """
    Compute the color of every pixel of a frame.

    Pixel (x, y) maps to c = (real_start + step·x) + i·(imaginary_start - step·y);
    image rows grow downward while the imaginary axis grows upward.

    Args:
        real_start: Real coordinate of the left pixel column
        imaginary_start: Imaginary coordinate of the top pixel row
        step: Plane distance covered by one (square) pixel
        width, height: Output image dimensions in pixels
        max_iter: Escape-time budget
        palette: (N, 3) uint8 color table

    Returns:
        (height, width, 3) uint8 RGB array. Interior points are black.
    """
    out = np.zeros((height, width, 3), dtype=np.uint8)
    num_colors = palette.shape[0]

    for py in prange(height):
        ci = imaginary_start - step * py
        for px in range(width):
            cr = real_start + step * px

            iteration, zr, zi = escape_time(cr, ci, max_iter)
            if iteration >= max_iter:
                continue

            mu = smooth_iteration(iteration, zr, zi, max_iter, num_colors)
            # NaN/inf after overshoot at extreme coordinates: leave it black
            if not math.isfinite(mu):
                continue

            r, g, b = blend_color(mu, palette)
            out[py, px, 0] = r
            out[py, px, 1] = g
            out[py, px, 2] = b

    return out


def compute_max_iterations(scale):
    """
    Pick the escape-time budget for a zoom scale.

    scale is 1 / (real_end - real_start). The heuristic
    sqrt(|2·sqrt(|1 - sqrt(5·scale)|)|) · 66.5 grows as the view narrows;
    the result is truncated and clamped to [1, MAX_ITERATIONS_CAP].

    Raises:
        InvalidParameter: scale is not a positive number
    """
    if not scale > 0:
        raise InvalidParameter(f"scale must be positive, got {scale}")

    raw = math.sqrt(abs(2 * math.sqrt(abs(1 - math.sqrt(5 * scale))))) * ITERATION_SCALE
    if not math.isfinite(raw):
        return MAX_ITERATIONS_CAP
    return max(1, min(int(raw), MAX_ITERATIONS_CAP))


def warmup_jit(palette):
    """
    Warm up JIT compilation with a tiny frame.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real render.
    """
    render_pixels(-2.0, 1.0, 0.3, 10, 10, 10, palette)
