"""
Palette generation for smooth Mandelbrot coloring.

A palette is an (N, 3) numpy array of uint8 RGB values, one entry per
iteration of the current budget. Hue and brightness advance by steps that
shrink logarithmically with the index, so low escape counts (the pixels near
the set boundary) sweep through colors quickly while high counts drift slowly.

Palettes are pure functions of their arguments and are memoized, so
regenerating one for an unchanged budget costs a dictionary lookup.
"""

import math
from functools import lru_cache

import numpy as np

from .errors import InvalidParameter


DEFAULT_HUE_FACTOR = 100
DEFAULT_BRIGHTNESS_FACTOR = 1000
DEFAULT_INITIAL_HUE = 0.33

PALETTE_CACHE_SIZE = 64


def hsb_to_rgb(hue, saturation, brightness):
    """
    Convert HSB to an RGB triple of 0-255 ints.

    Hue wraps around by its fractional part, so 1.25 and 0.25 are the same
    color. Saturation and brightness are clamped to [0, 1] before converting.
    """
    saturation = min(max(saturation, 0.0), 1.0)
    brightness = min(max(brightness, 0.0), 1.0)

    if saturation == 0:
        v = int(brightness * 255.0 + 0.5)
        return (v, v, v)

    h = (hue - math.floor(hue)) * 6.0
    i = int(h)
    f = h - math.floor(h)
    p = brightness * (1.0 - saturation)
    q = brightness * (1.0 - saturation * f)
    t = brightness * (1.0 - saturation * (1.0 - f))

    if i == 0:
        r, g, b = brightness, t, p
    elif i == 1:
        r, g, b = q, brightness, p
    elif i == 2:
        r, g, b = p, brightness, t
    elif i == 3:
        r, g, b = p, q, brightness
    elif i == 4:
        r, g, b = t, p, brightness
    else:
        r, g, b = brightness, p, q

    return (int(r * 255.0 + 0.5), int(g * 255.0 + 0.5), int(b * 255.0 + 0.5))


def generate_palette(count, hue_factor=DEFAULT_HUE_FACTOR,
                     brightness_factor=DEFAULT_BRIGHTNESS_FACTOR,
                     initial_hue=DEFAULT_INITIAL_HUE):
    """
    Build a palette of exactly `count` colors.

    Args:
        count: Number of colors, normally the max-iteration budget
        hue_factor: Divisor of the per-index hue step (nonzero)
        brightness_factor: Divisor of the per-index brightness step (nonzero).
            Brightness starts at full, so positive factors clamp to the
            same colors; negative factors darken later entries.
        initial_hue: Starting hue in HSB space

    Returns:
        Read-only (count, 3) uint8 array. Callers that want to edit it
        should take a copy.

    Raises:
        InvalidParameter: count is not positive, a factor is zero, or
            initial_hue is not a finite number
    """
    if count <= 0:
        raise InvalidParameter(f"palette length must be positive, got {count}")
    if hue_factor == 0:
        raise InvalidParameter("hue factor must be nonzero")
    if brightness_factor == 0:
        raise InvalidParameter("brightness factor must be nonzero")
    if not math.isfinite(initial_hue):
        raise InvalidParameter(f"initial hue must be finite, got {initial_hue}")

    initial_hue = float(initial_hue)
    if not 0.0 <= initial_hue < 1.0:
        # Hue only matters modulo 1; wrapping keeps it inside float32 range
        initial_hue -= math.floor(initial_hue)
    return _build_palette(int(count), int(hue_factor), int(brightness_factor), initial_hue)


@lru_cache(maxsize=PALETTE_CACHE_SIZE)
def _build_palette(count, hue_factor, brightness_factor, initial_hue):
    colors = np.zeros((count, 3), dtype=np.uint8)
    # Hue and brightness accumulate in single precision, so the rounding of
    # each channel matches palettes built with 32-bit floats
    hue = np.float32(initial_hue)
    saturation = 1.0
    brightness = np.float32(1.0)
    for i in range(count):
        # i + 2 keeps the log away from ln(1) = 0 on the first entry
        log_i = math.log(i + 2)
        hue += np.float32(1.0 / (log_i * hue_factor))
        brightness += np.float32(1.0 / (log_i * brightness_factor))
        colors[i] = hsb_to_rgb(float(hue), saturation, float(brightness))
    colors.flags.writeable = False
    return colors


def clear_palette_cache():
    """Drop all memoized palettes."""
    _build_palette.cache_clear()
