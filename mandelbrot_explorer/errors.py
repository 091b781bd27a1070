"""
Exceptions raised by the Mandelbrot core.

Both kinds are precondition violations detected before any iteration work
starts, so a caller can reject the request and keep its previous state.
"""


class MandelbrotError(ValueError):
    """Base class for invalid render requests."""


class InvalidViewport(MandelbrotError):
    """The requested region of the complex plane is empty or inverted."""


class InvalidParameter(MandelbrotError):
    """A palette or iteration parameter would make the math degenerate."""
