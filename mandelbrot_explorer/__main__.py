"""
Allow running the package directly: python -m mandelbrot_explorer
"""
import argparse

from .engine import RenderParameters
from .errors import MandelbrotError
from .palette import DEFAULT_BRIGHTNESS_FACTOR, DEFAULT_HUE_FACTOR, DEFAULT_INITIAL_HUE


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mandelbrot_explorer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--height",
        type=int,
        default=1000,
        help="size of the square image, in pixels",
    )
    parser.add_argument(
        "--hue-factor",
        type=int,
        default=DEFAULT_HUE_FACTOR,
        help="divisor of the per-color hue step; larger is a slower hue sweep",
    )
    parser.add_argument(
        "--brightness-factor",
        type=int,
        default=DEFAULT_BRIGHTNESS_FACTOR,
        help=(
            "divisor of the per-color brightness step; brightness starts at "
            "full, so only negative values (gradual darkening) change the image"
        ),
    )
    parser.add_argument(
        "--initial-hue",
        type=float,
        default=DEFAULT_INITIAL_HUE,
        help="hue of the first palette color",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="render the default view to this file instead of opening a window",
    )

    args = parser.parse_args(argv)
    if args.height <= 0:
        parser.error("--height must be positive")

    try:
        parameters = RenderParameters(args.hue_factor, args.brightness_factor, args.initial_hue)
    except MandelbrotError as e:
        parser.error(str(e))

    # Imported here so --help works without initialising pygame
    from .app import render_to_file, run

    if args.output:
        render_to_file(args.output, args.height, parameters)
    else:
        run(args.height, parameters)


if __name__ == "__main__":
    main()
