"""
Main application module for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- User input (drag-to-zoom, arrow-key panning, hotkeys)
- Turning input into engine commands and displaying the results
- Saving screenshots
"""

import time

import numpy as np
import pygame

from .commands import SHIFT, Pan, Reset, Screenshot, Zoom, dispatch, normalize_corners
from .compute import warmup_jit
from .engine import FractalEngine, RenderParameters
from .errors import MandelbrotError
from .sidebar import Sidebar


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    The window is a square image with a sidebar a quarter of its height wide
    on the left. Every render runs synchronously on the event-loop thread,
    so at most one request is ever in flight.
    """

    # Default configuration
    DEFAULT_HEIGHT = 1000
    CAPTION = "Mandelbrot Set Explorer"
    SELECTION_COLOR = (0, 0, 255)

    def __init__(self, height=None, parameters=None):
        """
        Initialize the application.

        Args:
            height: Image size in pixels; the image is square (default 1000)
            parameters: Initial RenderParameters (default palette if None)
        """
        self.height = height or self.DEFAULT_HEIGHT
        self.sidebar_width = self.height // 4
        self.width = self.height + self.sidebar_width

        self.engine = FractalEngine(self.height, self.height, parameters)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.sidebar = None

        # Display state
        self.current_rgb = None
        self.current_surface = None

        # Rubber-band selection, in image pixel coordinates
        self.drag_start = None
        self.selection = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._initial_render()

        self.running = True
        while self.running:
            self._handle_events()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame, create window and sidebar."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.CAPTION)
        self.clock = pygame.time.Clock()
        self.sidebar = Sidebar(self.sidebar_width, self.height, self.engine.parameters)

    def _initial_render(self):
        """Warm up JIT and show the default view."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.engine.request.palette())
        self._show(self.engine.render_default())
        pygame.display.set_caption(self.CAPTION)

    def _show(self, rgb):
        self.current_rgb = rgb
        self.current_surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
        self.sidebar.update(self.engine)

    def _to_image(self, pos):
        """Window position -> image pixel position, clamped to the image."""
        x = min(max(pos[0] - self.sidebar_width, 0), self.height - 1)
        y = min(max(pos[1], 0), self.height - 1)
        return (x, y)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            # Sidebar gets first crack at events
            handled, command = self.sidebar.handle_event(event)
            if command is not None:
                self._execute(command)
            if handled:
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.drag_start = self._to_image(event.pos)
            elif event.type == pygame.MOUSEMOTION and self.drag_start is not None:
                self.selection = normalize_corners(self.drag_start, self._to_image(event.pos))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._handle_mouse_up(event)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_mouse_up(self, event):
        self.selection = None
        if self.drag_start is None:
            return
        start, self.drag_start = self.drag_start, None
        self._execute(Zoom(start, self._to_image(event.pos)))

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_RIGHT:
            self._execute(Pan(dx=SHIFT))
        elif event.key == pygame.K_LEFT:
            self._execute(Pan(dx=-SHIFT))
        elif event.key == pygame.K_UP:
            self._execute(Pan(dy=SHIFT))
        elif event.key == pygame.K_DOWN:
            self._execute(Pan(dy=-SHIFT))
        elif event.key == pygame.K_r:
            self._execute(Reset())
        elif event.key == pygame.K_s:
            self._execute(Screenshot())
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _execute(self, command):
        """Dispatch a command and show its result, keeping the old frame on failure."""
        if isinstance(command, Screenshot):
            self._save_image()
            return

        pygame.display.set_caption("Computing...")
        try:
            rgb = dispatch(self.engine, command)
        except MandelbrotError as e:
            pygame.display.set_caption(f"{self.CAPTION} - {e}")
            print(f"Rejected {type(command).__name__}: {e}")
            return

        if rgb is not None:
            self._show(rgb)
        pygame.display.set_caption(self.CAPTION)

    def _save_image(self):
        """Save the frame on screen as <epoch millis>.png in the working directory."""
        filename = f"{int(time.time() * 1000)}.png"
        try:
            save_image(self.current_rgb, filename)
        except (pygame.error, OSError) as e:
            pygame.display.set_caption(f"{self.CAPTION} - save failed")
            print(f"Could not save {filename}: {e}")
            return
        pygame.display.set_caption(f"Saved: {filename} - {self.CAPTION}")
        print(f"Image saved to: {filename}")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        self.screen.blit(self.current_surface, (self.sidebar_width, 0))

        if self.selection is not None:
            (x0, y0), (x1, y1) = self.selection
            rect = pygame.Rect(x0 + self.sidebar_width, y0, x1 - x0, y1 - y0)
            pygame.draw.rect(self.screen, self.SELECTION_COLOR, rect, 1)

        self.sidebar.draw(self.screen)

        pygame.display.flip()


def save_image(rgb, filename):
    """Write an (H, W, 3) uint8 frame to an image file; format follows the extension."""
    surface = pygame.surfarray.make_surface(np.ascontiguousarray(rgb.swapaxes(0, 1)))
    pygame.image.save(surface, filename)


def render_to_file(filename, height=None, parameters=None):
    """Render the default view without opening a window and save it."""
    engine = FractalEngine(height or MandelbrotApp.DEFAULT_HEIGHT,
                           height or MandelbrotApp.DEFAULT_HEIGHT,
                           parameters or RenderParameters())
    save_image(engine.render_default(), filename)
    print(f"Image saved to: {filename}")


def run(height=None, parameters=None):
    """
    Run the Mandelbrot explorer.

    Args:
        height: Image size in pixels (default 1000)
        parameters: Initial RenderParameters
    """
    app = MandelbrotApp(height, parameters)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
