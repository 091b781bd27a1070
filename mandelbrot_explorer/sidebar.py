"""
Sidebar panel for the Mandelbrot explorer.

Shows the current plane boundaries and scale, lets the user tune the hue
(hue factor, initial hue), and lists the hotkeys. Widget events are turned
into commands for the engine rather than touching it.
"""

import pygame

from .commands import Reset, SetParameters
from .palette import DEFAULT_BRIGHTNESS_FACTOR, DEFAULT_HUE_FACTOR, DEFAULT_INITIAL_HUE


class Stepper:
    """A numeric field with - and + buttons, clamped to [minimum, maximum]."""

    def __init__(self, x, y, width, value, minimum, maximum, step, decimals=0):
        self.x = x
        self.y = y
        self.width = width
        self.height = 24
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self.decimals = decimals

    def _minus_rect(self):
        return pygame.Rect(self.x, self.y, self.height, self.height)

    def _plus_rect(self):
        return pygame.Rect(self.x + self.width - self.height, self.y, self.height, self.height)

    def _nudge(self, direction):
        value = self.value + direction * self.step
        value = min(max(value, self.minimum), self.maximum)
        self.value = round(value, self.decimals) if self.decimals else int(value)

    def handle_event(self, event):
        """Returns (handled, value_changed)."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            old_value = self.value
            if self._minus_rect().collidepoint(event.pos):
                self._nudge(-1)
            elif self._plus_rect().collidepoint(event.pos):
                self._nudge(1)
            else:
                return False, False
            return True, old_value != self.value
        return False, False

    def draw(self, screen, small_font):
        field_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(screen, (55, 55, 55), field_rect)
        pygame.draw.rect(screen, (100, 100, 100), field_rect, 1)

        for rect, glyph in ((self._minus_rect(), "-"), (self._plus_rect(), "+")):
            pygame.draw.rect(screen, (70, 70, 70), rect)
            pygame.draw.rect(screen, (100, 100, 100), rect, 1)
            text = small_font.render(glyph, True, (220, 220, 220))
            screen.blit(text, text.get_rect(center=rect.center))

        label = f"{self.value:.{self.decimals}f}"
        text = small_font.render(label, True, (220, 220, 220))
        screen.blit(text, text.get_rect(center=field_rect.center))


class Sidebar:
    """
    Left-hand control panel.

    handle_event() returns (handled, command): command is None unless a
    button was pressed, in which case it is the command for the shell to
    dispatch. The brightness factor has no widget; Update carries over
    whatever the engine was started with.
    """

    HOTKEYS = [
        ("S", "Take a screenshot"),
        ("R", "Reset zoom"),
        ("Arrows", "Shift the view"),
        ("Click+Drag", "Zoom in"),
    ]

    def __init__(self, width, height, parameters=None):
        """
        Args:
            width, height: Panel size in pixels
            parameters: RenderParameters the controls start from (defaults if None)
        """
        self.width = width
        self.height = height
        self.font = None
        self.title_font = None
        self.small_font = None

        hue_factor = DEFAULT_HUE_FACTOR
        initial_hue = DEFAULT_INITIAL_HUE
        self.brightness_factor = DEFAULT_BRIGHTNESS_FACTOR
        if parameters is not None:
            hue_factor = parameters.hue_factor
            initial_hue = parameters.initial_hue
            self.brightness_factor = parameters.brightness_factor

        inner = width - 16
        self.hue_stepper = Stepper(8, 250, inner, hue_factor, 1, 2000, 10)
        self.initial_hue_stepper = Stepper(8, 300, inner, initial_hue,
                                           0.01, 0.99, 0.01, decimals=2)
        self.update_rect = pygame.Rect(8, 340, inner, 26)
        self.reset_rect = pygame.Rect(8, 374, inner, 26)

        self.labels = []

    def init_fonts(self):
        pygame.font.init()
        self.title_font = pygame.font.SysFont('Arial', 18, bold=True)
        self.font = pygame.font.SysFont('Arial', 14, bold=True)
        self.small_font = pygame.font.SysFont('Arial', 12)

    def update(self, engine):
        """Refresh the boundary labels from the engine's current state."""
        viewport = engine.viewport
        self.brightness_factor = engine.parameters.brightness_factor
        self.labels = [
            ("Real Boundaries", None),
            (f"Min: {viewport.real_start}", viewport.real_start),
            (f"Max: {viewport.real_end}", viewport.real_end),
            ("Imaginary Boundaries", None),
            (f"Min: {viewport.imaginary_end}", viewport.imaginary_end),
            (f"Max: {viewport.imaginary_start}", viewport.imaginary_start),
            (f"Scale: {viewport.step:.3e}", viewport.step),
            (f"Iterations: {engine.max_iterations}", engine.max_iterations),
        ]

    def point_in_sidebar(self, pos):
        return 0 <= pos[0] < self.width

    def handle_event(self, event):
        for stepper in (self.hue_stepper, self.initial_hue_stepper):
            handled, _ = stepper.handle_event(event)
            if handled:
                return True, None

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.update_rect.collidepoint(event.pos):
                return True, SetParameters(
                    self.hue_stepper.value,
                    self.brightness_factor,
                    self.initial_hue_stepper.value,
                )
            if self.reset_rect.collidepoint(event.pos):
                return True, Reset()
            if self.point_in_sidebar(event.pos):
                return True, None

        return False, None

    def draw(self, screen):
        if self.font is None:
            self.init_fonts()

        pygame.draw.rect(screen, (40, 40, 40), pygame.Rect(0, 0, self.width, self.height))
        pygame.draw.line(screen, (100, 100, 100), (self.width - 1, 0),
                         (self.width - 1, self.height))

        title = self.title_font.render('Mandelbrot Explorer', True, (230, 230, 230))
        screen.blit(title, (8, 10))

        current_y = 44
        for text, value in self.labels:
            font = self.font if value is None else self.small_font
            screen.blit(font.render(text, True, (200, 200, 200)), (8, current_y))
            current_y += 20 if value is None else 16

        for caption, stepper in (("Hue Factor:", self.hue_stepper),
                                 ("Initial Hue:", self.initial_hue_stepper)):
            label = self.small_font.render(caption, True, (180, 180, 180))
            screen.blit(label, (8, stepper.y - 16))
            stepper.draw(screen, self.small_font)

        for rect, caption in ((self.update_rect, 'Update'), (self.reset_rect, 'Reset Zoom')):
            pygame.draw.rect(screen, (70, 100, 70), rect)
            pygame.draw.rect(screen, (100, 150, 100), rect, 1)
            text = self.font.render(caption, True, (220, 255, 220))
            screen.blit(text, text.get_rect(center=rect.center))

        current_y = self.reset_rect.bottom + 24
        screen.blit(self.font.render('Controls', True, (200, 200, 200)), (8, current_y))
        current_y += 20
        for key, action in self.HOTKEYS:
            screen.blit(self.small_font.render(key, True, (220, 220, 220)), (8, current_y))
            screen.blit(self.small_font.render(action, True, (160, 160, 160)),
                        (8 + self.width // 2 - 10, current_y))
            current_y += 16
