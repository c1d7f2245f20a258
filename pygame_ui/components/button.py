"""Control-column button with hover, press and toggled states."""

from enum import Enum, auto
from typing import Callable, Optional, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.utils.math_utils import approach

Color = Tuple[int, int, int]

HOVER_SCALE = 1.04
PRESS_SCALE = 0.96
SCALE_SPEED = 15.0


class ButtonState(Enum):
    """Pointer state of a button."""

    NORMAL = auto()
    HOVERED = auto()
    PRESSED = auto()


class Button:
    """A clickable rectangle laid out from its top-left corner.

    ``active`` marks a latched toggle (auto-drop on) and draws the button in
    its accent color with an outline, independent of the pointer state.
    """

    def __init__(
        self,
        x: float,
        y: float,
        width: float = DIMENSIONS.BUTTON_WIDTH,
        height: float = DIMENSIONS.BUTTON_HEIGHT,
        text: str = "",
        font_size: int = 28,
        on_click: Optional[Callable[[], object]] = None,
        bg_color: Optional[Color] = None,
        hover_color: Optional[Color] = None,
        hotkey: Optional[str] = None,
    ):
        """Initialize a button.

        Args:
            x: Left edge
            y: Top edge
            width: Button width
            height: Button height
            text: Label
            font_size: Label font size
            on_click: Called on a completed left click; its result is ignored
            bg_color: Resting background color
            hover_color: Background under the pointer
            hotkey: Keyboard shortcut hint drawn under the button
        """
        self.rect = pygame.Rect(int(x), int(y), int(width), int(height))
        self.text = text
        self.font_size = font_size
        self.on_click = on_click
        self.bg_color = bg_color or COLORS.BUTTON_DEFAULT
        self.hover_color = hover_color or COLORS.BUTTON_HOVER
        self.hotkey = hotkey

        self.state = ButtonState.NORMAL
        self.active = False
        self.scale = 1.0
        self._fonts: dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def set_text(self, text: str) -> None:
        self.text = text

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Track the pointer; returns True when a click completes on the button."""
        if event.type == pygame.MOUSEMOTION:
            if self.state != ButtonState.PRESSED:
                inside = self.rect.collidepoint(event.pos)
                self.state = ButtonState.HOVERED if inside else ButtonState.NORMAL
            return False

        if getattr(event, "button", None) != 1:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and self.rect.collidepoint(event.pos):
            self.state = ButtonState.PRESSED
        elif event.type == pygame.MOUSEBUTTONUP and self.state == ButtonState.PRESSED:
            inside = self.rect.collidepoint(event.pos)
            self.state = ButtonState.HOVERED if inside else ButtonState.NORMAL
            if inside:
                if self.on_click:
                    self.on_click()
                return True
        return False

    def update(self, dt: float) -> None:
        target = {
            ButtonState.NORMAL: 1.0,
            ButtonState.HOVERED: HOVER_SCALE,
            ButtonState.PRESSED: PRESS_SCALE,
        }[self.state]
        self.scale = approach(self.scale, target, SCALE_SPEED, dt)

    def draw(self, surface: pygame.Surface) -> None:
        if self.state == ButtonState.PRESSED:
            color = COLORS.BUTTON_PRESSED
        elif self.state == ButtonState.HOVERED or self.active:
            color = self.hover_color
        else:
            color = self.bg_color

        rect = self.rect.inflate(
            int(self.rect.width * (self.scale - 1)), int(self.rect.height * (self.scale - 1))
        )
        radius = DIMENSIONS.BUTTON_CORNER_RADIUS
        pygame.draw.rect(surface, color, rect, border_radius=radius)
        if self.active:
            pygame.draw.rect(surface, COLORS.GOLD, rect, width=2, border_radius=radius)

        label = self._font(self.font_size).render(self.text, True, COLORS.TEXT_WHITE)
        surface.blit(label, label.get_rect(center=rect.center))

        if self.hotkey:
            hint = self._font(18).render(f"[{self.hotkey}]", True, COLORS.TEXT_MUTED)
            surface.blit(hint, hint.get_rect(centerx=rect.centerx, top=rect.bottom + 3))
