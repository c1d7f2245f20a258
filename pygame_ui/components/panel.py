"""Translucent panels: a plain backdrop and a label/value table."""

from typing import Optional, Sequence, Tuple

import pygame

from pygame_ui.config import COLORS, DIMENSIONS

Color = Tuple[int, int, int]
Row = Tuple[str, str, Color]


class Panel:
    """Rounded translucent rectangle, pre-rendered once per size."""

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        bg_alpha: int = 230,
        border_width: int = 2,
    ):
        self.rect = pygame.Rect(int(x), int(y), int(width), int(height))
        self.bg_alpha = bg_alpha
        self.border_width = border_width
        self._backdrop: Optional[pygame.Surface] = None

    def resize(self, height: int) -> None:
        if height != self.rect.height:
            self.rect.height = height
            self._backdrop = None

    def _render_backdrop(self) -> pygame.Surface:
        backdrop = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        local = backdrop.get_rect()
        radius = DIMENSIONS.PANEL_CORNER_RADIUS
        pygame.draw.rect(backdrop, (*COLORS.PANEL_BG, self.bg_alpha), local, border_radius=radius)
        if self.border_width:
            pygame.draw.rect(
                backdrop, COLORS.PANEL_BORDER, local, width=self.border_width, border_radius=radius
            )
        return backdrop

    def draw(self, surface: pygame.Surface) -> None:
        if self._backdrop is None:
            self._backdrop = self._render_backdrop()
        surface.blit(self._backdrop, self.rect.topleft)


class InfoPanel(Panel):
    """Titled table of (label, value, value color) rows; height follows content."""

    TITLE_HEIGHT = 32
    ROW_HEIGHT = 24

    def __init__(self, x: float, y: float, width: float = 240, title: str = "", **kwargs):
        super().__init__(x, y, width, DIMENSIONS.PANEL_PADDING * 2, **kwargs)
        self.title = title
        self.rows: list[Row] = []
        self._title_font: Optional[pygame.font.Font] = None
        self._row_font: Optional[pygame.font.Font] = None

    def set_content(self, rows: Sequence[Row]) -> None:
        self.rows = list(rows)
        title_height = self.TITLE_HEIGHT if self.title else 0
        self.resize(title_height + len(self.rows) * self.ROW_HEIGHT + DIMENSIONS.PANEL_PADDING * 2)

    def draw(self, surface: pygame.Surface) -> None:
        super().draw(surface)
        if self._title_font is None:
            self._title_font = pygame.font.Font(None, 30)
            self._row_font = pygame.font.Font(None, 26)

        pad = DIMENSIONS.PANEL_PADDING
        top = self.rect.top + pad
        if self.title:
            title = self._title_font.render(self.title, True, COLORS.GOLD)
            surface.blit(title, title.get_rect(centerx=self.rect.centerx, top=top))
            top += self.TITLE_HEIGHT

        for label, value, color in self.rows:
            surface.blit(
                self._row_font.render(label, True, COLORS.TEXT_MUTED), (self.rect.left + pad, top)
            )
            rendered = self._row_font.render(value, True, color)
            surface.blit(rendered, rendered.get_rect(right=self.rect.right - pad, top=top))
            top += self.ROW_HEIGHT
