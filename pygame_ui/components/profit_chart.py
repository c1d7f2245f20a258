"""Line chart of cumulative profit."""

from typing import Optional, Sequence

import pygame

from pygame_ui.config import COLORS
from pygame_ui.utils.layout import chart_points, format_money, zero_line_y


class ProfitChart:
    """Cumulative profit over settled balls, green above zero and red below."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.rect = pygame.Rect(x, y, width, height)
        self.values: list[float] = []
        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 20)
        return self._font

    def set_values(self, values: Sequence[float]) -> None:
        self.values = list(values)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the chart, or a placeholder when there is no history yet."""
        pygame.draw.rect(surface, COLORS.BACKGROUND, self.rect, border_radius=6)

        if not self.values:
            text = self.font.render("No balls settled yet", True, COLORS.TEXT_MUTED)
            surface.blit(text, text.get_rect(center=self.rect.center))
            return

        top = self.rect.top + 10
        height = self.rect.height - 20
        baseline = zero_line_y(self.values, top, height)
        pygame.draw.line(
            surface, COLORS.PANEL_BORDER, (self.rect.left, baseline), (self.rect.right, baseline)
        )

        points = chart_points(self.values, self.rect.left + 4, top, self.rect.width - 8, height)
        for start, end in zip(points, points[1:]):
            color = COLORS.PROFIT_UP if end[1] <= baseline else COLORS.PROFIT_DOWN
            pygame.draw.line(surface, color, start, end, 2)

        latest = self.font.render(format_money(self.values[-1]), True, COLORS.TEXT_WHITE)
        surface.blit(latest, latest.get_rect(topright=(self.rect.right - 6, self.rect.top + 4)))
