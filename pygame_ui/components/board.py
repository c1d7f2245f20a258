"""Board view: pegs, balls in flight and the multiplier slot row."""

from typing import Optional, Sequence

import pygame

from plinko.geometry import BoardGeometry
from plinko.physics import Ball
from plinko.slots import SlotTable
from pygame_ui.config import ANIMATION, COLORS, DIMENSIONS
from pygame_ui.utils.layout import BoardTransform, format_multiplier, slot_color
from pygame_ui.utils.math_utils import approach


class BoardView:
    """Draws a board from the same geometry the physics uses."""

    def __init__(self, geometry: BoardGeometry, slot_table: SlotTable):
        self.transform = BoardTransform(
            left=DIMENSIONS.BOARD_LEFT,
            top=DIMENSIONS.BOARD_TOP,
            scale=DIMENSIONS.BOARD_SCALE,
        )
        self._slot_font: Optional[pygame.font.Font] = None
        self._peg_surface: Optional[pygame.Surface] = None
        self.set_board(geometry, slot_table)

    def set_board(self, geometry: BoardGeometry, slot_table: SlotTable) -> None:
        """Switch to a new layout; cached peg artwork is rebuilt."""
        self.geometry = geometry
        self.slot_table = slot_table
        self._slot_scales = [1.0] * geometry.slot_count
        self._peg_surface = None

    @property
    def slot_font(self) -> pygame.font.Font:
        if self._slot_font is None:
            self._slot_font = pygame.font.Font(None, 18)
        return self._slot_font

    @property
    def rect(self) -> pygame.Rect:
        margin = DIMENSIONS.BOARD_MARGIN
        left, top = self.transform.to_screen(0, 0)
        right, bottom = self.transform.to_screen(
            self.geometry.board_width, self.geometry.board_height
        )
        return pygame.Rect(
            left - margin,
            top - margin,
            right - left + margin * 2,
            bottom - top + margin * 2 + DIMENSIONS.SLOT_HEIGHT,
        )

    def update(self, dt: float, active_slot: Optional[int]) -> None:
        """Spring the highlighted slot up and the others back down."""
        for i in range(len(self._slot_scales)):
            target = ANIMATION.SLOT_HIGHLIGHT_SCALE if i == active_slot else 1.0
            self._slot_scales[i] = approach(
                self._slot_scales[i], target, ANIMATION.SLOT_SPRING_SPEED, dt
            )

    def _render_pegs(self, size: tuple[int, int]) -> pygame.Surface:
        surface = pygame.Surface(size, pygame.SRCALPHA)
        for peg in self.geometry.pegs():
            pygame.draw.circle(
                surface, COLORS.PEG, self.transform.to_screen(peg.x, peg.y), DIMENSIONS.PEG_RADIUS
            )
        return surface

    def draw(self, surface: pygame.Surface, balls: Sequence[Ball]) -> None:
        """Draw the board, then the balls, then the slot row."""
        pygame.draw.rect(surface, COLORS.BOARD_BG, self.rect, border_radius=12)

        if self._peg_surface is None:
            self._peg_surface = self._render_pegs(surface.get_size())
        surface.blit(self._peg_surface, (0, 0))

        for ball in balls:
            pygame.draw.circle(
                surface, COLORS.BALL, self.transform.to_screen(ball.x, ball.y), DIMENSIONS.BALL_RADIUS
            )

        self._draw_slots(surface)

    def _draw_slots(self, surface: pygame.Surface) -> None:
        _, slot_top = self.transform.to_screen(0, self.geometry.board_height)
        for i, multiplier in enumerate(self.slot_table):
            left, right = self.geometry.slot_bounds(i)
            x0, _ = self.transform.to_screen(left, 0)
            x1, _ = self.transform.to_screen(right, 0)
            scale = self._slot_scales[i]

            rect = pygame.Rect(0, 0, int((x1 - x0 - 2) * scale), int(DIMENSIONS.SLOT_HEIGHT * scale))
            rect.center = ((x0 + x1) // 2, slot_top + DIMENSIONS.SLOT_HEIGHT // 2 + 4)
            pygame.draw.rect(surface, slot_color(multiplier), rect, border_radius=4)

            label = self.slot_font.render(format_multiplier(multiplier), True, COLORS.BACKGROUND)
            surface.blit(label, label.get_rect(center=rect.center))
