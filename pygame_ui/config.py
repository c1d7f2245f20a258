"""Configuration constants for the pygame Plinko UI."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Colors:
    """Color palette for the Plinko UI."""

    # Background
    BACKGROUND: Tuple[int, int, int] = (17, 24, 39)
    BOARD_BG: Tuple[int, int, int] = (31, 41, 55)

    # Board
    PEG: Tuple[int, int, int] = (156, 163, 175)
    BALL: Tuple[int, int, int] = (255, 255, 255)

    # Slot tiers, from the highest multipliers down
    SLOT_RED: Tuple[int, int, int] = (239, 68, 68)
    SLOT_ORANGE: Tuple[int, int, int] = (249, 115, 22)
    SLOT_YELLOW: Tuple[int, int, int] = (234, 179, 8)
    SLOT_GREEN: Tuple[int, int, int] = (34, 197, 94)
    SLOT_BLUE: Tuple[int, int, int] = (59, 130, 246)

    # UI accents
    GOLD: Tuple[int, int, int] = (255, 200, 87)
    PROFIT_UP: Tuple[int, int, int] = (16, 185, 129)
    PROFIT_DOWN: Tuple[int, int, int] = (239, 68, 68)

    # Text
    TEXT_WHITE: Tuple[int, int, int] = (240, 240, 240)
    TEXT_MUTED: Tuple[int, int, int] = (156, 163, 175)

    # Buttons
    BUTTON_DEFAULT: Tuple[int, int, int] = (75, 85, 99)
    BUTTON_HOVER: Tuple[int, int, int] = (107, 114, 128)
    BUTTON_PRESSED: Tuple[int, int, int] = (55, 65, 81)
    BUTTON_DROP: Tuple[int, int, int] = (34, 197, 94)
    BUTTON_STATS: Tuple[int, int, int] = (59, 130, 246)

    # Panels
    PANEL_BG: Tuple[int, int, int] = (31, 41, 55)
    PANEL_BORDER: Tuple[int, int, int] = (60, 65, 80)


@dataclass(frozen=True)
class Dimensions:
    """Dimension constants for layout and sizing."""

    # Screen
    SCREEN_WIDTH: int = 1280
    SCREEN_HEIGHT: int = 720
    TARGET_FPS: int = 60

    # Board placement: board units are scaled by BOARD_SCALE
    BOARD_LEFT: int = 600
    BOARD_TOP: int = 60
    BOARD_SCALE: float = 1.2
    BOARD_MARGIN: int = 20

    PEG_RADIUS: int = 4
    BALL_RADIUS: int = 6
    SLOT_HEIGHT: int = 32

    # Control column
    CONTROLS_LEFT: int = 40
    CONTROLS_WIDTH: int = 360

    # UI Elements
    BUTTON_WIDTH: int = 160
    BUTTON_HEIGHT: int = 45
    BUTTON_CORNER_RADIUS: int = 6
    PANEL_PADDING: int = 16
    PANEL_CORNER_RADIUS: int = 12

    # Stats overlay
    CHART_WIDTH: int = 520
    CHART_HEIGHT: int = 200


@dataclass(frozen=True)
class AnimationConfig:
    """Animation timing constants."""

    SLOT_HIGHLIGHT_SCALE: float = 1.1
    SLOT_SPRING_SPEED: float = 18.0


# Global instances for easy import
COLORS = Colors()
DIMENSIONS = Dimensions()
ANIMATION = AnimationConfig()
