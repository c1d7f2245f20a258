"""Pure layout helpers: board-to-screen mapping, slot colors, chart points.

Nothing here imports pygame, so it is usable from tests without a display.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Tuple

from pygame_ui.config import COLORS
from pygame_ui.utils.math_utils import inverse_lerp, lerp

Color = Tuple[int, int, int]


def slot_color(multiplier: float) -> Color:
    """Color tier for a multiplier: red for the rarest payouts, blue below 1x."""
    if multiplier >= 41:
        return COLORS.SLOT_RED
    if multiplier >= 10:
        return COLORS.SLOT_ORANGE
    if multiplier >= 3:
        return COLORS.SLOT_YELLOW
    if multiplier >= 1:
        return COLORS.SLOT_GREEN
    return COLORS.SLOT_BLUE


def format_multiplier(multiplier: float) -> str:
    """Render 1.0 as '1x' and 1.5 as '1.5x'."""
    return f"{multiplier:g}x"


def format_money(amount: Decimal | float) -> str:
    """Render an amount with two decimals and a sign only when negative."""
    value = float(amount)
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


@dataclass(frozen=True)
class BoardTransform:
    """Maps board units to screen pixels."""

    left: float
    top: float
    scale: float

    def to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return int(self.left + x * self.scale), int(self.top + y * self.scale)


def chart_points(
    values: Sequence[float],
    left: float,
    top: float,
    width: float,
    height: float,
) -> list[Tuple[int, int]]:
    """
    Scale a series into a chart rectangle.

    The vertical range always includes zero so the baseline is visible.
    A single value is drawn as a flat line across the chart.

    Returns:
        Screen points, left to right
    """
    if not values:
        return []

    low = min(0.0, min(values))
    high = max(0.0, max(values))
    if high == low:
        high = low + 1.0

    count = len(values)
    points = []
    for i, value in enumerate(values):
        t = i / (count - 1) if count > 1 else 0.0
        x = lerp(left, left + width, t)
        y = lerp(top + height, top, inverse_lerp(low, high, value))
        points.append((int(x), int(y)))
    if count == 1:
        points.append((int(left + width), points[0][1]))
    return points


def zero_line_y(values: Sequence[float], top: float, height: float) -> int:
    """Screen y of the zero baseline for the same scaling as chart_points."""
    low = min(0.0, min(values)) if values else 0.0
    high = max(0.0, max(values)) if values else 1.0
    if high == low:
        high = low + 1.0
    return int(lerp(top + height, top, inverse_lerp(low, high, 0.0)))
