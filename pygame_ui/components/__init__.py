"""Reusable UI components for the Plinko UI."""

from pygame_ui.components.board import BoardView
from pygame_ui.components.button import Button, ButtonState
from pygame_ui.components.panel import InfoPanel, Panel
from pygame_ui.components.profit_chart import ProfitChart

__all__ = [
    "BoardView",
    "Button",
    "ButtonState",
    "InfoPanel",
    "Panel",
    "ProfitChart",
]
