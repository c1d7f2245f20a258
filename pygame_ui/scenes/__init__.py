"""Scenes for the Plinko UI."""

from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.scenes.plinko_scene import PlinkoScene

__all__ = [
    "BaseScene",
    "PlinkoScene",
]
