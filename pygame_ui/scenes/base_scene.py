"""Base scene class for the Plinko UI."""

from abc import ABC, abstractmethod

import pygame


class BaseScene(ABC):
    """Abstract base class for scenes.

    Lifecycle:
    - on_enter(): Called when the scene becomes active
    - on_exit(): Called when the application shuts the scene down

    Main loop methods:
    - handle_event(event): Process input
    - update(dt): Update scene logic
    - draw(surface): Render to surface
    """

    def __init__(self):
        self._is_active = False

    @property
    def is_active(self) -> bool:
        """Check if this scene is currently active."""
        return self._is_active

    def on_enter(self) -> None:
        """Called when this scene becomes active."""
        self._is_active = True

    def on_exit(self) -> None:
        """Called when this scene is torn down."""
        self._is_active = False

    @abstractmethod
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a pygame event.

        Returns:
            True if the event was consumed, False otherwise
        """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update scene logic.

        Args:
            dt: Delta time in seconds since last update
        """

    @abstractmethod
    def draw(self, surface: pygame.Surface) -> None:
        """Draw the scene to a surface."""
