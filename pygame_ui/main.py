"""Main entry point for the pygame Plinko UI."""

import logging
import sys

import pygame

from config import setup_logging
from pygame_ui.config import DIMENSIONS
from pygame_ui.scenes.plinko_scene import PlinkoScene

logger = logging.getLogger(__name__)


class Application:
    """Main application class managing the game loop."""

    def __init__(self):
        """Initialize the application."""
        pygame.init()
        pygame.display.set_caption("Plinko")

        self.screen = pygame.display.set_mode(
            (DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SCREEN_HEIGHT)
        )
        self.clock = pygame.time.Clock()
        self.running = True

        self.scene = PlinkoScene()
        self.scene.on_enter()

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            self.scene.handle_event(event)

    def update(self, dt: float) -> None:
        """Update application state.

        Args:
            dt: Delta time in seconds
        """
        self.scene.update(dt)

    def draw(self) -> None:
        """Render the application."""
        self.scene.draw(self.screen)
        pygame.display.flip()

    def run(self) -> None:
        """Main application loop."""
        try:
            while self.running:
                dt = self.clock.tick(DIMENSIONS.TARGET_FPS) / 1000.0

                self.handle_events()
                self.update(dt)
                self.draw()
        finally:
            self.scene.on_exit()
            pygame.quit()
        sys.exit()


def main() -> None:
    """Entry point for the pygame UI."""
    setup_logging()
    logger.info("Starting Plinko UI")
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
