"""Main Plinko scene: board, controls, recent multipliers and stats overlay."""

from typing import List, Optional

import pygame

from plinko.game import EventType, FrameSnapshot, SimulationEvent

from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.core.engine_adapter import EngineAdapter
from pygame_ui.components.board import BoardView
from pygame_ui.components.button import Button
from pygame_ui.components.panel import InfoPanel, Panel
from pygame_ui.components.profit_chart import ProfitChart
from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.utils.layout import format_money, format_multiplier, slot_color


class PlinkoScene(BaseScene):
    """Drives the simulation once per frame and draws its snapshot."""

    def __init__(self, engine: Optional[EngineAdapter] = None):
        super().__init__()
        self._engine = engine
        self.engine: Optional[EngineAdapter] = None

        self.board_view: Optional[BoardView] = None
        self.buttons: List[Button] = []
        self.drop_button: Optional[Button] = None
        self.auto_button: Optional[Button] = None
        self.rows_button: Optional[Button] = None
        self.risk_button: Optional[Button] = None

        self.stats_panel: Optional[InfoPanel] = None
        self.stats_backdrop: Optional[Panel] = None
        self.profit_chart: Optional[ProfitChart] = None
        self.show_stats = False

        self.snapshot: Optional[FrameSnapshot] = None
        self._fonts: dict[int, pygame.font.Font] = {}

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def on_enter(self) -> None:
        """Build the engine and the UI, then start the simulation."""
        super().on_enter()

        self.engine = self._engine or EngineAdapter()
        self.engine.simulation.subscribe(self._on_board_configured, EventType.BOARD_CONFIGURED)
        self.engine.simulation.subscribe(self._on_auto_changed, EventType.AUTO_DROP_STARTED)
        self.engine.simulation.subscribe(self._on_auto_changed, EventType.AUTO_DROP_STOPPED)

        self.board_view = BoardView(self.engine.simulation.geometry, self.engine.simulation.slot_table)
        self._setup_buttons()
        self._setup_stats()

        self.engine.start()
        self.snapshot = self.engine.simulation.snapshot()

    def on_exit(self) -> None:
        """Stop the simulation so no timer outlives the scene."""
        super().on_exit()
        if self.engine:
            self.engine.stop()

    def _setup_buttons(self) -> None:
        left = DIMENSIONS.CONTROLS_LEFT
        width = DIMENSIONS.CONTROLS_WIDTH
        half = (width - 10) / 2

        bet_half = Button(
            x=left, y=200, width=half, height=40, text="1/2",
            on_click=self.engine.halve_wager,
        )
        bet_double = Button(
            x=left + half + 10, y=200, width=half, height=40, text="2x",
            on_click=self.engine.double_wager,
        )
        self.risk_button = Button(
            x=left, y=270, width=half, height=40, text="",
            on_click=self.engine.cycle_risk, hotkey="R",
        )
        self.rows_button = Button(
            x=left + half + 10, y=270, width=half, height=40, text="",
            on_click=self.engine.cycle_rows, hotkey="W",
        )
        self.drop_button = Button(
            x=left, y=350, width=width, height=56, text="DROP BALL", font_size=34,
            on_click=self.engine.drop, hotkey="SPACE",
            bg_color=COLORS.BUTTON_DROP, hover_color=(74, 222, 128),
        )
        self.auto_button = Button(
            x=left, y=436, width=half, height=44, text="AUTO: OFF",
            on_click=self.engine.toggle_auto, hotkey="A",
        )
        stats_button = Button(
            x=left + half + 10, y=436, width=half, height=44, text="STATS",
            on_click=self.toggle_stats, hotkey="S",
            bg_color=COLORS.BUTTON_STATS, hover_color=(96, 165, 250),
        )

        self.buttons = [
            bet_half, bet_double, self.risk_button, self.rows_button,
            self.drop_button, self.auto_button, stats_button,
        ]
        self._refresh_labels()

    def _setup_stats(self) -> None:
        width = DIMENSIONS.CHART_WIDTH + DIMENSIONS.PANEL_PADDING * 2
        x = (DIMENSIONS.SCREEN_WIDTH - width) // 2
        y = 120
        self.stats_backdrop = Panel(x, y, width, 420, bg_alpha=245)
        self.stats_panel = InfoPanel(
            x + DIMENSIONS.PANEL_PADDING, y + DIMENSIONS.PANEL_PADDING,
            width=DIMENSIONS.CHART_WIDTH, title="STATISTICS", border_width=0,
        )
        self.profit_chart = ProfitChart(
            x + DIMENSIONS.PANEL_PADDING,
            y + 420 - DIMENSIONS.CHART_HEIGHT - DIMENSIONS.PANEL_PADDING,
            DIMENSIONS.CHART_WIDTH,
            DIMENSIONS.CHART_HEIGHT,
        )

    def _refresh_labels(self) -> None:
        self.risk_button.set_text(f"Risk: {self.engine.risk}")
        self.rows_button.set_text(f"Rows: {self.engine.rows}")
        self.auto_button.active = self.engine.simulation.is_auto
        self.auto_button.set_text("AUTO: ON" if self.auto_button.active else "AUTO: OFF")

    def _refresh_stats(self) -> None:
        ledger = self.engine.ledger
        stats = ledger.stats
        profit_color = COLORS.PROFIT_UP if stats.profit >= 0 else COLORS.PROFIT_DOWN
        self.stats_panel.set_content([
            ("Profit", format_money(stats.profit), profit_color),
            ("Wins", str(stats.wins), COLORS.PROFIT_UP),
            ("Losses", str(stats.losses), COLORS.PROFIT_DOWN),
            ("Win rate", f"{ledger.win_rate:.1f}%", COLORS.TEXT_WHITE),
        ])
        self.profit_chart.set_values([float(p) for _, p in ledger.cumulative_profit()])

    def toggle_stats(self) -> None:
        self.show_stats = not self.show_stats
        if self.show_stats:
            self._refresh_stats()

    # Engine events

    def _on_board_configured(self, event: SimulationEvent) -> None:
        self.board_view.set_board(self.engine.simulation.geometry, self.engine.simulation.slot_table)
        self._refresh_labels()

    def _on_auto_changed(self, event: SimulationEvent) -> None:
        self._refresh_labels()

    # Main loop

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle input events."""
        for button in self.buttons:
            if button.handle_event(event):
                return True

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.engine.drop()
                return True
            elif event.key == pygame.K_a:
                self.engine.toggle_auto()
                return True
            elif event.key == pygame.K_s:
                self.toggle_stats()
                return True
            elif event.key == pygame.K_r:
                self.engine.cycle_risk()
                return True
            elif event.key == pygame.K_w:
                self.engine.cycle_rows()
                return True
            elif event.key == pygame.K_ESCAPE and self.show_stats:
                self.show_stats = False
                return True

        return False

    def update(self, dt: float) -> None:
        """Advance the simulation one frame and animate the UI."""
        self.snapshot = self.engine.tick()
        if self.snapshot.landings and self.show_stats:
            self._refresh_stats()

        self.board_view.update(dt, self.snapshot.active_slot)
        for button in self.buttons:
            button.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the scene."""
        surface.fill(COLORS.BACKGROUND)

        self.board_view.draw(surface, self.snapshot.balls)
        self._draw_header(surface)
        self._draw_trail(surface)
        for button in self.buttons:
            button.draw(surface)

        if self.engine.message:
            text = self.font(24).render(self.engine.message, True, COLORS.PROFIT_DOWN)
            surface.blit(text, (DIMENSIONS.CONTROLS_LEFT, 510))

        if self.show_stats:
            self.stats_backdrop.draw(surface)
            self.stats_panel.draw(surface)
            self.profit_chart.draw(surface)

    def _draw_header(self, surface: pygame.Surface) -> None:
        left = DIMENSIONS.CONTROLS_LEFT
        title = self.font(56).render("PLINKO", True, COLORS.GOLD)
        surface.blit(title, (left, 40))

        balance = self.font(36).render(
            f"Balance: {format_money(self.snapshot.balance)}", True, COLORS.TEXT_WHITE
        )
        surface.blit(balance, (left, 100))

        wager = self.font(28).render(
            f"Bet: {format_money(self.engine.wager)}", True, COLORS.TEXT_MUTED
        )
        surface.blit(wager, (left, 160))

    def _draw_trail(self, surface: pygame.Surface) -> None:
        """Recent multipliers, newest on top, beside the board."""
        x = self.board_view.rect.right + 20
        y = self.board_view.rect.top
        for multiplier in self.engine.ledger.recent_multipliers:
            rect = pygame.Rect(x, y, 70, 34)
            pygame.draw.rect(surface, slot_color(multiplier), rect, border_radius=6)
            label = self.font(24).render(format_multiplier(multiplier), True, COLORS.BACKGROUND)
            surface.blit(label, label.get_rect(center=rect.center))
            y += 42
