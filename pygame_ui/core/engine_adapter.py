"""Adapter connecting the plinko engine to the pygame UI."""

import logging
from dataclasses import replace
from decimal import Decimal, ROUND_DOWN
from typing import Optional

from config import AppConfig, config as app_config
from plinko.errors import ConfigurationError, StorageError
from plinko.game import EventType, FrameSnapshot, Simulation, SimulationEvent
from plinko.geometry import BoardGeometry
from plinko.ledger import Ledger
from plinko.physics import PhysicsConfig
from plinko.slots import SUPPORTED_ROWS, RiskLevel
from plinko.storage import InMemoryStore, KeyValueStore, create_store

logger = logging.getLogger(__name__)

MIN_WAGER = Decimal("0.01")
RISK_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]


def open_store(settings: AppConfig) -> KeyValueStore:
    """Open the configured store, falling back to memory if it is unavailable."""
    try:
        return create_store(
            settings.storage.backend,
            path=settings.storage.path,
            redis_url=settings.redis.url,
            prefix=settings.storage.key_prefix,
        )
    except (StorageError, ValueError) as exc:
        logger.warning("Storage unavailable, progress will not be saved: %s", exc)
        return InMemoryStore()


class EngineAdapter:
    """Adapter between the Simulation and the pygame UI.

    Holds the UI-side controls (wager, rows, risk) and forwards them to the
    engine as plain values. Keeps the last landing message for display.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        settings: Optional[AppConfig] = None,
    ):
        """Initialize the adapter.

        Args:
            store: Key-value store (opened from settings if not provided)
            settings: Application configuration
        """
        self.settings = settings or app_config
        self.store = store if store is not None else open_store(self.settings)

        ledger = Ledger(
            self.store,
            starting_balance=self.settings.game.starting_balance,
            trail_capacity=self.settings.game.trail_capacity,
        )
        rows = self.settings.board.rows
        geometry = BoardGeometry(
            column_count=rows,
            row_count=rows,
            row_spacing=self.settings.board.row_spacing,
            board_width=self.settings.board.width,
            board_height=self.settings.board.height,
        )
        physics = PhysicsConfig(
            gravity=self.settings.physics.gravity,
            horizontal_speed=self.settings.physics.horizontal_speed,
            collision_radius=self.settings.physics.collision_radius,
            push_out=self.settings.physics.push_out,
        )
        timing = dict(
            physics=physics,
            auto_drop_interval=self.settings.game.auto_drop_interval,
            highlight_duration=self.settings.game.highlight_duration,
        )
        try:
            self.simulation = Simulation(
                ledger, geometry=geometry, risk=self.settings.board.risk, **timing
            )
        except ConfigurationError:
            logger.warning(
                "Board %s/%s is not supported, using 16 rows",
                rows,
                self.settings.board.risk,
            )
            reference = replace(geometry, column_count=16, row_count=16)
            self.simulation = Simulation(ledger, geometry=reference, **timing)

        self.wager: Decimal = self.settings.game.default_wager
        self.message: str = ""
        self.simulation.subscribe(self._on_insufficient_funds, EventType.INSUFFICIENT_FUNDS)
        self.simulation.subscribe(self._on_invalid_action, EventType.INVALID_ACTION)

    @property
    def ledger(self) -> Ledger:
        return self.simulation.ledger

    @property
    def rows(self) -> int:
        return self.simulation.geometry.row_count

    @property
    def risk(self) -> RiskLevel:
        return self.simulation.risk

    def _on_insufficient_funds(self, event: SimulationEvent) -> None:
        self.message = "Insufficient balance"

    def _on_invalid_action(self, event: SimulationEvent) -> None:
        self.message = event.data.get("message", "")

    # Controls

    def halve_wager(self) -> None:
        self._set_wager(max(MIN_WAGER, (self.wager / 2).quantize(MIN_WAGER, rounding=ROUND_DOWN)))

    def double_wager(self) -> None:
        self._set_wager(self.wager * 2)

    def _set_wager(self, wager: Decimal) -> None:
        self.wager = wager
        if self.simulation.is_auto:
            # Auto-drop picks up the new wager on its next drop
            self.simulation.start_auto(wager)

    def drop(self) -> bool:
        self.message = ""
        return self.simulation.drop(self.wager) is not None

    def toggle_auto(self) -> bool:
        return self.simulation.toggle_auto(self.wager)

    def cycle_rows(self) -> bool:
        """Move to the next supported row count."""
        index = SUPPORTED_ROWS.index(self.rows) if self.rows in SUPPORTED_ROWS else -1
        return self._configure(SUPPORTED_ROWS[(index + 1) % len(SUPPORTED_ROWS)], self.risk)

    def cycle_risk(self) -> bool:
        """Move to the next risk level."""
        index = RISK_ORDER.index(self.risk)
        return self._configure(self.rows, RISK_ORDER[(index + 1) % len(RISK_ORDER)])

    def _configure(self, rows: int, risk: RiskLevel) -> bool:
        try:
            return self.simulation.configure(rows, risk)
        except ConfigurationError as exc:
            self.message = str(exc)
            return False

    # Frame loop

    def start(self) -> None:
        self.simulation.start()

    def stop(self) -> None:
        self.simulation.stop()

    def tick(self) -> FrameSnapshot:
        """Advance the simulation one frame."""
        return self.simulation.tick()
