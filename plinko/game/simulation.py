"""Frame-driven simulation loop with auto-drop and slot highlight timers."""

import logging
import time
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from random import Random
from typing import Callable

from transitions import Machine

from plinko.geometry import BoardGeometry
from plinko.landing import LandingResult, resolve_landing
from plinko.ledger import Ledger
from plinko.physics import Ball, LandingSignal, PhysicsConfig, create_ball, step
from plinko.slots import RiskLevel, SlotTable, slot_table_for
from plinko.game.events import EventEmitter, EventHandler, EventType
from plinko.game.state import SimulationState

logger = logging.getLogger(__name__)

DEFAULT_AUTO_DROP_INTERVAL = 1.0  # seconds
DEFAULT_HIGHLIGHT_DURATION = 0.5  # seconds
DEFAULT_MAX_TICKS = 10_000


@dataclass(frozen=True)
class FrameSnapshot:
    """What the presentation layer needs to draw one frame."""

    balls: tuple[Ball, ...]
    active_slot: int | None
    balance: Decimal
    auto_drop: bool
    landings: tuple[LandingResult, ...] = field(default_factory=tuple)


class Simulation:
    """
    Owns the balls in flight and drives them through the board.

    Everything runs on the caller's thread: ``tick`` fires due timers
    (auto-drop, highlight expiry) and then steps every ball, so ledger
    writes from manual drops, auto-drops and landings never interleave.
    """

    STATES = [s.name.lower() for s in SimulationState]

    TRANSITIONS = [
        {"trigger": "begin", "source": "idle", "dest": "running"},
        {"trigger": "teardown", "source": ["idle", "running"], "dest": "stopped"},
    ]

    def __init__(
        self,
        ledger: Ledger,
        geometry: BoardGeometry | None = None,
        slot_table: SlotTable | None = None,
        risk: RiskLevel | str = RiskLevel.MEDIUM,
        physics: PhysicsConfig | None = None,
        rng: Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        auto_drop_interval: float = DEFAULT_AUTO_DROP_INTERVAL,
        highlight_duration: float = DEFAULT_HIGHLIGHT_DURATION,
    ) -> None:
        """
        Initialize a simulation.

        Args:
            ledger: Balance and stats to settle against
            geometry: Board layout (16-row reference board if not provided)
            slot_table: Multipliers (looked up from rows and risk if not provided)
            risk: Risk level used for the table lookup
            physics: Integration constants
            rng: Random source for spawn positions and bounce jitter
            clock: Monotonic clock in seconds, drives the timers
            auto_drop_interval: Seconds between auto-drops
            highlight_duration: Seconds a landing slot stays highlighted

        Raises:
            ConfigurationError: If the slot table does not fit the board
        """
        self.ledger = ledger
        self.geometry = geometry or BoardGeometry()
        self.risk = RiskLevel.parse(risk)
        self.slot_table = slot_table or slot_table_for(self.geometry.row_count, self.risk)
        self.slot_table.validate(self.geometry.slot_count)
        self.physics = physics or PhysicsConfig()
        self.rng = rng or Random()
        self.auto_drop_interval = auto_drop_interval
        self.highlight_duration = highlight_duration
        self.events = EventEmitter()

        self._clock = clock
        self.balls: list[Ball] = []
        self._wagers: dict[str, Decimal] = {}

        self.active_slot: int | None = None
        self._highlight_deadline: float | None = None

        self._auto_wager: Decimal | None = None
        self._auto_deadline: float | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> SimulationState:
        """Get current lifecycle state as enum."""
        return SimulationState[self._machine_state.upper()]  # type: ignore

    @property
    def is_auto(self) -> bool:
        """Check if auto-drop is armed."""
        return self._auto_deadline is not None

    @property
    def auto_wager(self) -> Decimal | None:
        return self._auto_wager

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to simulation events."""
        self.events.subscribe(handler, event_type)

    # Lifecycle

    def start(self) -> bool:
        """Start ticking. Returns False unless the simulation was idle."""
        if self.state != SimulationState.IDLE:
            return False
        self.begin()
        self.events.emit_new(EventType.SIMULATION_STARTED)
        return True

    def stop(self) -> None:
        """
        Tear the simulation down.

        Cancels the auto-drop and highlight timers and discards balls still
        in flight; their wagers stay debited. Later ``tick`` and ``drop``
        calls do nothing.
        """
        if self.state == SimulationState.STOPPED:
            return

        self.stop_auto()
        self._clear_highlight()
        if self.balls:
            logger.info("Discarding %d balls in flight on stop", len(self.balls))
        self.balls.clear()
        self._wagers.clear()

        self.teardown()
        self.events.emit_new(EventType.SIMULATION_STOPPED)

    # Ball creation

    def drop(self, wager: Decimal | int | float | str) -> Ball | None:
        """
        Stake a wager and drop a new ball.

        Args:
            wager: Amount to stake

        Returns:
            The new ball, or None if the drop was rejected (no state change)
        """
        if self.state == SimulationState.STOPPED:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Simulation is stopped",
            )
            return None

        wager = self._validate_wager(wager)
        if wager is None:
            return None

        if self.ledger.place_bet(wager) is None:
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=float(wager),
                available=float(self.ledger.balance),
            )
            return None

        ball = create_ball(self.geometry, self.rng)
        self.balls.append(ball)
        self._wagers[ball.id] = wager

        self.events.emit_new(
            EventType.BALL_DROPPED,
            ball_id=ball.id,
            wager=float(wager),
            balance=float(self.ledger.balance),
        )
        return ball

    def _validate_wager(self, wager: Decimal | int | float | str) -> Decimal | None:
        """Convert a wager to Decimal, emitting INVALID_ACTION if it is unusable."""
        try:
            amount = Decimal(str(wager))
        except InvalidOperation:
            amount = None
        if amount is None or not amount.is_finite() or amount <= 0:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Wager must be a positive amount",
            )
            return None
        return amount

    # Auto-drop

    def start_auto(self, wager: Decimal | int | float | str) -> bool:
        """
        Arm auto-drop.

        The first drop fires one interval from now. Calling this while
        auto-drop is already armed only updates the wager; there is never
        more than one pending drop. A non-positive or non-finite wager is
        rejected and leaves the current auto-drop setting unchanged.

        Returns:
            True if the wager was accepted and auto-drop is armed
        """
        if self.state == SimulationState.STOPPED:
            return False

        wager = self._validate_wager(wager)
        if wager is None:
            return False

        self._auto_wager = wager
        if self._auto_deadline is None:
            self._auto_deadline = self._clock() + self.auto_drop_interval
            logger.info("Auto-drop started at %s per ball", self._auto_wager)
            self.events.emit_new(EventType.AUTO_DROP_STARTED, wager=float(self._auto_wager))
        return True

    def stop_auto(self) -> None:
        """Disarm auto-drop and cancel the pending drop."""
        if self._auto_deadline is None:
            return
        self._auto_deadline = None
        logger.info("Auto-drop stopped")
        self.events.emit_new(EventType.AUTO_DROP_STOPPED)

    def toggle_auto(self, wager: Decimal | int | float | str) -> bool:
        """Toggle auto-drop. Returns the new auto-drop state."""
        if self.is_auto:
            self.stop_auto()
            return False
        return self.start_auto(wager)

    # Configuration

    def configure(self, rows: int, risk: RiskLevel | str | None = None) -> bool:
        """
        Switch to another rows/risk board.

        The geometry and slot table are regenerated together. Refused while
        balls are in flight, since they were staked against the old table.

        Returns:
            True if the board was reconfigured

        Raises:
            ConfigurationError: If no table exists for the combination
        """
        level = RiskLevel.parse(risk) if risk is not None else self.risk
        if self.balls:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot change the board while balls are in flight",
            )
            return False

        table = slot_table_for(rows, level)
        geometry = replace(self.geometry, column_count=rows, row_count=rows)
        table.validate(geometry.slot_count)

        self.geometry = geometry
        self.slot_table = table
        self.risk = level
        self._clear_highlight()

        logger.info("Board configured: %d rows, %s risk", rows, level.value)
        self.events.emit_new(
            EventType.BOARD_CONFIGURED,
            rows=rows,
            risk=level.value,
            slots=list(table),
        )
        return True

    # Frame loop

    def tick(self, now: float | None = None) -> FrameSnapshot:
        """
        Advance one frame.

        Args:
            now: Current clock reading (read from the clock if not provided)

        Returns:
            Snapshot of the frame, including landings settled during it
        """
        if self.state != SimulationState.RUNNING:
            return self.snapshot()

        now = self._clock() if now is None else now
        self._fire_timers(now)
        landings = self._integrate(now)
        return self.snapshot(landings)

    def _fire_timers(self, now: float) -> None:
        if self._highlight_deadline is not None and now >= self._highlight_deadline:
            self._clear_highlight()

        if self._auto_deadline is not None and now >= self._auto_deadline:
            # Reschedule from now so a stalled frame yields a single drop
            self._auto_deadline = now + self.auto_drop_interval
            self.drop(self._auto_wager)

    def _integrate(self, now: float) -> tuple[LandingResult, ...]:
        landings = []
        in_flight = []
        for ball in self.balls:
            result = step(ball, self.geometry, self.physics, self.rng)
            if isinstance(result, LandingSignal):
                landings.append(self._land(result, now))
            else:
                in_flight.append(result)
        self.balls = in_flight
        return tuple(landings)

    def _land(self, signal: LandingSignal, now: float) -> LandingResult:
        wager = self._wagers.pop(signal.ball.id)
        landing = resolve_landing(
            signal.final_x,
            self.geometry.board_width,
            self.geometry.slot_count,
            self.slot_table,
            wager,
        )
        self.ledger.settle(landing)

        self.active_slot = landing.slot_index
        self._highlight_deadline = now + self.highlight_duration

        logger.debug(
            "Ball %s landed in slot %d (%sx): payout %s",
            signal.ball.id,
            landing.slot_index,
            landing.multiplier,
            landing.payout,
        )
        self.events.emit_new(
            EventType.BALL_LANDED,
            ball_id=signal.ball.id,
            slot_index=landing.slot_index,
            multiplier=landing.multiplier,
            payout=float(landing.payout),
            profit=float(landing.profit),
        )
        self.events.emit_new(EventType.SLOT_HIGHLIGHTED, slot_index=landing.slot_index)
        self.events.emit_new(EventType.BET_SETTLED, balance=float(self.ledger.balance))
        return landing

    def _clear_highlight(self) -> None:
        if self.active_slot is None and self._highlight_deadline is None:
            return
        slot = self.active_slot
        self.active_slot = None
        self._highlight_deadline = None
        self.events.emit_new(EventType.SLOT_CLEARED, slot_index=slot)

    # Headless play

    def play(
        self,
        wager: Decimal | int | float | str,
        max_ticks: int = DEFAULT_MAX_TICKS,
    ) -> LandingResult | None:
        """
        Drop one ball and integrate it until it settles.

        Used where no frame loop exists (HTTP requests, batch analysis).
        Other balls in flight are not advanced. A ball still on the board
        after ``max_ticks`` is settled at its current horizontal position.

        Returns:
            The landing, or None if the drop was rejected
        """
        ball = self.drop(wager)
        if ball is None:
            return None
        self.balls.remove(ball)

        for _ in range(max_ticks):
            result = step(ball, self.geometry, self.physics, self.rng)
            if isinstance(result, LandingSignal):
                return self._land(result, self._clock())
            ball = result

        logger.warning("Ball %s did not land within %d ticks", ball.id, max_ticks)
        return self._land(LandingSignal(ball=ball, final_x=ball.x), self._clock())

    def snapshot(self, landings: tuple[LandingResult, ...] = ()) -> FrameSnapshot:
        """Current state for the presentation layer."""
        return FrameSnapshot(
            balls=tuple(self.balls),
            active_slot=self.active_slot,
            balance=self.ledger.balance,
            auto_drop=self.is_auto,
            landings=landings,
        )
