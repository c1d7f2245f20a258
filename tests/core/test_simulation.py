"""Tests for the frame-driven simulation loop."""

from decimal import Decimal
from random import Random

import pytest

from plinko.errors import ConfigurationError
from plinko.game import EventType, Simulation, SimulationState
from plinko.geometry import BoardGeometry
from plinko.ledger import Ledger
from plinko.physics import Ball
from plinko.slots import RiskLevel, slot_table_for
from plinko.storage import InMemoryStore


def event_types(simulation):
    return [e.event_type for e in simulation.events.history]


def run_until_landed(simulation, clock, max_frames=5_000):
    """Tick at 60 fps until no ball is in flight."""
    for _ in range(max_frames):
        snapshot = simulation.tick(clock.advance(1 / 60))
        if not simulation.balls:
            return snapshot
    pytest.fail("balls did not land")


class TestLifecycle:
    """Tests for the simulation state machine."""

    def test_initial_state(self, ledger):
        assert Simulation(ledger).state == SimulationState.IDLE

    def test_start(self, ledger):
        sim = Simulation(ledger)
        assert sim.start()
        assert sim.state == SimulationState.RUNNING
        assert not sim.start()

    def test_tick_before_start_does_nothing(self, ledger, clock):
        sim = Simulation(ledger, clock=clock)
        sim.drop(10)
        snapshot = sim.tick(1.0)
        assert snapshot.balls[0].y == -10.0

    def test_table_must_fit_board(self, ledger):
        with pytest.raises(ConfigurationError):
            Simulation(ledger, slot_table=slot_table_for(8))


class TestDrop:
    """Tests for dropping balls."""

    def test_drop_debits_and_spawns(self, simulation):
        ball = simulation.drop(Decimal("10"))
        assert isinstance(ball, Ball)
        assert simulation.ledger.balance == Decimal("990")
        assert simulation.balls == [ball]
        assert EventType.BALL_DROPPED in event_types(simulation)

    def test_insufficient_funds(self, poor_simulation):
        """A rejected drop leaves balance and balls untouched."""
        assert poor_simulation.drop(10) is None
        assert poor_simulation.ledger.balance == Decimal("5")
        assert poor_simulation.balls == []
        assert EventType.INSUFFICIENT_FUNDS in event_types(poor_simulation)

    def test_non_positive_wager(self, simulation):
        assert simulation.drop(0) is None
        assert simulation.ledger.balance == Decimal("1000")
        assert EventType.INVALID_ACTION in event_types(simulation)

    @pytest.mark.parametrize("wager", [Decimal("NaN"), Decimal("Infinity"), "abc", "-5"])
    def test_unusable_wager_rejected(self, simulation, wager):
        """Wagers that are not a finite positive amount never raise."""
        assert simulation.drop(wager) is None
        assert simulation.ledger.balance == Decimal("1000")
        assert simulation.balls == []
        assert EventType.INVALID_ACTION in event_types(simulation)

    def test_concurrent_balls_settle_independently(self, simulation, clock):
        """Several balls in flight each settle exactly once."""
        for _ in range(5):
            simulation.drop(10)
        run_until_landed(simulation, clock)

        assert simulation.ledger.stats.settled == 5
        landed = [e for e in simulation.events.history if e.event_type == EventType.BALL_LANDED]
        assert len({e.data["ball_id"] for e in landed}) == 5
        assert simulation.ledger.balance == Decimal("1000") + simulation.ledger.stats.profit


class TestLanding:
    """Tests for settlement and slot highlighting."""

    def test_landing_settles_and_highlights(self, simulation, clock):
        simulation.drop(10)
        run_until_landed(simulation, clock)

        assert simulation.active_slot is not None
        assert simulation.ledger.recent_multipliers == [
            simulation.slot_table[simulation.active_slot]
        ]
        types = event_types(simulation)
        assert EventType.BALL_LANDED in types
        assert EventType.SLOT_HIGHLIGHTED in types
        assert EventType.BET_SETTLED in types

    def test_highlight_expires(self, simulation, clock):
        simulation.drop(10)
        run_until_landed(simulation, clock)
        assert simulation.active_slot is not None

        simulation.tick(clock.advance(0.6))
        assert simulation.active_slot is None
        assert EventType.SLOT_CLEARED in event_types(simulation)

    def test_snapshot_reports_landings(self, simulation, clock):
        simulation.drop(10)
        landings = []
        for _ in range(5_000):
            landings.extend(simulation.tick(clock.advance(1 / 60)).landings)
            if not simulation.balls:
                break
        assert len(landings) == 1
        assert 0 <= landings[0].slot_index < 17


class TestAutoDrop:
    """Tests for the auto-drop timer."""

    def test_first_drop_after_one_interval(self, simulation, clock):
        simulation.start_auto(1)
        simulation.tick(clock.advance(0.5))
        assert simulation.balls == []
        simulation.tick(clock.advance(0.5))
        assert len(simulation.balls) == 1

    def test_restart_does_not_add_a_timer(self, simulation, clock):
        """Starting auto twice keeps a single schedule."""
        simulation.start_auto(1)
        simulation.start_auto(2)
        assert simulation.auto_wager == Decimal("2")

        simulation.tick(clock.advance(1.0))
        assert len(simulation.balls) == 1
        assert simulation.ledger.balance == Decimal("998")
        started = [e for e in simulation.events.history
                   if e.event_type == EventType.AUTO_DROP_STARTED]
        assert len(started) == 1

    def test_stalled_frame_drops_once(self, simulation, clock):
        simulation.start_auto(1)
        simulation.tick(clock.advance(10.0))
        assert len(simulation.balls) == 1

    def test_stop_auto_cancels_pending_drop(self, simulation, clock):
        simulation.start_auto(1)
        simulation.stop_auto()
        simulation.tick(clock.advance(2.0))
        assert simulation.balls == []
        assert not simulation.is_auto

    def test_toggle(self, simulation):
        assert simulation.toggle_auto(1) is True
        assert simulation.is_auto
        assert simulation.toggle_auto(1) is False
        assert not simulation.is_auto

    def test_keeps_running_without_funds(self, poor_simulation, clock):
        poor_simulation.start_auto(10)
        poor_simulation.tick(clock.advance(1.0))
        poor_simulation.tick(clock.advance(1.0))
        assert poor_simulation.is_auto
        assert event_types(poor_simulation).count(EventType.INSUFFICIENT_FUNDS) == 2

    @pytest.mark.parametrize("wager", [0, Decimal("-1"), Decimal("NaN"), Decimal("Infinity"), "abc"])
    def test_unusable_wager_not_armed(self, simulation, clock, wager):
        assert simulation.start_auto(wager) is False
        assert not simulation.is_auto
        assert EventType.INVALID_ACTION in event_types(simulation)

        simulation.tick(clock.advance(3.0))
        assert simulation.balls == []
        assert simulation.ledger.balance == Decimal("1000")

    def test_unusable_wager_keeps_armed_schedule(self, simulation, clock):
        simulation.start_auto(2)
        assert simulation.start_auto(Decimal("NaN")) is False
        assert simulation.is_auto
        assert simulation.auto_wager == Decimal("2")

        simulation.tick(clock.advance(1.0))
        assert simulation.ledger.balance == Decimal("998")


class TestStop:
    """Tests for teardown."""

    def test_stop_cancels_everything(self, simulation, clock):
        simulation.start_auto(1)
        simulation.drop(10)
        simulation.stop()

        assert simulation.state == SimulationState.STOPPED
        assert simulation.balls == []
        assert not simulation.is_auto
        assert simulation.ledger.balance == Decimal("990")

    def test_nothing_happens_after_stop(self, simulation, clock):
        simulation.stop()
        assert simulation.drop(10) is None
        assert not simulation.start_auto(1)
        simulation.tick(clock.advance(5.0))
        assert simulation.ledger.balance == Decimal("1000")

    def test_stop_twice(self, simulation):
        simulation.stop()
        simulation.stop()
        assert event_types(simulation).count(EventType.SIMULATION_STOPPED) == 1


class TestConfigure:
    """Tests for switching rows and risk."""

    def test_regenerates_board_and_table(self, simulation):
        assert simulation.configure(8, "high")
        assert simulation.geometry.row_count == 8
        assert simulation.geometry.slot_count == 9
        assert simulation.risk == RiskLevel.HIGH
        assert list(simulation.slot_table) == list(slot_table_for(8, RiskLevel.HIGH))

    def test_keeps_board_dimensions(self, simulation):
        simulation.configure(12)
        assert simulation.geometry.board_width == 300.0
        assert simulation.geometry.board_height == 450.0

    def test_refused_while_balls_in_flight(self, simulation):
        simulation.drop(10)
        assert not simulation.configure(8)
        assert simulation.geometry.row_count == 16

    def test_unsupported_rows(self, simulation):
        with pytest.raises(ConfigurationError):
            simulation.configure(10)
        assert simulation.geometry.row_count == 16

    def test_small_board_play(self, ledger, rng):
        sim = Simulation(ledger, geometry=BoardGeometry.for_rows(8), rng=rng)
        landing = sim.play(10)
        assert 0 <= landing.slot_index < 9


class TestPlay:
    """Tests for headless single-ball play."""

    def test_play_settles_one_ball(self, simulation):
        landing = simulation.play(10)
        assert landing is not None
        assert simulation.balls == []
        assert simulation.ledger.balance == Decimal("990") + landing.payout
        assert simulation.ledger.stats.settled == 1

    def test_play_rejected(self, poor_simulation):
        assert poor_simulation.play(10) is None

    def test_force_landing_after_tick_cap(self, simulation, caplog):
        landing = simulation.play(10, max_ticks=1)
        assert landing is not None
        assert simulation.ledger.stats.settled == 1
        assert "did not land" in caplog.text

    def test_play_is_deterministic_with_seed(self):
        first = Simulation(Ledger(InMemoryStore()), rng=Random(7)).play(10)
        second = Simulation(Ledger(InMemoryStore()), rng=Random(7)).play(10)
        assert first.slot_index == second.slot_index
