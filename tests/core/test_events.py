"""Tests for the event emitter."""

from plinko.game.events import EventEmitter, EventType, SimulationEvent


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.BALL_LANDED)

        emitter.emit_new(EventType.BALL_DROPPED)
        emitter.emit_new(EventType.BALL_LANDED, slot_index=3)

        assert len(received) == 1
        assert received[0].data == {"slot_index": 3}

    def test_wildcard_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit_new(EventType.BALL_DROPPED)
        emitter.emit_new(EventType.SLOT_CLEARED)

        assert [e.event_type for e in received] == [
            EventType.BALL_DROPPED,
            EventType.SLOT_CLEARED,
        ]

    def test_unsubscribe(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.BALL_DROPPED)
        emitter.unsubscribe(received.append, EventType.BALL_DROPPED)
        emitter.emit_new(EventType.BALL_DROPPED)
        assert received == []

    def test_unsubscribe_unknown_handler(self):
        EventEmitter().unsubscribe(print, EventType.BALL_DROPPED)

    def test_history_is_bounded(self):
        emitter = EventEmitter(history_limit=3)
        for _ in range(5):
            emitter.emit_new(EventType.BALL_DROPPED)
        assert len(emitter.history) == 3

    def test_history_is_a_copy(self):
        emitter = EventEmitter()
        emitter.emit_new(EventType.BALL_DROPPED)
        emitter.history.clear()
        assert len(emitter.history) == 1

    def test_clear_history(self):
        emitter = EventEmitter()
        emitter.emit_new(EventType.BALL_DROPPED)
        emitter.clear_history()
        assert emitter.history == []

    def test_str(self):
        event = SimulationEvent(EventType.BET_SETTLED, {"balance": 990.0})
        assert str(event) == "BET_SETTLED: {'balance': 990.0}"
