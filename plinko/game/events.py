"""Simulation events for the event system."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of simulation events."""

    # Ball lifecycle
    BALL_DROPPED = auto()
    BALL_LANDED = auto()
    BET_SETTLED = auto()

    # Presentation cues
    SLOT_HIGHLIGHTED = auto()
    SLOT_CLEARED = auto()

    # Auto-drop
    AUTO_DROP_STARTED = auto()
    AUTO_DROP_STOPPED = auto()

    # Lifecycle and configuration
    SIMULATION_STARTED = auto()
    SIMULATION_STOPPED = auto()
    BOARD_CONFIGURED = auto()

    # Rejections
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()


@dataclass(frozen=True)
class SimulationEvent:
    """
    Immutable simulation event.

    Events are how the engine tells the presentation layer what happened
    without holding a reference to it.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[SimulationEvent], None]


class EventEmitter:
    """
    Simple event emitter.

    Allows subscribing to specific event types or all events. History is
    bounded so a long auto-drop session does not grow without limit.
    """

    def __init__(self, history_limit: int = 500) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[SimulationEvent] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: SimulationEvent) -> None:
        """Record an event and dispatch it to subscribers."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            del self._event_history[: -self._history_limit]

        for handler in list(self._handlers.get(event.event_type, [])):
            handler(event)

        for handler in list(self._handlers.get(None, [])):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> SimulationEvent:
        """Create and emit a new event."""
        event = SimulationEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[SimulationEvent]:
        """Return the event history."""
        return self._event_history.copy()

    def clear_history(self) -> None:
        self._event_history.clear()
