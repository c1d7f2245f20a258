"""Simulation lifecycle states."""

from enum import Enum, auto


class SimulationState(Enum):
    """
    Simulation lifecycle.

    Flow: IDLE → RUNNING → STOPPED
    """

    # Created, not ticking yet
    IDLE = auto()

    # Ticking balls and timers
    RUNNING = auto()

    # Torn down, no further callbacks
    STOPPED = auto()

    def __str__(self) -> str:
        return self.name.title()
