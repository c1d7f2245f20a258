"""Simulation loop and event system."""

from plinko.game.events import SimulationEvent, EventType, EventEmitter
from plinko.game.state import SimulationState
from plinko.game.simulation import Simulation, FrameSnapshot

__all__ = [
    "SimulationEvent",
    "EventType",
    "EventEmitter",
    "SimulationState",
    "Simulation",
    "FrameSnapshot",
]
