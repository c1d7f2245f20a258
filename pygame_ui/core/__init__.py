"""Core systems for the Plinko UI."""

from pygame_ui.core.engine_adapter import EngineAdapter, open_store

__all__ = [
    "EngineAdapter",
    "open_store",
]
