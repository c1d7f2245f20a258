"""Plinko ball physics and settlement engine - 100% UI-agnostic."""

from plinko.errors import PlinkoError, ConfigurationError, StorageError
from plinko.geometry import BoardGeometry, peg_position
from plinko.slots import RiskLevel, SlotTable, slot_table_for, REFERENCE_TABLE
from plinko.physics import Ball, LandingSignal, PhysicsConfig, create_ball, step
from plinko.landing import LandingResult, resolve_landing
from plinko.ledger import Ledger, Stats
from plinko.storage import KeyValueStore, InMemoryStore, JsonFileStore

__all__ = [
    "PlinkoError",
    "ConfigurationError",
    "StorageError",
    "BoardGeometry",
    "peg_position",
    "RiskLevel",
    "SlotTable",
    "slot_table_for",
    "REFERENCE_TABLE",
    "Ball",
    "LandingSignal",
    "PhysicsConfig",
    "create_ball",
    "step",
    "LandingResult",
    "resolve_landing",
    "Ledger",
    "Stats",
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
]
