"""Pytest fixtures for Plinko engine tests."""

import pytest
from decimal import Decimal
from random import Random

from plinko.game import Simulation
from plinko.geometry import BoardGeometry
from plinko.ledger import Ledger
from plinko.storage import InMemoryStore


class FakeClock:
    """Manually advanced clock for timer tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def geometry():
    """The 16-row reference board."""
    return BoardGeometry()


@pytest.fixture
def store():
    """An empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def ledger(store):
    """A ledger with the default 1000 starting balance."""
    return Ledger(store, clock=lambda: 1_700_000_000.0)


@pytest.fixture
def clock():
    """A fake monotonic clock starting at zero."""
    return FakeClock()


@pytest.fixture
def simulation(ledger, rng, clock):
    """A running simulation on the reference board."""
    sim = Simulation(ledger, rng=rng, clock=clock)
    sim.start()
    return sim


@pytest.fixture
def poor_simulation(rng, clock):
    """A running simulation whose ledger holds only 5."""
    sim = Simulation(Ledger(InMemoryStore(), starting_balance=Decimal("5")), rng=rng, clock=clock)
    sim.start()
    return sim
