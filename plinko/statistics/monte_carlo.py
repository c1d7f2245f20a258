"""Empirical slot distribution by running balls through the integrator."""

from collections import Counter
from dataclasses import dataclass
from random import Random

from plinko.geometry import BoardGeometry
from plinko.landing import slot_index_for
from plinko.physics import LandingSignal, PhysicsConfig, create_ball, step
from plinko.slots import SlotTable


@dataclass(frozen=True)
class SimulationReport:
    """Aggregated outcome of a batch of simulated drops."""

    drops: int
    slot_counts: tuple[int, ...]
    rtp: float

    @property
    def slot_frequencies(self) -> tuple[float, ...]:
        if self.drops == 0:
            return tuple(0.0 for _ in self.slot_counts)
        return tuple(c / self.drops for c in self.slot_counts)


def simulate_landings(
    drops: int,
    geometry: BoardGeometry,
    table: SlotTable,
    physics: PhysicsConfig | None = None,
    rng: Random | None = None,
    max_ticks: int = 10_000,
) -> SimulationReport:
    """
    Drop balls through the board without touching any ledger.

    Args:
        drops: Number of balls
        geometry: Board layout
        table: Slot multipliers, used for the empirical RTP
        physics: Integration constants
        rng: Random source
        max_ticks: Per-ball tick cap; a ball still on the board is counted
            in the slot under it

    Returns:
        SimulationReport with per-slot counts and empirical RTP
    """
    if drops < 0:
        raise ValueError("drops must be non-negative")

    table.validate(geometry.slot_count)
    physics = physics or PhysicsConfig()
    rng = rng or Random()
    counts: Counter[int] = Counter()

    for _ in range(drops):
        ball = create_ball(geometry, rng)
        final_x = None
        for _ in range(max_ticks):
            result = step(ball, geometry, physics, rng)
            if isinstance(result, LandingSignal):
                final_x = result.final_x
                break
            ball = result
        if final_x is None:
            final_x = ball.x
        counts[slot_index_for(final_x, geometry.board_width, geometry.slot_count)] += 1

    slot_counts = tuple(counts.get(i, 0) for i in range(geometry.slot_count))
    returned = sum(c * m for c, m in zip(slot_counts, table))
    rtp = returned / drops if drops else 0.0
    return SimulationReport(drops=drops, slot_counts=slot_counts, rtp=rtp)
