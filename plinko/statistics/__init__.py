"""Payout statistics for slot tables."""

from plinko.statistics.rtp import (
    PayoutProfile,
    binomial_slot_probabilities,
    payout_profile,
    theoretical_rtp,
)
from plinko.statistics.monte_carlo import SimulationReport, simulate_landings

__all__ = [
    "PayoutProfile",
    "binomial_slot_probabilities",
    "payout_profile",
    "theoretical_rtp",
    "SimulationReport",
    "simulate_landings",
]
