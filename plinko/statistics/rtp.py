"""Theoretical return-to-player for a slot table."""

import math
from dataclasses import dataclass

from plinko.slots import SlotTable


@dataclass(frozen=True)
class PayoutProfile:
    """Expected-value summary of a slot table."""

    rtp: float
    house_edge: float
    slot_probabilities: tuple[float, ...]
    hit_rate: float  # Chance a ball returns more than its wager


def binomial_slot_probabilities(rows: int) -> tuple[float, ...]:
    """
    Probability of each slot under the ideal Galton-board model.

    A ball passing ``rows`` pegs goes left or right with equal chance at
    each, so slot ``k`` is reached with probability ``C(rows, k) / 2**rows``.
    """
    total = 2 ** rows
    return tuple(math.comb(rows, k) / total for k in range(rows + 1))


def theoretical_rtp(table: SlotTable) -> float:
    """
    Expected payout per unit wagered.

    Args:
        table: Slot table with ``rows + 1`` entries

    Returns:
        RTP as a fraction (e.g. 0.99)
    """
    probs = binomial_slot_probabilities(len(table) - 1)
    return sum(p * m for p, m in zip(probs, table))


def payout_profile(table: SlotTable) -> PayoutProfile:
    """Full expected-value summary for a table."""
    probs = binomial_slot_probabilities(len(table) - 1)
    rtp = sum(p * m for p, m in zip(probs, table))
    hit_rate = sum(p for p, m in zip(probs, table) if m > 1)
    return PayoutProfile(
        rtp=rtp,
        house_edge=1.0 - rtp,
        slot_probabilities=probs,
        hit_rate=hit_rate,
    )
