"""Map a ball's exit position to a slot and a payout."""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Sequence

from plinko.errors import ConfigurationError


@dataclass(frozen=True)
class LandingResult:
    """Outcome of one ball reaching the bottom of the board."""

    slot_index: int
    multiplier: float
    wager: Decimal
    payout: Decimal
    profit: Decimal

    @property
    def is_win(self) -> bool:
        """A landing only counts as a win if it returns more than the wager."""
        return self.profit > 0


def slot_index_for(final_x: float, board_width: float, slot_count: int) -> int:
    """
    Slot under a horizontal position.

    Clamped to ``[0, slot_count - 1]`` so a ball resting exactly on the
    right wall still lands in the last slot.
    """
    index = math.floor((final_x / board_width) * slot_count)
    return max(0, min(slot_count - 1, index))


def payout_for(wager: Decimal, multiplier: float) -> Decimal:
    """Payout truncated to a whole unit: ``floor(wager * multiplier)``."""
    amount = Decimal(str(wager)) * Decimal(str(multiplier))
    return amount.to_integral_value(rounding=ROUND_FLOOR)


def resolve_landing(
    final_x: float,
    board_width: float,
    slot_count: int,
    slot_table: Sequence[float],
    wager: Decimal,
) -> LandingResult:
    """
    Resolve a landing into a slot, multiplier and payout.

    Args:
        final_x: Horizontal position where the ball left the board
        board_width: Board width
        slot_count: Number of bottom slots
        slot_table: Multiplier per slot
        wager: Amount staked on the ball

    Returns:
        LandingResult with payout and profit

    Raises:
        ConfigurationError: If the table length does not match slot_count
    """
    if len(slot_table) != slot_count:
        raise ConfigurationError(
            f"Slot table has {len(slot_table)} entries, board has {slot_count} slots"
        )

    wager = Decimal(str(wager))
    index = slot_index_for(final_x, board_width, slot_count)
    multiplier = slot_table[index]
    payout = payout_for(wager, multiplier)

    return LandingResult(
        slot_index=index,
        multiplier=multiplier,
        wager=wager,
        payout=payout,
        profit=payout - wager,
    )
