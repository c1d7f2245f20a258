"""Balance, statistics and recent-multiplier trail with write-through persistence."""

import json
import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from plinko.errors import StorageError
from plinko.landing import LandingResult
from plinko.storage import KeyValueStore

logger = logging.getLogger(__name__)

# Store keys
KEY_BALANCE = "balance"
KEY_STATS = "stats"
KEY_RECENT_MULTIPLIERS = "recent_multipliers"

DEFAULT_STARTING_BALANCE = Decimal("1000")
DEFAULT_TRAIL_CAPACITY = 3


@dataclass(frozen=True)
class HistoryEntry:
    """Profit of one settled ball."""

    time: int  # Epoch milliseconds
    profit: Decimal


@dataclass
class Stats:
    """Running totals across all settled balls."""

    profit: Decimal = Decimal("0")
    wins: int = 0
    losses: int = 0
    history: list[HistoryEntry] = field(default_factory=list)

    @property
    def settled(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "profit": float(self.profit),
            "wins": self.wins,
            "losses": self.losses,
            "history": [{"time": h.time, "profit": float(h.profit)} for h in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stats":
        """
        Rebuild stats from a stored dict.

        Raises:
            ValueError: If a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError("stats blob is not an object")
        wins = data.get("wins", 0)
        losses = data.get("losses", 0)
        if not all(_is_count(n) for n in (wins, losses)):
            raise ValueError("wins/losses must be non-negative integers")
        history = [
            HistoryEntry(time=int(h["time"]), profit=_to_decimal(h["profit"]))
            for h in data.get("history", [])
        ]
        return cls(
            profit=_to_decimal(data.get("profit", 0)),
            wins=wins,
            losses=losses,
            history=history,
        )


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"not a number: {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


class Ledger:
    """
    Balance and statistics for one player.

    State is loaded once from the store and every mutation is written back
    immediately, one key at a time. The three keys are independent: a crash
    between writes can leave the balance updated while stats lag behind.
    """

    def __init__(
        self,
        store: KeyValueStore,
        starting_balance: Decimal = DEFAULT_STARTING_BALANCE,
        trail_capacity: int = DEFAULT_TRAIL_CAPACITY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the ledger from a store.

        Args:
            store: Durable key-value store
            starting_balance: Balance used when none is stored
            trail_capacity: Number of recent multipliers kept
            clock: Wall clock in seconds, used to timestamp history
        """
        if trail_capacity < 1:
            raise ValueError("trail_capacity must be at least 1")

        self.store = store
        self.starting_balance = Decimal(str(starting_balance))
        self.trail_capacity = trail_capacity
        self._clock = clock

        self.balance: Decimal = self._load_balance()
        self.stats: Stats = self._load_stats()
        self.recent_multipliers: list[float] = self._load_trail()

    # Loading

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except StorageError as exc:
            logger.warning("Cannot read %s, using default: %s", key, exc)
            return None

    def _load_balance(self) -> Decimal:
        raw = self._read(KEY_BALANCE)
        if raw is None:
            return self.starting_balance
        try:
            return _to_decimal(raw)
        except ValueError:
            logger.warning("Corrupt stored balance %r, using default", raw)
            return self.starting_balance

    def _load_stats(self) -> Stats:
        raw = self._read(KEY_STATS)
        if raw is None:
            return Stats()
        try:
            return Stats.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValueError, TypeError, KeyError):
            logger.warning("Corrupt stored stats, starting fresh")
            return Stats()

    def _load_trail(self) -> list[float]:
        raw = self._read(KEY_RECENT_MULTIPLIERS)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("trail is not a list")
            trail = [float(_to_decimal(m)) for m in data]
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupt stored multiplier trail, starting empty")
            return []
        return trail[: self.trail_capacity]

    # Persistence

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except StorageError as exc:
            # No rollback: in-memory state stays ahead of the store
            logger.error("Failed to persist %s: %s", key, exc)

    def _save_balance(self) -> None:
        self._write(KEY_BALANCE, str(self.balance))

    def _save_stats(self) -> None:
        self._write(KEY_STATS, json.dumps(self.stats.to_dict()))

    def _save_trail(self) -> None:
        self._write(KEY_RECENT_MULTIPLIERS, json.dumps(self.recent_multipliers))

    # Mutations

    def can_afford(self, wager: Decimal) -> bool:
        """Check if a wager can be placed."""
        wager = Decimal(str(wager))
        return Decimal("0") < wager <= self.balance

    def place_bet(self, wager: Decimal) -> Decimal | None:
        """
        Debit a wager from the balance.

        Args:
            wager: Amount to stake

        Returns:
            The new balance, or None if the wager was rejected (no change)
        """
        if not self.can_afford(wager):
            return None

        self.balance -= Decimal(str(wager))
        self._save_balance()
        return self.balance

    def settle(self, landing: LandingResult) -> None:
        """
        Apply a landing: credit the payout and record the result.

        Args:
            landing: Resolved landing for a ball whose wager was already debited
        """
        self.balance += landing.payout
        self._save_balance()

        self.stats.profit += landing.profit
        if landing.profit > 0:
            self.stats.wins += 1
        else:
            self.stats.losses += 1
        self.stats.history.append(
            HistoryEntry(time=int(self._clock() * 1000), profit=landing.profit)
        )
        self._save_stats()

        self.recent_multipliers = [landing.multiplier, *self.recent_multipliers][
            : self.trail_capacity
        ]
        self._save_trail()

    def reset(self) -> None:
        """Restore the starting balance, clear stats and the trail."""
        self.balance = self.starting_balance
        self.stats = Stats()
        self.recent_multipliers = []
        self._save_balance()
        self._save_stats()
        self._save_trail()

    # Computed properties

    @property
    def win_rate(self) -> float:
        """Win rate percentage."""
        if self.stats.settled == 0:
            return 0.0
        return (self.stats.wins / self.stats.settled) * 100

    def cumulative_profit(self) -> list[tuple[int, Decimal]]:
        """Running profit after each settled ball, for charting."""
        running = Decimal("0")
        series = []
        for entry in self.stats.history:
            running += entry.profit
            series.append((entry.time, running))
        return series
