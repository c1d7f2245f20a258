"""Slot multiplier tables."""

from dataclasses import dataclass
from enum import Enum

from plinko.errors import ConfigurationError


class RiskLevel(Enum):
    """Payout volatility setting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value: "str | RiskLevel") -> "RiskLevel":
        """Accept either an enum member or its (case-insensitive) value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown risk level: {value!r}") from None


# Published multiplier curves, keyed by peg rows then risk.
# Each row count N has N + 1 slots.
MULTIPLIER_TABLES: dict[int, dict[RiskLevel, tuple[float, ...]]] = {
    8: {
        RiskLevel.LOW: (5.6, 2.1, 1.1, 1.0, 0.5, 1.0, 1.1, 2.1, 5.6),
        RiskLevel.MEDIUM: (13, 3, 1.3, 0.7, 0.4, 0.7, 1.3, 3, 13),
        RiskLevel.HIGH: (29, 4, 1.5, 0.3, 0.2, 0.3, 1.5, 4, 29),
    },
    12: {
        RiskLevel.LOW: (10, 3, 1.6, 1.4, 1.1, 1.0, 0.5, 1.0, 1.1, 1.4, 1.6, 3, 10),
        RiskLevel.MEDIUM: (33, 11, 4, 2, 1.1, 0.6, 0.3, 0.6, 1.1, 2, 4, 11, 33),
        RiskLevel.HIGH: (170, 24, 8.1, 2, 0.7, 0.2, 0.2, 0.2, 0.7, 2, 8.1, 24, 170),
    },
    16: {
        RiskLevel.LOW: (16, 9, 2, 1.4, 1.4, 1.2, 1.1, 1.0, 0.5, 1.0, 1.1, 1.2, 1.4, 1.4, 2, 9, 16),
        RiskLevel.MEDIUM: (110, 41, 10, 5, 3, 1.5, 1, 0.5, 0.3, 0.5, 1, 1.5, 3, 5, 10, 41, 110),
        RiskLevel.HIGH: (1000, 130, 26, 9, 4, 2, 0.2, 0.2, 0.2, 0.2, 0.2, 2, 4, 9, 26, 130, 1000),
    },
}

SUPPORTED_ROWS: tuple[int, ...] = tuple(sorted(MULTIPLIER_TABLES))


@dataclass(frozen=True)
class SlotTable:
    """Ordered multipliers, one per bottom slot."""

    multipliers: tuple[float, ...]

    def __post_init__(self) -> None:
        if not self.multipliers:
            raise ConfigurationError("Slot table cannot be empty")

    def __len__(self) -> int:
        return len(self.multipliers)

    def __getitem__(self, index: int) -> float:
        return self.multipliers[index]

    def __iter__(self):
        return iter(self.multipliers)

    @property
    def is_symmetric(self) -> bool:
        return self.multipliers == self.multipliers[::-1]

    @property
    def max_multiplier(self) -> float:
        return max(self.multipliers)

    def validate(self, slot_count: int) -> None:
        """
        Check the table against a board's slot count.

        Raises:
            ConfigurationError: If the lengths differ
        """
        if len(self.multipliers) != slot_count:
            raise ConfigurationError(
                f"Slot table has {len(self.multipliers)} entries, board has {slot_count} slots"
            )


REFERENCE_TABLE = SlotTable(MULTIPLIER_TABLES[16][RiskLevel.MEDIUM])


def slot_table_for(rows: int, risk: "str | RiskLevel" = RiskLevel.MEDIUM) -> SlotTable:
    """
    Look up the multiplier table for a board configuration.

    Args:
        rows: Number of peg rows (8, 12 or 16)
        risk: Risk level

    Returns:
        Table with ``rows + 1`` multipliers

    Raises:
        ConfigurationError: If no table is published for the combination
    """
    level = RiskLevel.parse(risk)
    by_risk = MULTIPLIER_TABLES.get(rows)
    if by_risk is None:
        raise ConfigurationError(
            f"No multiplier table for {rows} rows (supported: {', '.join(map(str, SUPPORTED_ROWS))})"
        )
    return SlotTable(by_risk[level])
