"""Board geometry: peg lattice and slot boundaries."""

import math
from dataclasses import dataclass
from typing import Iterator

# Reference board, in board-local units
DEFAULT_BOARD_WIDTH = 300.0
DEFAULT_BOARD_HEIGHT = 450.0
DEFAULT_ROW_SPACING = 25.0
DEFAULT_COLUMN_COUNT = 16


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward."""
    return math.floor(value + 0.5)


def peg_position(
    row: int,
    col: int,
    column_count: int,
    board_width: float,
    row_spacing: float,
) -> tuple[float, float]:
    """
    Get the position of a peg in the triangular lattice.

    Odd rows are shifted right by half a stride. Rendering and collision
    both go through this function so the two always agree.

    Args:
        row: Row index (0-indexed, top row first)
        col: Column index within the row
        column_count: Number of pegs in an even row
        board_width: Board width in board units
        row_spacing: Vertical distance between rows

    Returns:
        (x, y) of the peg centre
    """
    stride = board_width / (column_count - 1)
    x = (col + (0.5 if row % 2 else 0.0)) * stride
    y = (row + 1) * row_spacing
    return x, y


@dataclass(frozen=True)
class Peg:
    """A single peg on the board."""

    row: int
    col: int
    x: float
    y: float


@dataclass(frozen=True)
class BoardGeometry:
    """
    Immutable board layout for one rows/columns configuration.

    The number of bottom slots is always ``column_count + 1``.
    """

    column_count: int = DEFAULT_COLUMN_COUNT
    row_count: int = DEFAULT_COLUMN_COUNT
    row_spacing: float = DEFAULT_ROW_SPACING
    board_width: float = DEFAULT_BOARD_WIDTH
    board_height: float = DEFAULT_BOARD_HEIGHT

    def __post_init__(self) -> None:
        if self.column_count < 2:
            raise ValueError("column_count must be at least 2")
        if self.row_count < 1:
            raise ValueError("row_count must be at least 1")

    @classmethod
    def for_rows(cls, rows: int, **overrides) -> "BoardGeometry":
        """Board with as many columns as peg rows."""
        return cls(column_count=rows, row_count=rows, **overrides)

    @property
    def stride(self) -> float:
        """Horizontal distance between neighbouring pegs in a row."""
        return self.board_width / (self.column_count - 1)

    @property
    def slot_count(self) -> int:
        """Number of landing slots at the bottom of the board."""
        return self.column_count + 1

    @property
    def slot_width(self) -> float:
        return self.board_width / self.slot_count

    def peg_position(self, row: int, col: int) -> tuple[float, float]:
        """Peg position for this board."""
        return peg_position(row, col, self.column_count, self.board_width, self.row_spacing)

    def pegs(self) -> Iterator[Peg]:
        """Iterate every peg, row by row. Odd rows hold one peg fewer."""
        for row in range(self.row_count):
            for col in range(self.column_count - row % 2):
                x, y = self.peg_position(row, col)
                yield Peg(row=row, col=col, x=x, y=y)

    def slot_bounds(self, index: int) -> tuple[float, float]:
        """
        Horizontal span of a slot.

        Args:
            index: Slot index

        Returns:
            (left, right) edges in board units
        """
        if not 0 <= index < self.slot_count:
            raise IndexError(f"slot {index} out of range 0..{self.slot_count - 1}")
        return index * self.slot_width, (index + 1) * self.slot_width

    def nearest_peg(self, x: float, y: float) -> tuple[float, float, int]:
        """
        Approximate the peg closest to a point.

        Rounds ``x`` to the column stride and ``y`` to the row spacing. The
        odd-row offset is ignored, so near an offset row this lands between
        two real pegs.

        Returns:
            (peg_x, peg_y, lattice_row) where lattice_row is ``y /
            row_spacing`` rounded half up; real peg rows are ``1..row_count``.
        """
        lattice_row = _round_half_up(y / self.row_spacing)
        peg_x = _round_half_up(x / self.stride) * self.stride
        peg_y = lattice_row * self.row_spacing
        return peg_x, peg_y, lattice_row

    def has_peg_row(self, lattice_row: int) -> bool:
        """Check whether a rounded lattice row holds real pegs."""
        return 1 <= lattice_row <= self.row_count

    def slot_at(self, x: float) -> int:
        """Slot index under a horizontal position, clamped to the board."""
        index = math.floor(x / self.board_width * self.slot_count)
        return max(0, min(self.slot_count - 1, index))
