"""Pydantic schemas for API requests and responses."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


RowsOption = Literal[8, 12, 16]
RiskOption = Literal["low", "medium", "high"]


# Game schemas
class DropRequest(BaseModel):
    """Request to drop a ball."""

    wager: Decimal = Field(..., gt=0, description="Amount staked on the ball")


class ConfigureRequest(BaseModel):
    """Request to switch the board layout."""

    rows: RowsOption = 16
    risk: RiskOption = "medium"


class DropResponse(BaseModel):
    """Settled ball."""

    slot_index: int
    multiplier: float
    wager: float
    payout: float
    profit: float
    balance: float


class GameStateResponse(BaseModel):
    """Current board and balance."""

    balance: float
    rows: int
    risk: str
    slots: list[float]
    recent_multipliers: list[float]
    balls_in_flight: int


# Stats schemas
class HistoryPoint(BaseModel):
    """One settled ball in the profit history."""

    time: int
    profit: float
    cumulative_profit: float


class StatsResponse(BaseModel):
    """Running statistics for a session."""

    profit: float
    wins: int
    losses: int
    win_rate: float
    recent_multipliers: list[float]
    history: list[HistoryPoint]


class SlotTableResponse(BaseModel):
    """Slot table with its theoretical payout profile."""

    rows: int
    risk: str
    multipliers: list[float]
    slot_probabilities: list[float]
    rtp: float
    house_edge: float
    hit_rate: float


class SimulateRequest(BaseModel):
    """Request for an empirical slot distribution."""

    rows: RowsOption = 16
    risk: RiskOption = "medium"
    drops: int = Field(default=500, ge=1, le=2000)


class SimulateResponse(BaseModel):
    """Empirical slot distribution from simulated drops."""

    rows: int
    risk: str
    drops: int
    slot_counts: list[int]
    slot_frequencies: list[float]
    empirical_rtp: float
    theoretical_rtp: float
