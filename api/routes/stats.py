"""Statistics API endpoints."""

from random import Random
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.schemas import (
    HistoryPoint,
    RiskOption,
    SimulateRequest,
    SimulateResponse,
    SlotTableResponse,
    StatsResponse,
)
from api.session import require_session, session_simulation
from plinko.errors import ConfigurationError
from plinko.geometry import BoardGeometry
from plinko.ledger import Ledger
from plinko.slots import slot_table_for
from plinko.statistics import payout_profile, simulate_landings, theoretical_rtp

router = APIRouter()

SessionId = Annotated[str, Depends(require_session)]


def _stats_response(ledger: Ledger) -> StatsResponse:
    """Convert ledger state to response."""
    history = [
        HistoryPoint(time=entry.time, profit=float(entry.profit), cumulative_profit=float(total))
        for entry, (_, total) in zip(ledger.stats.history, ledger.cumulative_profit())
    ]
    return StatsResponse(
        profit=float(ledger.stats.profit),
        wins=ledger.stats.wins,
        losses=ledger.stats.losses,
        win_rate=ledger.win_rate,
        recent_multipliers=list(ledger.recent_multipliers),
        history=history,
    )


@router.get("")
def get_stats(session_id: SessionId) -> StatsResponse:
    """Get profit, win/loss counts and profit history."""
    with session_simulation(session_id) as simulation:
        return _stats_response(simulation.ledger)


@router.post("/reset")
def reset_stats(session_id: SessionId) -> StatsResponse:
    """Restore the starting balance and clear statistics."""
    with session_simulation(session_id) as simulation:
        simulation.ledger.reset()
        return _stats_response(simulation.ledger)


@router.get("/slots")
async def get_slot_table(rows: int = 16, risk: RiskOption = "medium") -> SlotTableResponse:
    """Get a slot table and its theoretical payout profile."""
    try:
        table = slot_table_for(rows, risk)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    profile = payout_profile(table)
    return SlotTableResponse(
        rows=rows,
        risk=risk,
        multipliers=list(table),
        slot_probabilities=list(profile.slot_probabilities),
        rtp=profile.rtp,
        house_edge=profile.house_edge,
        hit_rate=profile.hit_rate,
    )


@router.post("/simulate")
def simulate(request: SimulateRequest) -> SimulateResponse:
    """Run balls through the board physics and report where they land."""
    table = slot_table_for(request.rows, request.risk)
    report = simulate_landings(
        request.drops,
        BoardGeometry.for_rows(request.rows),
        table,
        rng=Random(),
    )
    return SimulateResponse(
        rows=request.rows,
        risk=request.risk,
        drops=report.drops,
        slot_counts=list(report.slot_counts),
        slot_frequencies=list(report.slot_frequencies),
        empirical_rtp=report.rtp,
        theoretical_rtp=theoretical_rtp(table),
    )
