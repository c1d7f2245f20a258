"""Game API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.schemas import (
    ConfigureRequest,
    DropRequest,
    DropResponse,
    GameStateResponse,
)
from api.session import (
    create_session,
    require_session,
    save_board,
    session_simulation,
)
from config import config
from plinko.errors import ConfigurationError
from plinko.game import Simulation

router = APIRouter()

SessionId = Annotated[str, Depends(require_session)]


def _game_state_response(simulation: Simulation) -> GameStateResponse:
    """Convert simulation state to response."""
    return GameStateResponse(
        balance=float(simulation.ledger.balance),
        rows=simulation.geometry.row_count,
        risk=simulation.risk.value,
        slots=list(simulation.slot_table),
        recent_multipliers=list(simulation.ledger.recent_multipliers),
        balls_in_flight=len(simulation.balls),
    )


@router.post("/new")
def new_game() -> dict[str, str]:
    """Create a new game session with a fresh balance."""
    return {"session_id": create_session()}


@router.get("/state")
def get_state(session_id: SessionId) -> GameStateResponse:
    """Get current balance and board."""
    with session_simulation(session_id) as simulation:
        return _game_state_response(simulation)


@router.post("/drop")
def drop_ball(request: DropRequest, session_id: SessionId) -> DropResponse:
    """Stake a wager, drop one ball and settle it."""
    with session_simulation(session_id) as simulation:
        if request.wager > simulation.ledger.balance:
            raise HTTPException(status_code=400, detail="Insufficient funds")

        landing = simulation.play(request.wager, max_ticks=config.physics.max_ticks)
        if landing is None:
            raise HTTPException(status_code=400, detail="Drop rejected")

        return DropResponse(
            slot_index=landing.slot_index,
            multiplier=landing.multiplier,
            wager=float(landing.wager),
            payout=float(landing.payout),
            profit=float(landing.profit),
            balance=float(simulation.ledger.balance),
        )


@router.post("/configure")
def configure_board(request: ConfigureRequest, session_id: SessionId) -> GameStateResponse:
    """Switch rows and risk; the slot table is regenerated to match."""
    with session_simulation(session_id) as simulation:
        try:
            changed = simulation.configure(request.rows, request.risk)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if not changed:
            raise HTTPException(status_code=409, detail="Balls still in flight")

        save_board(session_id, simulation)
        return _game_state_response(simulation)
