"""Tests for API endpoints."""

import asyncio

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session(client):
    """Headers for a freshly created session."""
    response = await client.post("/api/game/new")
    return {"X-Session-ID": response.json()["session_id"]}


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "storage": "InMemoryStore"}


@pytest.mark.asyncio
async def test_new_game(client):
    response = await client.post("/api/game/new")
    assert response.status_code == 200
    assert "session_id" in response.json()


@pytest.mark.asyncio
async def test_game_state(client, session):
    """A new session starts at 1000 on the reference board."""
    response = await client.get("/api/game/state", headers=session)
    assert response.status_code == 200
    data = response.json()

    assert data["balance"] == 1000.0
    assert data["rows"] == 16
    assert data["risk"] == "medium"
    assert len(data["slots"]) == 17
    assert data["recent_multipliers"] == []
    assert data["balls_in_flight"] == 0


@pytest.mark.asyncio
async def test_missing_session_header(client):
    response = await client.get("/api/game/state")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_invalid_session(client):
    response = await client.get("/api/game/state", headers={"X-Session-ID": "forged"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_drop_ball(client, session):
    """A drop is staked, integrated and settled within the request."""
    response = await client.post("/api/game/drop", json={"wager": 10}, headers=session)
    assert response.status_code == 200
    data = response.json()

    assert 0 <= data["slot_index"] < 17
    assert data["wager"] == 10.0
    assert data["profit"] == data["payout"] - 10.0
    assert data["balance"] == 990.0 + data["payout"]

    state = (await client.get("/api/game/state", headers=session)).json()
    assert state["balance"] == data["balance"]
    assert state["recent_multipliers"] == [data["multiplier"]]


@pytest.mark.asyncio
async def test_drop_insufficient_funds(client, session):
    response = await client.post("/api/game/drop", json={"wager": 5000}, headers=session)
    assert response.status_code == 400

    state = (await client.get("/api/game/state", headers=session)).json()
    assert state["balance"] == 1000.0


@pytest.mark.asyncio
@pytest.mark.parametrize("wager", [0, -5])
async def test_drop_non_positive_wager(client, session, wager):
    response = await client.post("/api/game/drop", json={"wager": wager}, headers=session)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_configure_board(client, session):
    response = await client.post(
        "/api/game/configure",
        json={"rows": 8, "risk": "high"},
        headers=session,
    )
    assert response.status_code == 200
    data = response.json()

    assert data["rows"] == 8
    assert data["risk"] == "high"
    assert data["slots"] == [29, 4, 1.5, 0.3, 0.2, 0.3, 1.5, 4, 29]

    drop = (await client.post("/api/game/drop", json={"wager": 1}, headers=session)).json()
    assert 0 <= drop["slot_index"] < 9


@pytest.mark.asyncio
async def test_configure_unsupported_rows(client, session):
    response = await client.post("/api/game/configure", json={"rows": 10}, headers=session)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_stats_track_drops(client, session):
    for _ in range(3):
        await client.post("/api/game/drop", json={"wager": 10}, headers=session)

    response = await client.get("/api/stats", headers=session)
    assert response.status_code == 200
    data = response.json()

    assert data["wins"] + data["losses"] == 3
    assert len(data["history"]) == 3
    assert len(data["recent_multipliers"]) == 3
    assert data["history"][-1]["cumulative_profit"] == pytest.approx(data["profit"])


@pytest.mark.asyncio
async def test_reset_stats(client, session):
    await client.post("/api/game/drop", json={"wager": 10}, headers=session)

    response = await client.post("/api/stats/reset", headers=session)
    assert response.status_code == 200
    assert response.json()["wins"] + response.json()["losses"] == 0

    state = (await client.get("/api/game/state", headers=session)).json()
    assert state["balance"] == 1000.0
    assert state["recent_multipliers"] == []


@pytest.mark.asyncio
async def test_slot_table(client):
    response = await client.get("/api/stats/slots", params={"rows": 8, "risk": "low"})
    assert response.status_code == 200
    data = response.json()

    assert data["multipliers"] == [5.6, 2.1, 1.1, 1.0, 0.5, 1.0, 1.1, 2.1, 5.6]
    assert sum(data["slot_probabilities"]) == pytest.approx(1.0)
    assert data["house_edge"] == pytest.approx(1.0 - data["rtp"])


@pytest.mark.asyncio
async def test_slot_table_unsupported_rows(client):
    response = await client.get("/api/stats/slots", params={"rows": 10})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_simulate(client):
    response = await client.post("/api/stats/simulate", json={"rows": 8, "drops": 50})
    assert response.status_code == 200
    data = response.json()

    assert data["drops"] == 50
    assert sum(data["slot_counts"]) == 50
    assert len(data["slot_counts"]) == 9
    assert 0.98 < data["theoretical_rtp"] < 1.0


@pytest.mark.asyncio
async def test_simulate_does_not_block_other_requests(client):
    """Long simulations run off the event loop, so health checks still answer."""
    simulation = asyncio.create_task(
        client.post("/api/stats/simulate", json={"rows": 16, "drops": 2000})
    )
    await asyncio.sleep(0.05)

    health = await client.get("/api/health")

    assert health.status_code == 200
    assert not simulation.done()
    response = await simulation
    assert response.status_code == 200
    assert response.json()["drops"] == 2000


@pytest.mark.asyncio
async def test_simulate_limits_drops(client):
    response = await client.post("/api/stats/simulate", json={"drops": 5000})
    assert response.status_code == 422
