"""Session management: signed session IDs and per-session simulations."""

import json
import logging
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Annotated, Iterator
from uuid import uuid4

from fastapi import Header, HTTPException
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from plinko.errors import ConfigurationError, StorageError
from plinko.game import Simulation
from plinko.geometry import BoardGeometry
from plinko.ledger import Ledger
from plinko.physics import PhysicsConfig
from plinko.storage import InMemoryStore, KeyValueStore, NamespacedStore, create_store

logger = logging.getLogger(__name__)

# Per-session keys (besides the ledger's own)
SESSION_KEY_BOARD = "board"
SESSION_KEY_CREATED_AT = "created_at"


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class _CachedSimulation:
    """A live simulation, the lock serializing its requests and its expiry."""

    def __init__(self, simulation: Simulation) -> None:
        self.simulation = simulation
        self.lock = threading.Lock()
        self.touch()

    def touch(self, ttl: int | None = None) -> None:
        ttl = ttl or config.session_ttl
        self.expiry = datetime.now() + timedelta(seconds=ttl)


# Global backing store and live simulations
_kv_store: KeyValueStore | None = None
_simulations: dict[str, _CachedSimulation] = {}
_simulations_lock = threading.Lock()


def get_kv_store() -> KeyValueStore:
    """
    Get or create the backing store.

    Falls back to an in-memory store when the configured backend cannot be
    opened, so the API still serves requests without durable state.
    """
    global _kv_store
    if _kv_store is not None:
        return _kv_store

    try:
        _kv_store = create_store(
            config.storage.backend,
            path=config.storage.path,
            redis_url=config.redis.url,
            prefix=config.storage.key_prefix,
        )
    except (StorageError, ValueError) as exc:
        logger.warning("Storage backend %r unavailable, using memory: %s",
                       config.storage.backend, exc)
        _kv_store = InMemoryStore()
    return _kv_store


def set_kv_store(store: KeyValueStore | None) -> None:
    """Replace the backing store and drop cached simulations."""
    global _kv_store
    _kv_store = store
    with _simulations_lock:
        _simulations.clear()


def _session_store(session_id: str) -> NamespacedStore:
    return NamespacedStore(get_kv_store(), f"session:{session_id}")


def _build_simulation(store: KeyValueStore) -> Simulation:
    """Assemble a ledger and simulation over a session's store."""
    rows, risk = config.board.rows, config.board.risk
    raw_board = store.get(SESSION_KEY_BOARD)
    if raw_board is not None:
        try:
            board = json.loads(raw_board)
            rows, risk = int(board["rows"]), str(board["risk"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Corrupt stored board config, using defaults")

    ledger = Ledger(
        store,
        starting_balance=config.game.starting_balance,
        trail_capacity=config.game.trail_capacity,
    )
    geometry = BoardGeometry(
        column_count=rows,
        row_count=rows,
        row_spacing=config.board.row_spacing,
        board_width=config.board.width,
        board_height=config.board.height,
    )
    physics = PhysicsConfig(
        gravity=config.physics.gravity,
        horizontal_speed=config.physics.horizontal_speed,
        collision_radius=config.physics.collision_radius,
        push_out=config.physics.push_out,
    )
    try:
        return Simulation(ledger, geometry=geometry, risk=risk, physics=physics)
    except ConfigurationError:
        logger.warning("Stored board %s/%s is not supported, using 16 rows", rows, risk)
        return Simulation(ledger, geometry=BoardGeometry(), physics=physics)


def save_board(session_id: str, simulation: Simulation) -> None:
    """Persist a session's board choice next to its ledger."""
    _session_store(session_id).set(
        SESSION_KEY_BOARD,
        json.dumps({"rows": simulation.geometry.row_count, "risk": simulation.risk.value}),
    )


def create_session() -> str:
    """Create a new session and return its signed token."""
    session_id = str(uuid4())
    _session_store(session_id).set(SESSION_KEY_CREATED_AT, str(int(time.time())))
    return get_session_signer().sign(session_id)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)


def _evict_expired(now: datetime) -> int:
    expired = [sid for sid, entry in _simulations.items() if entry.expiry < now]
    for sid in expired:
        del _simulations[sid]
    return len(expired)


def cleanup_expired(now: datetime | None = None) -> int:
    """
    Drop cached simulations idle for longer than the session TTL.

    A returning session is rebuilt from the store.

    Returns:
        Number of simulations evicted
    """
    with _simulations_lock:
        return _evict_expired(now or datetime.now())


def _cached_simulation(session_id: str) -> _CachedSimulation:
    with _simulations_lock:
        entry = _simulations.get(session_id)
        if entry is None:
            evicted = _evict_expired(datetime.now())
            if evicted:
                logger.info("Evicted %d idle session simulations", evicted)
            entry = _CachedSimulation(_build_simulation(_session_store(session_id)))
            _simulations[session_id] = entry
        else:
            entry.touch()
        return entry


def get_simulation(session_id: str) -> Simulation:
    """Get the live simulation for a session, loading it from the store."""
    return _cached_simulation(session_id).simulation


@contextmanager
def session_simulation(session_id: str) -> Iterator[Simulation]:
    """Hold a session's simulation for one request; requests on a session run one at a time."""
    entry = _cached_simulation(session_id)
    with entry.lock:
        yield entry.simulation


def require_session(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> str:
    """FastAPI dependency: resolve the signed session header to a session ID."""
    session_id = extract_session_id(token)
    if session_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return session_id
