"""Durable key-value stores backing the ledger."""

import json
import logging
import os
from abc import ABC, abstractmethod

import redis

from plinko.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Narrow string-to-string store: ``get`` and ``set`` only."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write a value immediately."""
        ...


class InMemoryStore(KeyValueStore):
    """Process-local store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Store persisted as a single JSON object on disk.

    The file is read once on construction and rewritten on every ``set``.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            # Unreadable file: start empty, the next write replaces it
            logger.warning("Ignoring unreadable store file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc


class RedisStore(KeyValueStore):
    """Redis-backed store."""

    def __init__(self, client: "redis.Redis", prefix: str = "plinko:") -> None:
        self._redis = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "plinko:") -> "RedisStore":
        """Connect to Redis and fail fast if it is unreachable."""
        client = redis.Redis.from_url(url, decode_responses=True)
        try:
            client.ping()
        except redis.RedisError as exc:
            raise StorageError(f"Redis unreachable at {url}: {exc}") from exc
        return cls(client, prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis read failed for {key}: {exc}") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis write failed for {key}: {exc}") from exc


class NamespacedStore(KeyValueStore):
    """View of another store with every key prefixed (one per session)."""

    def __init__(self, inner: KeyValueStore, namespace: str) -> None:
        self._inner = inner
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        return self._inner.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._inner.set(self._key(key), value)


def create_store(
    backend: str,
    path: str | None = None,
    redis_url: str | None = None,
    prefix: str = "plinko:",
) -> KeyValueStore:
    """
    Build a store by backend name.

    Args:
        backend: "memory", "file" or "redis"
        path: JSON file path for the file backend
        redis_url: Connection URL for the redis backend
        prefix: Key prefix for the redis backend

    Raises:
        ValueError: If the backend is unknown or misconfigured
        StorageError: If Redis cannot be reached
    """
    if backend == "memory":
        return InMemoryStore()
    if backend == "file":
        if not path:
            raise ValueError("file backend needs a path")
        return JsonFileStore(path)
    if backend == "redis":
        if not redis_url:
            raise ValueError("redis backend needs a URL")
        return RedisStore.from_url(redis_url, prefix=prefix)
    raise ValueError(f"Unknown storage backend: {backend!r}")
