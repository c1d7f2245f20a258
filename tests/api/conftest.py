"""Pytest fixtures for API tests."""

import pytest

from api.session import set_kv_store
from plinko.storage import InMemoryStore


@pytest.fixture(autouse=True)
def kv_store():
    """Give every test a fresh in-memory backing store."""
    store = InMemoryStore()
    set_kv_store(store)
    yield store
    set_kv_store(None)
