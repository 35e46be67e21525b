"""
Tests for the in-memory session store.

Validates:
1. Sessions are created, fetched and deleted by id
2. Sessions idle longer than the TTL are pruned, fresh ones survive
"""

import asyncio
from datetime import datetime, timedelta

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from backend.session_store import InMemorySimulationStore


class TestSessionLifecycle:

    def test_create_and_get(self):
        async def scenario():
            store = InMemorySimulationStore()
            session = await store.create_session()
            return session, await store.get_session(session.id)

        created, fetched = asyncio.run(scenario())
        assert fetched is created
        assert created.simulator.components == []

    def test_delete(self):
        async def scenario():
            store = InMemorySimulationStore()
            session = await store.create_session()
            first = await store.delete_session(session.id)
            second = await store.delete_session(session.id)
            return first, second, await store.get_session(session.id)

        assert asyncio.run(scenario()) == (True, False, None)


class TestExpiry:

    def test_idle_session_pruned(self):
        async def scenario():
            store = InMemorySimulationStore(ttl_hours=24)
            stale = await store.create_session()
            fresh = await store.create_session()
            stale.updated_at = datetime.utcnow() - timedelta(hours=25)
            pruned = await store.cleanup_expired()
            return pruned, await store.get_session(stale.id), await store.get_session(fresh.id)

        pruned, stale, fresh = asyncio.run(scenario())
        assert pruned == 1
        assert stale is None
        assert fresh is not None

    def test_touch_keeps_session_alive(self):
        async def scenario():
            store = InMemorySimulationStore(ttl_hours=1)
            session = await store.create_session()
            session.updated_at = datetime.utcnow() - timedelta(hours=2)
            await store.touch_session(session)
            return await store.cleanup_expired(), await store.get_session(session.id)

        pruned, session = asyncio.run(scenario())
        assert pruned == 0
        assert session is not None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
