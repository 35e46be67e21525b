import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from engine.config import DEFAULT_CONFIG, SimulationConfig
from engine.simulation import CircuitSimulator

logger = logging.getLogger(__name__)


@dataclass
class SimulationSession:
    """One breadboard: a simulator plus the lock that serializes calls into it."""
    simulator: CircuitSimulator
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


class InMemorySimulationStore:
    def __init__(self, config: Optional[SimulationConfig] = None, ttl_hours: float = 24):
        self.config = config or DEFAULT_CONFIG
        self._sessions: dict[str, SimulationSession] = {}
        self._lock = asyncio.Lock()
        self._ttl = timedelta(hours=ttl_hours)

    async def create_session(self) -> SimulationSession:
        session = SimulationSession(simulator=CircuitSimulator(self.config))
        async with self._lock:
            self._sessions[session.id] = session
        logger.info("Created simulation session %s", session.id)
        return session

    async def get_session(self, session_id: str) -> Optional[SimulationSession]:
        async with self._lock:
            return self._sessions.get(session_id)

    async def touch_session(self, session: SimulationSession) -> None:
        session.updated_at = datetime.utcnow()

    async def delete_session(self, session_id: str) -> bool:
        async with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Deleted simulation session %s", session_id)
        return removed

    async def cleanup_expired(self) -> int:
        now = datetime.utcnow()
        async with self._lock:
            expired = [sid for sid, s in self._sessions.items() if now - s.updated_at > self._ttl]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Pruned %d expired simulation sessions", len(expired))
        return len(expired)
