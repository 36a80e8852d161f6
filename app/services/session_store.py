"""Redis-backed storage for score sessions."""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from app.config import get_settings
from app.models.answers import FormAnswers
from app.models.score import ScoreState
from app.scoring.session import ScoreSession
from app.services.redis_cache import CacheKeys, RedisCache, get_redis_cache

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StoredSession(BaseModel):
    """Serialized form of a ``ScoreSession``."""
    id: str
    answers: FormAnswers = Field(default_factory=FormAnswers)
    state: ScoreState = Field(default_factory=ScoreState)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def to_session(self) -> ScoreSession:
        return ScoreSession(state=self.state, answers=self.answers)


class SessionStore:
    """Create, load and persist score sessions with a sliding TTL."""

    def __init__(self, cache: RedisCache, ttl_seconds: int):
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    def create(self) -> StoredSession:
        record = StoredSession(id=uuid4().hex)
        self.cache.set(CacheKeys.session(record.id), record, self.ttl_seconds)
        logger.info(f"Created score session {record.id}")
        return record

    def load(self, session_id: str) -> Optional[StoredSession]:
        return self.cache.get(CacheKeys.session(session_id), StoredSession)

    def save(self, record: StoredSession, session: ScoreSession) -> StoredSession:
        """Write the session's latest answers and state back to the store."""
        updated = record.model_copy(update={
            "answers": session.answers,
            "state": session.state,
            "updated_at": _now(),
        })
        self.cache.set(CacheKeys.session(record.id), updated, self.ttl_seconds)
        return updated

    def delete(self, session_id: str) -> bool:
        return self.cache.delete(CacheKeys.session(session_id))


def get_session_store() -> SessionStore:
    """Session store bound to the shared Redis cache."""
    return SessionStore(get_redis_cache(), get_settings().session_ttl)
