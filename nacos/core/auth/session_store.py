"""Server-side session storage.

A ``ServerSession`` is the per-browser key/value state (identity, CSRF token,
flash message). Stores hand out copies: every ``load`` returns a fresh object
and every ``save`` persists a snapshot, so two requests racing on the same id
never share a mutable view and the last write wins.
"""

from __future__ import annotations

import copy
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from flask.sessions import SessionMixin
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

from nacos.core.auth.constants import (
    SESSION_KEY_IDENTITY_ID,
    SESSION_STATE_ACTIVE,
    SESSION_STATE_EXPIRED,
    SESSION_STATE_INVALIDATED,
)
from nacos.core.auth.models import AuthSession
from nacos.extensions import db

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


class ServerSession(CallbackDict, SessionMixin):
    """Session mapping plus the metadata the stores and the authority need."""

    def __init__(
        self,
        initial: Optional[dict] = None,
        sid: Optional[str] = None,
        created_at: Optional[datetime] = None,
        last_activity: Optional[datetime] = None,
        new: bool = False,
    ) -> None:
        def on_update(self) -> None:
            self.modified = True

        super().__init__(initial, on_update)
        now = datetime.utcnow()
        self.sid = sid or generate_session_id()
        self.created_at = created_at or now
        self.last_activity = last_activity or self.created_at
        self.new = new
        self.modified = False
        self.destroyed = False
        self.regenerated_from: Optional[str] = None

    def regenerate(self) -> str:
        """Move the data to a fresh id. Returns the new id."""
        if self.regenerated_from is None and not self.new:
            self.regenerated_from = self.sid
        self.sid = generate_session_id()
        self.modified = True
        return self.sid

    def destroy(self) -> None:
        """Invalidate the session and clear every attribute."""
        self.clear()
        self.destroyed = True

    def restart(self, now: Optional[datetime] = None) -> None:
        """Keep the current data but start over as a new, never-stored session."""
        self.sid = generate_session_id()
        self.created_at = now or datetime.utcnow()
        self.last_activity = self.created_at
        self.new = True
        self.destroyed = False
        self.regenerated_from = None
        self.modified = True

    def touch(self, now: Optional[datetime] = None) -> None:
        self.last_activity = now or datetime.utcnow()

    def is_expired(
        self,
        idle_seconds: int,
        absolute_seconds: int,
        now: Optional[datetime] = None,
    ) -> bool:
        now = now or datetime.utcnow()
        if idle_seconds and now - self.last_activity > timedelta(seconds=idle_seconds):
            return True
        if absolute_seconds and now - self.created_at > timedelta(seconds=absolute_seconds):
            return True
        return False

    def snapshot(self) -> dict:
        return copy.deepcopy(dict(self))

    def __repr__(self) -> str:
        return f"<ServerSession {self.sid[:8]}... keys={sorted(self.keys())}>"


class SessionStore(ABC):
    """Storage contract for server-side sessions."""

    def create(self) -> ServerSession:
        return ServerSession(sid=generate_session_id(), new=True)

    @abstractmethod
    def load(self, sid: str) -> Optional[ServerSession]:
        """Return a fresh copy of the stored session, or None."""

    @abstractmethod
    def save(self, session: ServerSession) -> None:
        """Persist a snapshot of the session under its current id."""

    @abstractmethod
    def destroy(self, sid: str) -> None:
        """Invalidate the stored session; later loads return None."""

    @abstractmethod
    def purge_expired(
        self,
        idle_seconds: int,
        absolute_seconds: int,
        now: Optional[datetime] = None,
    ) -> int:
        """Drop sessions past their idle timeout or absolute lifetime."""

    def prune(self, retention_seconds: int, now: Optional[datetime] = None) -> int:
        """Delete ended sessions kept longer than ``retention_seconds``.

        Stores that drop sessions outright on expiry have nothing to prune.
        """
        return 0


@dataclass
class _MemoryRecord:
    data: dict
    created_at: datetime
    last_activity: datetime


class MemorySessionStore(SessionStore):
    """Dict-backed store for tests and single-process development."""

    def __init__(self) -> None:
        self._records: Dict[str, _MemoryRecord] = {}

    def load(self, sid: str) -> Optional[ServerSession]:
        record = self._records.get(sid) if sid else None
        if record is None:
            return None
        return ServerSession(
            copy.deepcopy(record.data),
            sid=sid,
            created_at=record.created_at,
            last_activity=record.last_activity,
        )

    def save(self, session: ServerSession) -> None:
        if session.regenerated_from:
            self._records.pop(session.regenerated_from, None)
        self._records[session.sid] = _MemoryRecord(
            data=session.snapshot(),
            created_at=session.created_at,
            last_activity=session.last_activity,
        )

    def destroy(self, sid: str) -> None:
        self._records.pop(sid, None)

    def purge_expired(
        self,
        idle_seconds: int,
        absolute_seconds: int,
        now: Optional[datetime] = None,
    ) -> int:
        now = now or datetime.utcnow()
        expired = []
        for sid, record in list(self._records.items()):
            candidate = ServerSession(sid=sid, created_at=record.created_at, last_activity=record.last_activity)
            if candidate.is_expired(idle_seconds, absolute_seconds, now=now):
                expired.append(sid)
        for sid in expired:
            self._records.pop(sid, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, sid: object) -> bool:
        return sid in self._records


class DatabaseSessionStore(SessionStore):
    """Store backed by the ``auth_session`` table."""

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def _db(self):
        return self._session or db.session

    def load(self, sid: str) -> Optional[ServerSession]:
        if not sid:
            return None
        record = AuthSession.query.filter_by(session_id=sid, lifecycle_state=SESSION_STATE_ACTIVE).first()
        if record is None:
            return None
        return ServerSession(
            copy.deepcopy(record.data or {}),
            sid=record.session_id,
            created_at=record.created_at,
            last_activity=record.last_activity_at,
        )

    def save(self, session: ServerSession) -> None:
        now = datetime.utcnow()
        if session.regenerated_from:
            self._invalidate(session.regenerated_from, now)
        record = AuthSession.query.filter_by(session_id=session.sid).first()
        if record is None:
            record = AuthSession(session_id=session.sid, created_at=session.created_at)
            self._db.add(record)
        data = session.snapshot()
        record.data = data
        record.member_id = data.get(SESSION_KEY_IDENTITY_ID)
        record.last_activity_at = session.last_activity
        self._commit()

    def destroy(self, sid: str) -> None:
        self._invalidate(sid, datetime.utcnow())
        self._commit()

    def purge_expired(
        self,
        idle_seconds: int,
        absolute_seconds: int,
        now: Optional[datetime] = None,
    ) -> int:
        now = now or datetime.utcnow()
        conditions = []
        if idle_seconds:
            conditions.append(AuthSession.last_activity_at < now - timedelta(seconds=idle_seconds))
        if absolute_seconds:
            conditions.append(AuthSession.created_at < now - timedelta(seconds=absolute_seconds))
        if not conditions:
            return 0
        updated = AuthSession.query.filter(
            AuthSession.lifecycle_state == SESSION_STATE_ACTIVE,
            or_(*conditions),
        ).update(
            {"lifecycle_state": SESSION_STATE_EXPIRED, "invalidated_at": now},
            synchronize_session=False,
        )
        self._commit()
        return updated

    def prune(self, retention_seconds: int, now: Optional[datetime] = None) -> int:
        now = now or datetime.utcnow()
        deleted = AuthSession.query.filter(
            AuthSession.lifecycle_state != SESSION_STATE_ACTIVE,
            AuthSession.invalidated_at < now - timedelta(seconds=retention_seconds),
        ).delete(synchronize_session=False)
        self._commit()
        if deleted:
            logger.info("Deleted %s ended session row(s)", deleted)
        return deleted

    def _invalidate(self, sid: str, now: datetime) -> None:
        record = AuthSession.query.filter_by(session_id=sid).first()
        if record is None:
            return
        record.lifecycle_state = SESSION_STATE_INVALIDATED
        record.invalidated_at = now
        record.data = {}

    def _commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            logger.exception("Failed to persist session state")
            raise


def build_session_store(backend: str) -> SessionStore:
    if backend == "memory":
        return MemorySessionStore()
    if backend == "database":
        return DatabaseSessionStore()
    raise ValueError(f"unknown session backend: {backend}")


__all__ = [
    "ServerSession",
    "SessionStore",
    "MemorySessionStore",
    "DatabaseSessionStore",
    "build_session_store",
    "generate_session_id",
]
