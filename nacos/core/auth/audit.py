"""Security audit log: one log line plus one ``security_event`` row per event."""

from __future__ import annotations

import logging
from typing import Optional

from flask import has_request_context, request

from nacos.core.auth.models import SecurityEvent
from nacos.core.auth.session_models import Identity
from nacos.extensions import db

security_logger = logging.getLogger("nacos.security")

_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def record_security_event(
    event: str,
    *,
    outcome: str,
    actor: Optional[Identity] = None,
    actor_name: Optional[str] = None,
    subject: Optional[str] = None,
    level: str = "info",
    details: Optional[dict] = None,
    commit: bool = True,
) -> SecurityEvent:
    """Record who did what to whom and how it ended.

    Pass ``commit=False`` when the caller commits the row together with its own
    domain change.
    """
    remote_addr = request.remote_addr if has_request_context() else None
    name = actor.username if actor else (actor_name or "anonymous")
    security_logger.log(
        _LEVELS.get(level, logging.INFO),
        "event=%s outcome=%s actor=%s actor_id=%s subject=%s ip=%s",
        event,
        outcome,
        name,
        actor.id if actor else None,
        subject,
        remote_addr or "unknown",
    )
    record = SecurityEvent(
        event=event,
        level=level,
        outcome=outcome,
        actor_id=actor.id if actor else None,
        actor_name=name,
        subject=subject,
        remote_addr=remote_addr,
        details=details or {},
    )
    db.session.add(record)
    if commit:
        db.session.commit()
    return record


__all__ = ["record_security_event", "security_logger"]
