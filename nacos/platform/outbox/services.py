"""Staging and delivery of member notifications.

Domain services call :func:`enqueue` inside their own unit of work, so a
notification exists exactly when the member change that caused it commits.
``flask dispatch-notifications`` later drains ready rows through a sender.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Protocol, Sequence

from sqlalchemy import select, update

from nacos.extensions import db
from nacos.platform.outbox.models import OutboxMessage

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_SENDING = "sending"
STATUS_SENT = "sent"
STATUS_RETRY = "retry"
STATUS_DEAD = "dead"

READY_STATUSES = (STATUS_PENDING, STATUS_RETRY)
MAX_DISPATCH_ATTEMPTS = 5
DEFAULT_RETRY_IN = timedelta(minutes=5)
MAX_RETRY_IN = timedelta(hours=6)


class NotificationSender(Protocol):
    def send(self, message: OutboxMessage) -> None: ...


class LogNotificationSender:
    """Writes each notification to the log. Swap for an SMTP sender in deployment."""

    def __init__(self) -> None:
        self.sent: List[int] = []

    def send(self, message: OutboxMessage) -> None:
        logger.info(
            "notification %s to=%s member=%s",
            message.event_type,
            message.recipient,
            message.member_id,
        )
        self.sent.append(message.id)


def enqueue(
    event_name: str,
    payload: dict,
    member_id: Optional[int],
    available_at: Optional[datetime] = None,
) -> OutboxMessage:
    """Stage a notification; the caller's commit persists it."""
    payload = dict(payload or {})
    message = OutboxMessage(
        event_type=event_name,
        recipient=payload.get("email"),
        payload=payload,
        member_id=member_id,
        available_at=available_at or datetime.utcnow(),
        status=STATUS_PENDING,
        attempts=0,
    )
    db.session.add(message)
    return message


def backoff_for(attempts: int, retry_in: timedelta = DEFAULT_RETRY_IN) -> timedelta:
    """Doubling delay after each failed attempt, capped at MAX_RETRY_IN."""
    delay = retry_in * (2 ** max(attempts - 1, 0))
    return min(delay, MAX_RETRY_IN)


def dequeue_batch(limit: int = 50) -> List[OutboxMessage]:
    """Claim up to ``limit`` ready messages by moving them to ``sending``."""
    stmt = (
        select(OutboxMessage)
        .where(
            OutboxMessage.available_at <= datetime.utcnow(),
            OutboxMessage.status.in_(READY_STATUSES),
        )
        .order_by(OutboxMessage.available_at, OutboxMessage.id)
        .limit(limit)
        .with_for_update(skip_locked=True)
    )
    claimed = list(db.session.scalars(stmt))
    for message in claimed:
        message.status = STATUS_SENDING
        message.attempts += 1
    db.session.commit()
    return claimed


def mark_sent(ids: Sequence[int]) -> int:
    if not ids:
        return 0
    result = db.session.execute(
        update(OutboxMessage)
        .where(OutboxMessage.id.in_(list(ids)), OutboxMessage.status == STATUS_SENDING)
        .values(status=STATUS_SENT, sent_at=datetime.utcnow(), last_error=None)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    return result.rowcount


def mark_failed(
    message_id: int,
    err: Exception | str,
    retry_in: timedelta = DEFAULT_RETRY_IN,
) -> Optional[OutboxMessage]:
    message = db.session.get(OutboxMessage, message_id)
    if message is None or message.status != STATUS_SENDING:
        return None

    message.last_error = str(err)
    if message.attempts >= MAX_DISPATCH_ATTEMPTS:
        message.status = STATUS_DEAD
        logger.error("notification %s dead after %s attempts", message.id, message.attempts)
    else:
        message.status = STATUS_RETRY
        message.available_at = datetime.utcnow() + backoff_for(message.attempts, retry_in)
    db.session.commit()
    return message


def dispatch_ready(
    limit: int = 50,
    retry_in: timedelta = DEFAULT_RETRY_IN,
    sender: Optional[NotificationSender] = None,
) -> List[int]:
    """Send every ready message once. Returns the ids that went out."""
    sender = sender or LogNotificationSender()
    delivered: List[int] = []
    for message in dequeue_batch(limit=limit):
        try:
            sender.send(message)
        except Exception as err:
            logger.warning("notification %s failed: %s", message.id, err)
            mark_failed(message.id, err, retry_in=retry_in)
            continue
        delivered.append(message.id)
    mark_sent(delivered)
    return delivered
