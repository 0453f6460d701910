"""Transactional outbox for member notifications."""

from nacos.platform.outbox.models import OutboxMessage
from nacos.platform.outbox.services import (
    LogNotificationSender,
    dequeue_batch,
    dispatch_ready,
    enqueue,
    mark_failed,
    mark_sent,
)

__all__ = [
    "OutboxMessage",
    "LogNotificationSender",
    "enqueue",
    "dequeue_batch",
    "mark_sent",
    "mark_failed",
    "dispatch_ready",
]
