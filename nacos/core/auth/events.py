"""Security and notification event names."""

from __future__ import annotations

AUTH_LOGIN_SUCCEEDED = "auth.login.succeeded"
AUTH_LOGIN_FAILED = "auth.login.failed"
AUTH_LOGOUT = "auth.logout"
AUTH_SESSION_EXPIRED = "auth.session.expired"
AUTH_SESSION_ADDRESS_CHANGED = "auth.session.address_changed"
AUTH_ACCESS_DENIED = "auth.access.denied"
AUTH_CSRF_REJECTED = "auth.csrf.rejected"

MEMBER_ROLE_CHANGED = "members.role.changed"
MEMBER_SELF_DEMOTION_BLOCKED = "members.role.self_demotion_blocked"
MEMBER_APPROVED = "members.member.approved"
MEMBER_REJECTED = "members.member.rejected"
MEMBER_DEACTIVATED = "members.member.deactivated"
MEMBER_DELETED = "members.member.deleted"
MEMBER_EDIT_REFUSED = "members.member.edit_refused"

# Outbox notifications consumed by the mailer worker
NOTIFY_MEMBER_APPROVED = "members.email.approved"
NOTIFY_MEMBER_REJECTED = "members.email.rejected"

OUTCOME_SUCCESS = "success"
OUTCOME_FAILURE = "failure"
OUTCOME_DENIED = "denied"

EVENT_CATALOG = {
    NOTIFY_MEMBER_APPROVED: {
        "version": "v1",
        "payload": {
            "member_id": "int",
            "email": "str",
            "full_name": "str",
            "approved_by": "int",
            "approved_at": "datetime",
        },
    },
    NOTIFY_MEMBER_REJECTED: {
        "version": "v1",
        "payload": {
            "member_id": "int",
            "email": "str",
            "full_name": "str",
            "rejected_by": "int",
        },
    },
}
