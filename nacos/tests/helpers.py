"""Shared helpers for page-level tests."""

from __future__ import annotations

import re
from datetime import date

from nacos.core.auth.constants import MEMBERSHIP_ACTIVE, Role
from nacos.core.auth.password import hash_password
from nacos.core.members.models import Member
from nacos.extensions import db

DEFAULT_PASSWORD = "correct-horse-1"
COOKIE_NAME = "NACOS_SESSION"

_CSRF_PATTERN = re.compile(r'name="csrf_token" value="([0-9a-f]+)"')


def make_member(
    username: str,
    role: Role = Role.MEMBER,
    *,
    password: str | None = DEFAULT_PASSWORD,
    status: str = MEMBERSHIP_ACTIVE,
    full_name: str | None = None,
    email: str | None = None,
    matric_no: str | None = None,
    department: str = "Computer Science",
    level: str = "300",
) -> Member:
    member = Member(
        username=username,
        email=email or f"{username}@example.com",
        full_name=full_name or username.title(),
        role=role.value,
        membership_status=status,
        is_approved=status == MEMBERSHIP_ACTIVE,
        password_hash=hash_password(password) if password else None,
        matric_no=matric_no,
        department=department,
        level=level,
        registration_date=date(2024, 9, 1),
    )
    db.session.add(member)
    db.session.commit()
    return member


def csrf_from(response) -> str:
    match = _CSRF_PATTERN.search(response.get_data(as_text=True))
    assert match, "page did not render a csrf_token field"
    return match.group(1)


def login(client, username: str, password: str = DEFAULT_PASSWORD):
    token = csrf_from(client.get("/admin/login"))
    return client.post(
        "/admin/login",
        data={"username": username, "password": password, "csrf_token": token},
    )


def session_id(client) -> str | None:
    cookie = client.get_cookie(COOKIE_NAME)
    return cookie.value if cookie else None


def flash_text(client) -> str:
    """Render a page that shows the pending flash and return its body."""
    return client.get("/admin/login", follow_redirects=True).get_data(as_text=True)
