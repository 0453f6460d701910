"""Create or promote an active admin account.

Usage:
    flask seed-admin --username admin --password secret123 --email admin@example.com
"""

from __future__ import annotations

from datetime import datetime

import click
from flask.cli import with_appcontext
from sqlalchemy import func

from nacos.core.auth.constants import MEMBERSHIP_ACTIVE, Role
from nacos.core.auth.password import hash_password
from nacos.core.members.models import Member
from nacos.extensions import db


def seed_admin_member(username: str, password: str, email: str, full_name: str | None = None) -> Member:
    normalized = username.strip().lower()
    member = Member.query.filter(func.lower(Member.username) == normalized).first()
    if not member:
        member = Member(
            username=normalized,
            email=email.strip().lower(),
            full_name=full_name or "Administrator",
        )
        db.session.add(member)
    member.password_hash = hash_password(password)
    member.role = Role.ADMIN.value
    member.membership_status = MEMBERSHIP_ACTIVE
    member.is_approved = True
    member.approval_date = member.approval_date or datetime.utcnow()
    db.session.commit()
    return member


@click.command("seed-admin")
@click.option("--username", required=True, help="Admin username")
@click.option("--password", required=True, help="Admin password")
@click.option("--email", required=True, help="Admin email")
@click.option("--full-name", default="Administrator", help="Admin display name")
@with_appcontext
def seed_admin_command(username: str, password: str, email: str, full_name: str) -> None:
    if len(password) < 8:
        click.echo("--password must be at least 8 characters", err=True)
        raise click.Abort()
    member = seed_admin_member(username, password, email, full_name)
    click.echo(f"Admin account {member.username} (id={member.id}) is active")
