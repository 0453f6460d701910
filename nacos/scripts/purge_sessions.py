"""Expire idle or over-age server-side sessions and delete old ended ones.

Usage:
    flask purge-sessions
"""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from nacos.core.auth.interface import get_session_store


@click.command("purge-sessions")
@with_appcontext
def purge_sessions_command() -> None:
    store = get_session_store()
    purged = store.purge_expired(
        current_app.config["SESSION_IDLE_TIMEOUT_SECONDS"],
        current_app.config["SESSION_TTL_SECONDS"],
    )
    click.echo(f"Expired {purged} session(s)")
    deleted = store.prune(current_app.config["SESSION_RETENTION_SECONDS"])
    click.echo(f"Deleted {deleted} ended session(s)")
