"""Deliver staged member notifications from the outbox.

Usage:
    flask dispatch-notifications --limit 50
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from nacos.platform.outbox import dispatch_ready


@click.command("dispatch-notifications")
@click.option("--limit", default=50, show_default=True, help="Maximum messages per run")
@with_appcontext
def dispatch_notifications_command(limit: int) -> None:
    sent = dispatch_ready(limit=limit)
    click.echo(f"Dispatched {len(sent)} notification(s)")
