"""Flask CLI commands."""

from nacos.scripts.dispatch_notifications import dispatch_notifications_command
from nacos.scripts.purge_sessions import purge_sessions_command
from nacos.scripts.seed_admin import seed_admin_command


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_admin_command)
    app.cli.add_command(purge_sessions_command)
    app.cli.add_command(dispatch_notifications_command)
