import logging

import click

from .errors import APIError
from .services import accounts
from .services.properties import mark_overdue

log = logging.getLogger(__name__)


def register_commands(app):
    @app.cli.command("sweep-overdue")
    @click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
                  help="Reference date (YYYY-MM-DD); defaults to today.")
    def sweep_overdue(today):
        """Mark pending properties whose rent due date has passed as overdue."""
        moved = mark_overdue(today.date() if today else None)
        if moved:
            log.warning("Moved %d properties to overdue", len(moved))
        else:
            log.info("No properties to move to overdue.")
        click.echo(f"{len(moved)} properties marked overdue")

    @app.cli.command("create-user")
    @click.argument("email")
    @click.argument("name")
    @click.password_option()
    def create_user(email, name, password):
        """Create an account with the same rules as signup."""
        try:
            user = accounts.signup(email, password, name)
        except APIError as e:
            raise click.ClickException(e.message)
        click.echo(f"Created user {user.id}: {user.email}")
