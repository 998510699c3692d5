"""Flask CLI commands for session-credential maintenance."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from sessionauth.core.security import get_auth

LOGGER = logging.getLogger(__name__)


@click.group("sessions")
def sessions_cli() -> None:
    """Session-credential maintenance commands."""


@sessions_cli.command("purge-expired")
@with_appcontext
def purge_expired() -> None:
    """Delete stored session credentials whose expiry has passed.

    Validation never relies on stored rows, so running this late only costs
    storage. Schedule it (cron, systemd timer) for the SQL backend; Redis
    expires keys on its own and this only prunes its index sets.
    """
    removed = get_auth().sessions.purge_expired()
    LOGGER.info("sessions.purge_expired removed=%s", removed)
    click.echo(f"Purged {removed} expired session record(s).")
