"""Shared helpers for CLI commands.

Builds the Bridge for a command from the resolved settings and prints
command outcomes in the tool's ✓/✗ style.
"""

import click

from core.bridge import Bridge, connect, describe_error
from core.config import load_settings


def get_bridge(ctx: click.Context, require_credential: bool = True) -> Bridge:
    """Create a Bridge from --host/--user, environment or config file.

    Exits with status 1 when no host (or no credential, if required) is
    configured.
    """
    obj = ctx.obj or {}
    settings = load_settings(obj.get('host'), obj.get('user'))

    if not settings.host:
        click.secho("✗ No bridge host configured.", fg='red', err=True)
        click.echo("Use --host, set HUELINK_HOST, or run 'huelink discover'.", err=True)
        ctx.exit(1)

    if require_credential and not settings.credential:
        click.secho("✗ No credential configured.", fg='red', err=True)
        click.echo("Use --user, set HUELINK_USER, or run 'huelink authorize'.", err=True)
        ctx.exit(1)

    return connect(settings.host, settings.credential, codec=obj.get('codec'))


def report(ctx: click.Context, bridge: Bridge, success_message: str) -> None:
    """Print the outcome of a command and exit 1 if the bridge refused it."""
    if bridge.ok:
        click.secho(f"✓ {success_message}", fg='green')
        return

    click.secho("✗ Bridge refused the request:", fg='red', err=True)
    for description in describe_error(bridge.last_error):
        click.echo(f"  • {description}", err=True)
    ctx.exit(1)
