"""
Setup commands for huelink: discovery, authorization and configuration check.

Also contains the custom Click group class for coloured help output,
typo suggestions and conversion of hard errors into CLI errors.
"""

import time

import click

from core.bridge import DEFAULT_DEVICE_LABEL, describe_error
from core import config
from core.config import save_credentials, load_settings
from core.discovery import discover
from core.errors import HueLinkError
from commands.helpers import get_bridge
from models.utils import similarity_score


class ColouredGroup(click.Group):
    """Custom Group class that adds colour to help output and suggests similar commands."""

    def invoke(self, ctx):
        """Report transport and decode failures as CLI errors instead of tracebacks."""
        try:
            return super().invoke(ctx)
        except HueLinkError as e:
            raise click.ClickException(str(e)) from e

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg) from e
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        suggestions = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                score = similarity_score(cmd_name, command)
                if score > 0:
                    suggestions.append((score, command))

        suggestions.sort(reverse=True, key=lambda x: x[0])
        return [cmd for score, cmd in suggestions[:max_suggestions]]

    def format_usage(self, ctx, formatter):
        """Format the usage line with colour."""
        formatter.write_paragraph()
        formatter.write_text(
            click.style('Usage: ', fg='cyan', bold=True) +
            click.style(f'{ctx.command_path} [OPTIONS] COMMAND [ARGS]...', fg='white')
        )

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 12)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


@click.command(name='discover')
def discover_command():
    """Find Hue bridges on the local network.

    May need several attempts; the Philips discovery service rate-limits
    requests.
    """
    click.echo("Discovering Hue bridges...")
    hosts = discover()

    if not hosts:
        click.secho("⚠ No bridges found", fg='yellow')
        click.echo("You can pass the bridge IP with --host instead.")
        return

    click.secho(f"Found {len(hosts)} Hue bridge{'s' if len(hosts) > 1 else ''}:", fg='cyan', bold=True)
    for host in hosts:
        click.echo(f"  {host}")


@click.command(name='authorize')
@click.option('--device', '-d', default=DEFAULT_DEVICE_LABEL, show_default=True,
              help='Application identifier (devicetype) registered on the bridge')
@click.option('--attempts', type=click.IntRange(1, 10), default=3, show_default=True,
              help='How many times to ask before giving up')
@click.option('--wait', type=float, default=5.0, show_default=True,
              help='Seconds to wait between attempts')
@click.option('--save/--no-save', default=True, help='Save the credential to the config file')
@click.pass_context
def authorize_command(ctx, device: str, attempts: int, wait: float, save: bool):
    """Request a credential from the bridge.

    Press the LINK BUTTON on top of the bridge, then run this command
    (you have about 30 seconds).

    \b
    Examples:
      huelink --host 192.168.1.10 authorize
      huelink --host 192.168.1.10 authorize -d "kitchen#tablet"
    """
    bridge = get_bridge(ctx, require_credential=False)

    for attempt in range(1, attempts + 1):
        bridge = bridge.authorize(device, username=(ctx.obj or {}).get('user'))
        if bridge.ok:
            break

        reasons = ', '.join(describe_error(bridge.last_error)) or 'unknown error'
        click.secho(f"✗ Attempt {attempt}/{attempts}: {reasons}", fg='red')
        if attempt < attempts:
            time.sleep(wait)

    if not bridge.ok:
        click.echo("Please ensure you press the link button before running authorize.")
        ctx.exit(1)

    click.secho("✓ Successfully created credential!", fg='green', bold=True)
    click.echo(f"  Credential: {bridge.credential}")

    if save:
        save_credentials(bridge.host, bridge.credential)
        click.secho(f"✓ Configuration saved to {config.USER_CONFIG_FILE}", fg='green')


@click.command(name='setup')
@click.pass_context
def setup_command(ctx):
    """Show bridge configuration and test the connection."""
    obj = ctx.obj or {}
    settings = load_settings(obj.get('host'), obj.get('user'))

    click.secho("=== huelink configuration ===", fg='cyan', bold=True)
    click.echo(f"Config file: {config.USER_CONFIG_FILE}")
    click.echo(f"Bridge host: {settings.host or 'not set'}")
    click.echo(f"Credential:  {'set' if settings.credential else 'not set'}")

    if not settings.host or not settings.credential:
        return

    info = get_bridge(ctx).info()
    if isinstance(info, list):
        # The bridge answers unauthorized users with an error array
        click.secho("✗ Bridge rejected the credential:", fg='red')
        for description in describe_error(info):
            click.echo(f"  • {description}")
        ctx.exit(1)

    name = info.get('config', {}).get('name', 'Philips hue')
    click.secho(f"✓ Connected to {name} at {settings.host}", fg='green')
