"""
Inspection commands: read-only queries against the bridge.

None of these change bridge state.
"""

import json

import click

from commands.helpers import get_bridge
from models.utils import format_light_line


@click.command(name='info')
@click.option('--light', '-l', help='Show a single light instead of the whole bridge')
@click.option('--group', '-g', help='Show a single group instead of the whole bridge')
@click.pass_context
def info_command(ctx, light: str | None, group: str | None):
    """Dump the bridge's full state (or one light/group) as JSON."""
    bridge = get_bridge(ctx)

    if light is not None:
        payload = bridge.light_info(light)
    elif group is not None:
        payload = bridge.group_info(group)
    else:
        payload = bridge.info()

    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.command(name='lights')
@click.pass_context
def lights_command(ctx):
    """List lights connected to the bridge and whether they are on.

    \b
    Example output:
      Light #1 'Desk' (LCT001) is ON
      Light #2 'Hall' (LWB004) is off
    """
    bridge = get_bridge(ctx)
    lights = bridge.lights()

    if not isinstance(lights, dict) or not lights:
        click.echo("No lights found.")
        return

    for light_id in sorted(lights, key=lambda k: (len(k), k)):
        click.echo(format_light_line(light_id, lights[light_id]))


@click.command(name='groups')
@click.pass_context
def groups_command(ctx):
    """List groups defined on the bridge."""
    bridge = get_bridge(ctx)
    groups = bridge.groups()

    if not isinstance(groups, dict) or not groups:
        click.echo("No groups found.")
        return

    for group_id in sorted(groups, key=lambda k: (len(k), k)):
        group = groups[group_id]
        name = group.get('name', 'Unknown')
        members = len(group.get('lights', []))
        click.echo(f"Group #{group_id} '{name}' ({members} light{'s' if members != 1 else ''})")
