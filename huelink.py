#!/usr/bin/env python3
"""
huelink CLI
Control Philips Hue lights and groups through the bridge's REST API.
"""

import logging

import click

from commands.setup import ColouredGroup, setup_command, discover_command, authorize_command
from commands.inspection import info_command, lights_command, groups_command
from commands.control import on_command, off_command, brightness_command, colour_command
from commands.morse import morse_command


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 120
    }
)
@click.version_option(version='0.1.0', prog_name='huelink')
@click.option('--host', '-H', default=None, help='Bridge host or IP address')
@click.option('--user', '-u', default=None, help='Bridge credential (API username)')
@click.option('--verbose', '-v', is_flag=True, help='Log requests and responses')
@click.pass_context
def cli(ctx, host, user, verbose):
    """huelink - Control Philips Hue lights from the command line.

Settings: --host/--user → HUELINK_HOST/HUELINK_USER → ~/.huelink/config.json
Run 'discover' to find your bridge and 'authorize' to get a credential.

Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')
    ctx.ensure_object(dict)
    if host:
        ctx.obj['host'] = host
    if user:
        ctx.obj['user'] = user


# Register setup commands
cli.add_command(setup_command)
cli.add_command(discover_command)
cli.add_command(authorize_command)

# Register inspection commands
cli.add_command(info_command)
cli.add_command(lights_command)
cli.add_command(groups_command)

# Register control commands
cli.add_command(on_command)
cli.add_command(off_command)
cli.add_command(brightness_command)
cli.add_command(colour_command)
cli.add_command(morse_command)


if __name__ == '__main__':
    cli()
