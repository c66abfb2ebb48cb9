"""
Control commands for direct manipulation of lights and groups.

Includes power, brightness and colour. Every command accepts --group to
address a group instead of a light (group 0 is all lights).
"""

import click

from commands.helpers import get_bridge, report
from models.types import HSV, RGB, XY
from models.utils import parse_target

group_option = click.option('--group', '-g', is_flag=True, help='Target is a group id, not a light id')
transition_option = click.option('--transition', '-t', type=click.IntRange(min=0), default=None,
                                 help='Transition time in milliseconds')


@click.command(name='on')
@click.argument('target')
@group_option
@transition_option
@click.pass_context
def on_command(ctx, target: str, group: bool, transition: int | None):
    """Turn a light (or group) on.

    \b
    Examples:
      huelink on 1
      huelink on 0 --group -t 2000
    """
    _power(ctx, target, group, transition, on=True)


@click.command(name='off')
@click.argument('target')
@group_option
@transition_option
@click.pass_context
def off_command(ctx, target: str, group: bool, transition: int | None):
    """Turn a light (or group) off."""
    _power(ctx, target, group, transition, on=False)


def _power(ctx, target: str, group: bool, transition: int | None, on: bool):
    bridge = get_bridge(ctx)
    target_id = parse_target(target)

    if group:
        action = bridge.turn_group_on if on else bridge.turn_group_off
    else:
        action = bridge.turn_on if on else bridge.turn_off

    kind = 'Group' if group else 'Light'
    report(ctx, action(target_id, transition), f"{kind} {target} turned {'ON' if on else 'OFF'}")


@click.command(name='brightness')
@click.argument('target')
@click.argument('level', type=click.FloatRange(0.0, 1.0))
@group_option
@transition_option
@click.pass_context
def brightness_command(ctx, target: str, level: float, group: bool, transition: int | None):
    """Set brightness as a fraction between 0 and 1.

    \b
    Examples:
      huelink brightness 1 0.5
      huelink brightness 0 1 --group
    """
    bridge = get_bridge(ctx)
    target_id = parse_target(target)

    if group:
        bridge = bridge.set_group_brightness(target_id, level, transition)
    else:
        bridge = bridge.set_brightness(target_id, level, transition)

    report(ctx, bridge, f"{target} brightness set to {level:.0%}")


@click.command(name='colour')
@click.argument('target')
@click.option('--rgb', 'rgb_value', type=(click.FloatRange(0.0, 1.0),) * 3, default=None,
              help='Normalised RGB, e.g. --rgb 1 0.5 0')
@click.option('--xy', 'xy_value', type=(click.FloatRange(0.0, 1.0),) * 2, default=None,
              help='Hue xy chromaticity, e.g. --xy 0.4 0.5')
@click.option('--hsv', 'hsv_value',
              type=(click.IntRange(0, 65535), click.IntRange(0, 255), click.IntRange(0, 255)),
              default=None, help='Hue (0-65535), saturation and brightness (0-255)')
@group_option
@transition_option
@click.pass_context
def colour_command(ctx, target: str, rgb_value, xy_value, hsv_value, group: bool,
                   transition: int | None):
    """Set the colour of a light (or group).

    \b
    Examples:
      huelink colour 1 --rgb 1 0 0
      huelink colour 1 --xy 0.675 0.322
      huelink colour 0 --group --hsv 46920 255 200
    """
    given = [v for v in (rgb_value, xy_value, hsv_value) if v is not None]
    if len(given) != 1:
        raise click.UsageError("Specify exactly one of --rgb, --xy or --hsv")

    if rgb_value is not None:
        color = RGB(*rgb_value)
    elif xy_value is not None:
        color = XY(*xy_value)
    else:
        color = HSV(*hsv_value)

    bridge = get_bridge(ctx)
    target_id = parse_target(target)

    if group:
        bridge = bridge.set_group_color(target_id, color, transition)
    else:
        bridge = bridge.set_color(target_id, color, transition)

    report(ctx, bridge, f"{target} colour updated")
