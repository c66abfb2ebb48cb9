"""
Morse command: transmit a message by blinking a light.

Timing follows standard morse proportions: a dot is one unit on, a dash
three, one unit dark between parts, three between letters and seven
between words.
"""

import time

import click

from commands.helpers import get_bridge, report
from models.utils import parse_target

MORSE_CODE = {
    'A': '.-', 'B': '-...', 'C': '-.-.', 'D': '-..', 'E': '.', 'F': '..-.',
    'G': '--.', 'H': '....', 'I': '..', 'J': '.---', 'K': '-.-', 'L': '.-..',
    'M': '--', 'N': '-.', 'O': '---', 'P': '.--.', 'Q': '--.-', 'R': '.-.',
    'S': '...', 'T': '-', 'U': '..-', 'V': '...-', 'W': '.--', 'X': '-..-',
    'Y': '-.--', 'Z': '--..',
    '0': '-----', '1': '.----', '2': '..---', '3': '...--', '4': '....-',
    '5': '.....', '6': '-....', '7': '--...', '8': '---..', '9': '----.',
    ' ': ' ',
}

DEFAULT_UNIT_MS = 750

# Units of darkness after a letter or a word (the part gap is already spent)
LETTER_GAP = 3
WORD_GAP = 7


def translate(message: str) -> list[str]:
    """Translate a message to morse letters; unknown characters are dropped."""
    return [MORSE_CODE[char] for char in message.strip().upper() if char in MORSE_CODE]


def blink_schedule(message: str) -> list[tuple[bool, int]]:
    """Expand a message into (light on?, duration in units) steps."""
    steps = []
    for letter in translate(message):
        if letter == ' ':
            steps.append((False, WORD_GAP - LETTER_GAP))
            continue
        for part in letter:
            steps.append((True, 1 if part == '.' else 3))
            steps.append((False, 1))
        steps.append((False, LETTER_GAP - 1))
    return steps


@click.command(name='morse')
@click.argument('message')
@click.option('--light', '-l', default='1', show_default=True, help='Light to blink')
@click.option('--unit', '-u', type=click.IntRange(min=50), default=DEFAULT_UNIT_MS, show_default=True,
              help='Length of a dot in milliseconds')
@click.pass_context
def morse_command(ctx, message: str, light: str, unit: int):
    """Blink a message in morse code on a light.

    \b
    Example:
      huelink morse SOS -l 3
    """
    bridge = get_bridge(ctx)
    light_id = parse_target(light)

    lit = False
    for on, units in blink_schedule(message):
        if on != lit:
            if on:
                bridge = bridge.turn_on(light_id, transition_ms=0)
            else:
                bridge = bridge.turn_off(light_id, transition_ms=0)
            lit = on
            if not bridge.ok:
                break
        time.sleep(units * unit / 1000)

    report(ctx, bridge, f"Transmitted '{message}'")
