"""CLI command modules.

This package contains:
- setup: Setup commands (setup, discover, authorize) and the coloured group
- inspection: Read-only commands (info, lights, groups)
- control: Direct control commands (on, off, brightness, colour)
- morse: Blink a message in morse code
- helpers: Bridge construction and outcome reporting shared by commands
"""
