"""Type definitions for huelink.

This module provides the value types shared by the colour engine, the
request codec and the bridge session: colour representations, the sparse
state payload sent to lights and groups, and the outcome of a command.
"""

from enum import Enum
from typing import NamedTuple, TypedDict, Union


class Status(Enum):
    """Outcome of the most recent state-changing call on a bridge."""
    OK = 'ok'
    ERROR = 'error'


class HSV(NamedTuple):
    """Device-scaled hue (0-65535), saturation (0-255) and value (0-255)."""
    hue: int
    saturation: int
    value: int


class XY(NamedTuple):
    """CIE xy chromaticity, each component in [0, 1]."""
    x: float
    y: float


class RGB(NamedTuple):
    """Normalised RGB, each component in [0.0, 1.0]. Never sent as-is."""
    r: float
    g: float
    b: float


ColorValue = Union[HSV, XY, RGB]

# Target identifier for a light or group
Target = Union[int, str]


class StateDelta(TypedDict, total=False):
    """Sparse light/group state. Only the keys present are changed."""
    on: bool
    hue: int
    sat: int
    bri: int
    xy: list[float]
    transitiontime: int


class DiscoveredBridge(TypedDict):
    """Bridge information from N-UPnP discovery."""
    id: str
    internalipaddress: str
    name: str | None
