"""Bridge session for the Hue Bridge REST API.

A Bridge is an immutable snapshot of a connection: the host, the
credential (API username) and the outcome of the last command. Queries
return the decoded payload and leave the snapshot alone. Commands return
a *new* Bridge carrying the outcome, so they chain:

    bridge = connect('10.0.0.1', 'my-user')
    bridge = bridge.turn_on(1).set_brightness(1, 0.5).set_color(1, RGB(1, 0, 0))
    if bridge.status is Status.ERROR:
        print(describe_error(bridge.last_error))

A bridge that rejects a command never raises. Every element of its reply
array is scanned and a single "error" element marks the whole call failed.
Exceptions are reserved for transport and decode failures (core.errors).
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any

from core.codec import RequestCodec, build_url
from models.color import as_xy, round_half_up
from models.types import HSV, RGB, ColorValue, StateDelta, Status, Target

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_LABEL = 'huelink#cli'

# Group 0 always contains every light known to the bridge
ALL_LIGHTS = 0


@dataclass(frozen=True)
class Outcome:
    """Classification of a command response."""
    status: Status
    error: Any = None


def classify_response(body: Any) -> Outcome:
    """Classify a decoded command response.

    The bridge answers commands with an array of result objects such as
    ``[{"success": {...}}, {"error": {...}}]``. If any element has a
    top-level "error" key the call failed and the whole array is kept as
    the error. A body that is not an array is scanned as a single element.
    """
    elements = body if isinstance(body, list) else [body]
    for element in elements:
        if isinstance(element, dict) and 'error' in element:
            return Outcome(Status.ERROR, body)
    return Outcome(Status.OK)


def describe_error(last_error: Any) -> list[str]:
    """Extract the human-readable descriptions from a stored error payload."""
    if last_error is None:
        return []
    elements = last_error if isinstance(last_error, list) else [last_error]
    descriptions = []
    for element in elements:
        if isinstance(element, dict) and 'error' in element:
            error = element['error']
            if isinstance(error, dict):
                descriptions.append(error.get('description', 'Unknown error'))
            else:
                descriptions.append(str(error))
    return descriptions


def to_wire_transition(transition_ms: float) -> int:
    """Convert milliseconds to the bridge's deciseconds, truncating."""
    return int(math.floor(transition_ms / 100))


def to_wire_brightness(fraction: float) -> int:
    """Convert a 0-1 brightness fraction to 0-255, rounding halves up."""
    return round_half_up(fraction * 255)


def color_delta(color: ColorValue) -> StateDelta:
    """Build the state payload for a colour.

    HSV (or any plain 3-tuple other than RGB) is sent as hue/sat/bri.
    XY (or a plain 2-tuple) is sent as xy. RGB is converted to xy first.
    """
    if isinstance(color, RGB):
        x, y = as_xy(color)
        return {'on': True, 'xy': [x, y]}
    if isinstance(color, HSV) or len(color) == 3:
        hue, sat, bri = color
        return {'on': True, 'hue': hue, 'sat': sat, 'bri': bri}
    x, y = as_xy(color)
    return {'on': True, 'xy': [x, y]}


def _with_transition(delta: StateDelta, transition_ms: float | None) -> StateDelta:
    if transition_ms is not None:
        delta['transitiontime'] = to_wire_transition(transition_ms)
    return delta


@dataclass(frozen=True)
class Bridge:
    """Immutable connection snapshot. Commands return updated copies."""
    host: str
    credential: str | None = None
    status: Status = Status.OK
    last_error: Any = None
    codec: RequestCodec = field(default_factory=RequestCodec, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def url(self, *segments) -> str:
        return build_url(self, *segments)

    # ===== Authorization =====

    def authorize(self, device_label: str = DEFAULT_DEVICE_LABEL, username: str | None = None,
                  keep_credential_on_error: bool = True) -> 'Bridge':
        """Request a credential from the bridge.

        The first attempt normally fails with "link button not pressed".
        Press the link button on the bridge, then call authorize again.

        Args:
            device_label: Application identifier sent as "devicetype"
            username: Username to request (older bridges only); when omitted
                the bridge generates one
            keep_credential_on_error: Install ``username`` even if the bridge
                rejects the request. This is the default; pass
                False to keep the previous credential on failure

        Returns:
            A Bridge with the outcome recorded and the credential installed
        """
        payload = {'devicetype': device_label}
        if username:
            payload['username'] = username

        body = self.codec.post(build_url(replace(self, credential=None)), payload)
        outcome = classify_response(body)

        if outcome.status is Status.OK:
            credential = _granted_username(body) or username or self.credential
        elif keep_credential_on_error:
            credential = username or self.credential
        else:
            credential = self.credential

        if outcome.status is Status.ERROR:
            logger.info("Authorization on %s refused: %s", self.host, describe_error(body))
        return replace(self, credential=credential, status=outcome.status, last_error=outcome.error)

    # ===== Queries =====

    def info(self) -> Any:
        """Fetch everything the bridge knows (full configuration dump)."""
        return self.codec.get(build_url(self))

    def lights(self) -> Any:
        """List the lights connected to the bridge."""
        return self.codec.get(build_url(self, 'lights'))

    def light_info(self, light: Target) -> Any:
        """Fetch state and attributes of a single light."""
        return self.codec.get(build_url(self, 'lights', light))

    def groups(self) -> Any:
        """List the groups defined on the bridge."""
        return self.codec.get(build_url(self, 'groups'))

    def group_info(self, group: Target) -> Any:
        """Fetch attributes and last action of a single group."""
        return self.codec.get(build_url(self, 'groups', group))

    # ===== Light commands =====

    def set_state(self, light: Target, delta: StateDelta) -> 'Bridge':
        """Send a state delta to a light.

        For the accepted keys, look at the "state" object returned by
        light_info().
        """
        return self._command(build_url(self, 'lights', light, 'state'), delta)

    def turn_on(self, light: Target, transition_ms: float | None = None) -> 'Bridge':
        return self.set_state(light, _with_transition({'on': True}, transition_ms))

    def turn_off(self, light: Target, transition_ms: float | None = None) -> 'Bridge':
        return self.set_state(light, _with_transition({'on': False}, transition_ms))

    def set_color(self, light: Target, color: ColorValue, transition_ms: float | None = None) -> 'Bridge':
        """Set a light's colour from an HSV, XY or RGB value."""
        return self.set_state(light, _with_transition(color_delta(color), transition_ms))

    def set_brightness(self, light: Target, brightness: float, transition_ms: float | None = None) -> 'Bridge':
        """Set a light's brightness from a fraction between 0 and 1."""
        delta = {'on': True, 'bri': to_wire_brightness(brightness)}
        return self.set_state(light, _with_transition(delta, transition_ms))

    # ===== Group commands =====

    def set_group_state(self, group: Target, delta: StateDelta) -> 'Bridge':
        """Send a state delta to every light in a group."""
        return self._command(build_url(self, 'groups', group, 'action'), delta)

    def turn_group_on(self, group: Target, transition_ms: float | None = None) -> 'Bridge':
        return self.set_group_state(group, _with_transition({'on': True}, transition_ms))

    def turn_group_off(self, group: Target, transition_ms: float | None = None) -> 'Bridge':
        return self.set_group_state(group, _with_transition({'on': False}, transition_ms))

    def set_group_color(self, group: Target, color: ColorValue,
                        transition_ms: float | None = None) -> 'Bridge':
        return self.set_group_state(group, _with_transition(color_delta(color), transition_ms))

    def set_group_brightness(self, group: Target, brightness: float,
                             transition_ms: float | None = None) -> 'Bridge':
        delta = {'on': True, 'bri': to_wire_brightness(brightness)}
        return self.set_group_state(group, _with_transition(delta, transition_ms))

    def _command(self, url: str, delta: StateDelta) -> 'Bridge':
        body = self.codec.put(url, delta)
        outcome = classify_response(body)
        if outcome.status is Status.ERROR:
            logger.info("Bridge %s rejected %s: %s", self.host, url, describe_error(body))
        return replace(self, status=outcome.status, last_error=outcome.error)


def _granted_username(body: Any) -> str | None:
    """Pull the generated username out of an authorization reply."""
    if not isinstance(body, list):
        return None
    for element in body:
        if isinstance(element, dict) and isinstance(element.get('success'), dict):
            username = element['success'].get('username')
            if username:
                return username
    return None


def connect(host: str, credential: str | None = None, codec: RequestCodec | None = None) -> Bridge:
    """Create a Bridge for the given host or IP address. No request is made."""
    if codec is None:
        return Bridge(host=host, credential=credential)
    return Bridge(host=host, credential=credential, codec=codec)


# Function forms for pipeline-style use: turn_on(bridge, 1)
authorize = Bridge.authorize
info = Bridge.info
lights = Bridge.lights
light_info = Bridge.light_info
groups = Bridge.groups
group_info = Bridge.group_info
set_state = Bridge.set_state
turn_on = Bridge.turn_on
turn_off = Bridge.turn_off
set_color = Bridge.set_color
set_brightness = Bridge.set_brightness
set_group_state = Bridge.set_group_state
turn_group_on = Bridge.turn_group_on
turn_group_off = Bridge.turn_group_off
set_group_color = Bridge.set_group_color
set_group_brightness = Bridge.set_group_brightness
