"""Request building and JSON marshaling for the Hue Bridge API.

This module handles:
- Building endpoint URLs from a bridge's host and credential
- Encoding request payloads and decoding response bodies
- The HTTP transport (requests) behind a small replaceable interface

The bridge reports its own failures inside normal JSON payloads, often
alongside a non-2xx status code, so any body that arrives is decoded
regardless of the HTTP status. Only a request that produced no body at
all is a transport failure.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol

import requests

from core.errors import DecodeError, EncodeError, TransportError

if TYPE_CHECKING:
    from core.bridge import Bridge

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5


def build_url(bridge: 'Bridge', *segments) -> str:
    """Build an API URL for the given bridge.

    Produces ``http://{host}/api[/{credential}][/{segment}...]``. Segments
    are joined as-is without escaping; light and group ids are plain tokens.

    Args:
        bridge: Bridge whose host and credential prefix the path
        *segments: Path segments appended in order (ints are allowed)

    Returns:
        The full URL string
    """
    url = f"http://{bridge.host}/api"
    if bridge.credential:
        url += f"/{bridge.credential}"
    for segment in segments:
        url += f"/{segment}"
    return url


class Transport(Protocol):
    """Moves request bodies to the bridge and returns the response text."""

    def get(self, url: str) -> str: ...

    def post(self, url: str, body: str) -> str: ...

    def put(self, url: str, body: str) -> str: ...


class RequestsTransport:
    """Transport backed by a requests.Session."""

    def __init__(self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def get(self, url: str) -> str:
        return self._send('GET', url)

    def post(self, url: str, body: str) -> str:
        return self._send('POST', url, body)

    def put(self, url: str, body: str) -> str:
        return self._send('PUT', url, body)

    def _send(self, method: str, url: str, body: str | None = None) -> str:
        headers = {'Content-Type': 'application/json'} if body is not None else None
        try:
            response = self.session.request(method, url, data=body, headers=headers,
                                            timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            # Some failures still carry the bridge's answer
            response = getattr(e, 'response', None)
            if response is not None and response.text:
                logger.debug("%s %s failed (%s) but returned a body", method, url, e)
                return response.text
            raise TransportError(url, e) from e

        if not response.ok:
            logger.debug("%s %s returned HTTP %s", method, url, response.status_code)
        return response.text


class RequestCodec:
    """Serialises payloads, delegates to a transport and decodes the reply."""

    def __init__(self, transport: Transport | None = None):
        self.transport = transport if transport is not None else RequestsTransport()

    def get(self, url: str) -> Any:
        logger.debug("GET %s", url)
        return self.decode(url, self.transport.get(url))

    def post(self, url: str, payload: Any) -> Any:
        logger.debug("POST %s %s", url, payload)
        return self.decode(url, self.transport.post(url, self.encode(payload)))

    def put(self, url: str, payload: Any) -> Any:
        logger.debug("PUT %s %s", url, payload)
        return self.decode(url, self.transport.put(url, self.encode(payload)))

    @staticmethod
    def encode(payload: Any) -> str:
        """Encode a payload as JSON. Non-finite floats are rejected."""
        try:
            return json.dumps(payload, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Cannot encode payload {payload!r}: {e}") from e

    @staticmethod
    def decode(url: str, body: str | bytes | None) -> Any:
        """Decode a response body. Malformed or empty bodies are fatal."""
        if not body:
            raise DecodeError(url, None)
        try:
            return json.loads(body)
        except ValueError as e:
            text = body.decode('utf-8', 'replace') if isinstance(body, bytes) else body
            raise DecodeError(url, text) from e
