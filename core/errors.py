"""Exceptions raised by huelink.

Only failures that leave nothing to inspect are raised. A bridge that
answers with an error payload is not an exception: the answer is recorded
on the returned Bridge (status/last_error) instead.
"""


class HueLinkError(Exception):
    """Base class for all huelink errors."""


class TransportError(HueLinkError):
    """No response body could be obtained from the bridge."""

    def __init__(self, url: str, reason: Exception | str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class DecodeError(HueLinkError):
    """The bridge answered with something that is not valid JSON."""

    def __init__(self, url: str, body: str | None):
        self.url = url
        self.body = body
        preview = (body or '')[:80]
        super().__init__(f"Could not decode response from {url}: {preview!r}")


class EncodeError(HueLinkError):
    """A request payload could not be serialised (e.g. NaN from black RGB)."""
