"""Bridge discovery.

Discovery is optional and pluggable. A discovery client is any callable
returning ``(identifier, metadata)`` pairs, the shape produced by SSDP
clients: metadata is a dict with at least a "host" key, and Hue bridges
announce themselves with a "hue-bridgeid" key. Nothing else in huelink
depends on this module.

The default client asks the Philips N-UPnP service at
https://discovery.meethue.com/ for bridges on the caller's network.
"""

import logging
from typing import Callable, Iterable

import requests

from models.types import DiscoveredBridge

logger = logging.getLogger(__name__)

NUPNP_URL = 'https://discovery.meethue.com/'
BRIDGE_ID_KEY = 'hue-bridgeid'

DiscoveryEntry = tuple[str, dict]
DiscoveryClient = Callable[[], Iterable[DiscoveryEntry]]


def bridge_hosts(entries: Iterable[DiscoveryEntry]) -> list[str]:
    """Keep entries that identify as Hue bridges and return their unique hosts.

    Args:
        entries: (identifier, metadata) pairs from a discovery client

    Returns:
        Host values in first-seen order, without duplicates
    """
    hosts = []
    for _identifier, metadata in entries:
        if BRIDGE_ID_KEY not in metadata:
            continue
        host = metadata.get('host')
        if host and host not in hosts:
            hosts.append(host)
    return hosts


def discover_bridges(timeout: float = 5) -> list[DiscoveredBridge]:
    """Discover Hue bridges on the network using N-UPnP.

    Returns:
        List of bridge dicts with keys: id, internalipaddress and
        optionally name. Empty list if discovery fails or no bridges found
    """
    try:
        response = requests.get(NUPNP_URL, timeout=timeout)
        response.raise_for_status()
        bridges = response.json()

        # Sort by IP address for consistency
        return sorted(bridges, key=lambda b: b.get('internalipaddress', ''))

    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            logger.warning("Philips discovery service rate limit reached")
        else:
            logger.warning("Bridge discovery failed: %s", e)
        return []
    except requests.exceptions.RequestException as e:
        logger.warning("Bridge discovery failed: %s", e)
        return []
    except (ValueError, AttributeError) as e:
        logger.warning("Failed to parse discovery response: %s", e)
        return []


def discover_nupnp() -> list[DiscoveryEntry]:
    """N-UPnP discovery adapted to (identifier, metadata) pairs."""
    entries = []
    for bridge in discover_bridges():
        bridge_id = bridge.get('id', '')
        host = bridge.get('internalipaddress')
        if not host:
            continue
        entries.append((bridge_id, {'host': host, BRIDGE_ID_KEY: bridge_id,
                                    'name': bridge.get('name')}))
    return entries


def discover(client: DiscoveryClient | None = None) -> list[str]:
    """Return the hosts of Hue bridges found by a discovery client.

    Args:
        client: Callable returning (identifier, metadata) pairs. Defaults
            to N-UPnP discovery

    Returns:
        Unique bridge hosts. May need several attempts to find a bridge
    """
    client = client or discover_nupnp
    return bridge_hosts(client())
