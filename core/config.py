"""Configuration management.

This module handles:
- Loading/saving the user config file (~/.huelink/config.json)
- Environment variable overrides (HUELINK_HOST, HUELINK_USER)
- Resolving which bridge host and credential the CLI should use

Priority: command line option > environment variable > config file.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

USER_CONFIG_FILE = Path.home() / '.huelink' / 'config.json'

HOST_ENV = 'HUELINK_HOST'
USER_ENV = 'HUELINK_USER'


@dataclass(frozen=True)
class Settings:
    """Resolved connection settings."""
    host: str | None
    credential: str | None


def load_config(path: Path | None = None) -> dict:
    """Load the user config file.

    Returns:
        Dict with optional 'host' and 'credential' keys, empty if the file
        is missing or unreadable
    """
    path = path or USER_CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict, path: Path | None = None):
    """Save configuration to file with user-only permissions (600).

    Args:
        config: Configuration dict to save
        path: Target file, USER_CONFIG_FILE by default
    """
    path = path or USER_CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(config, f, indent=2)

    os.chmod(path, 0o600)


def save_credentials(host: str, credential: str, path: Path | None = None):
    """Store a bridge host and credential, keeping any other config keys."""
    config = load_config(path)
    config['host'] = host
    config['credential'] = credential
    save_config(config, path)


def load_settings(host: str | None = None, credential: str | None = None,
                  path: Path | None = None) -> Settings:
    """Resolve the bridge host and credential.

    Args:
        host: Value given on the command line, if any
        credential: Value given on the command line, if any
        path: Config file to fall back to

    Returns:
        Settings with whichever values were found (either may be None)
    """
    config = load_config(path)
    return Settings(
        host=host or os.getenv(HOST_ENV) or config.get('host'),
        credential=credential or os.getenv(USER_ENV) or config.get('credential'),
    )
