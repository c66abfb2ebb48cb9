"""Pytest configuration and fixtures for huelink tests."""

import pytest
from pathlib import Path

from core.bridge import connect
from core.codec import RequestCodec
from tests.fakes import FakeTransport


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config at a temp file and clear environment overrides."""
    config_file = tmp_path / '.huelink' / 'config.json'
    monkeypatch.setattr('core.config.USER_CONFIG_FILE', config_file)
    monkeypatch.delenv('HUELINK_HOST', raising=False)
    monkeypatch.delenv('HUELINK_USER', raising=False)
    return config_file


@pytest.fixture
def transport():
    """Return an empty fake transport; queue replies in the test."""
    return FakeTransport()


@pytest.fixture
def codec(transport):
    return RequestCodec(transport)


@pytest.fixture
def bridge(codec):
    """Return an authorized bridge talking to the fake transport."""
    return connect('10.0.0.1', 'test-user', codec=codec)
