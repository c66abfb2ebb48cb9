"""Tests for the CLI commands.

Commands run through click's CliRunner with a FakeTransport injected via
the context object, so no requests reach the network.
"""

import json

import pytest
from click.testing import CliRunner
from unittest.mock import patch

from core.codec import RequestCodec
from core.config import load_config
from core.errors import TransportError
from commands.morse import blink_schedule, translate
from huelink import cli
from tests.fakes import FakeTransport

SUCCESS = [{'success': {}}]
LINK_BUTTON_ERROR = [{'error': {'type': 101, 'address': '', 'description': 'link button not pressed'}}]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, transport):
    """Invoke the CLI against the fake transport with host and user set."""
    def _invoke(*args, host='10.0.0.1', user='test-user'):
        options = []
        if host:
            options += ['--host', host]
        if user:
            options += ['--user', user]
        return runner.invoke(cli, options + list(args), obj={'codec': RequestCodec(transport)})
    return _invoke


class TestGroup:
    """Test the top-level group behaviour."""

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        for name in ('authorize', 'colour', 'lights', 'morse'):
            assert name in result.output

    def test_typo_suggests_command(self, runner):
        result = runner.invoke(cli, ['ligths'])
        assert result.exit_code != 0
        assert 'lights' in result.output

    def test_missing_host(self, invoke):
        result = invoke('lights', host=None)
        assert result.exit_code == 1
        assert 'No bridge host configured' in result.output

    def test_missing_credential(self, invoke):
        result = invoke('lights', user=None)
        assert result.exit_code == 1
        assert 'No credential configured' in result.output

    def test_transport_error_becomes_cli_error(self, invoke, transport):
        transport.queue(TransportError('http://10.0.0.1/api/test-user/lights', 'refused'))
        result = invoke('lights')
        assert result.exit_code == 1
        assert 'refused' in result.output

    def test_settings_from_environment(self, runner, transport, monkeypatch):
        monkeypatch.setenv('HUELINK_HOST', '10.0.0.7')
        monkeypatch.setenv('HUELINK_USER', 'env-user')
        transport.queue({})
        runner.invoke(cli, ['lights'], obj={'codec': RequestCodec(transport)})
        assert transport.requests[0][1] == 'http://10.0.0.7/api/env-user/lights'


class TestInspectionCommands:
    """Test read-only commands."""

    def test_lights(self, invoke, transport):
        transport.queue({
            '2': {'name': 'Hall', 'modelid': 'LWB004', 'state': {'on': False}},
            '1': {'name': 'Desk', 'modelid': 'LCT001', 'state': {'on': True}},
        })
        result = invoke('lights')
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Light #1 'Desk' (LCT001) is ON",
            "Light #2 'Hall' (LWB004) is off",
        ]

    def test_lights_empty(self, invoke, transport):
        transport.queue({})
        assert 'No lights found' in invoke('lights').output

    def test_groups(self, invoke, transport):
        transport.queue({'1': {'name': 'Living room', 'lights': ['1', '2']}})
        result = invoke('groups')
        assert "Group #1 'Living room' (2 lights)" in result.output

    def test_info_dumps_json(self, invoke, transport):
        transport.queue({'config': {'name': 'Philips hue'}})
        result = invoke('info')
        assert json.loads(result.output) == {'config': {'name': 'Philips hue'}}

    def test_info_single_light(self, invoke, transport):
        transport.queue({'name': 'Desk'})
        invoke('info', '--light', '4')
        assert transport.requests[0][1] == 'http://10.0.0.1/api/test-user/lights/4'


class TestControlCommands:
    """Test commands that change light state."""

    def test_on(self, invoke, transport):
        transport.queue(SUCCESS)
        result = invoke('on', '1')
        assert result.exit_code == 0
        assert '✓ Light 1 turned ON' in result.output
        assert transport.requests == [('PUT', 'http://10.0.0.1/api/test-user/lights/1/state', {'on': True})]

    def test_off_group_with_transition(self, invoke, transport):
        transport.queue(SUCCESS)
        result = invoke('off', '0', '--group', '-t', '2500')
        assert result.exit_code == 0
        assert transport.requests[0] == ('PUT', 'http://10.0.0.1/api/test-user/groups/0/action',
                                         {'on': False, 'transitiontime': 25})

    def test_refused_command_exits_1(self, invoke, transport):
        transport.queue([{'error': {'type': 1, 'description': 'unauthorized user'}}])
        result = invoke('on', '1')
        assert result.exit_code == 1
        assert 'unauthorized user' in result.output

    def test_brightness(self, invoke, transport):
        transport.queue(SUCCESS)
        result = invoke('brightness', '3', '0.5')
        assert result.exit_code == 0
        assert transport.requests[0][2] == {'on': True, 'bri': 128}

    def test_brightness_out_of_range(self, invoke, transport):
        result = invoke('brightness', '3', '1.5')
        assert result.exit_code == 2
        assert transport.requests == []

    def test_colour_rgb(self, invoke, transport):
        transport.queue(SUCCESS)
        result = invoke('colour', '1', '--rgb', '1', '0', '0')
        assert result.exit_code == 0
        assert transport.requests[0][2]['xy'] == pytest.approx([0.7350, 0.2650], abs=1e-4)

    def test_colour_hsv_group(self, invoke, transport):
        transport.queue(SUCCESS)
        invoke('colour', '2', '--group', '--hsv', '46920', '255', '200')
        assert transport.requests[0] == ('PUT', 'http://10.0.0.1/api/test-user/groups/2/action',
                                         {'on': True, 'hue': 46920, 'sat': 255, 'bri': 200})

    def test_colour_xy(self, invoke, transport):
        transport.queue(SUCCESS)
        invoke('colour', '1', '--xy', '0.4', '0.5')
        assert transport.requests[0][2] == {'on': True, 'xy': [0.4, 0.5]}

    def test_colour_requires_exactly_one_value(self, invoke, transport):
        assert invoke('colour', '1').exit_code == 2
        assert invoke('colour', '1', '--xy', '0.4', '0.5', '--rgb', '1', '1', '1').exit_code == 2
        assert transport.requests == []

    def test_colour_black_rgb_is_an_error(self, invoke, transport):
        result = invoke('colour', '1', '--rgb', '0', '0', '0')
        assert result.exit_code == 1
        assert transport.requests == []


class TestAuthorizeCommand:
    """Test the authorize command and credential saving."""

    @patch('commands.setup.time.sleep')
    def test_retries_then_saves(self, mock_sleep, invoke, transport, isolated_config):
        transport.queue(LINK_BUTTON_ERROR, [{'success': {'username': 'granted-user'}}])

        result = invoke('authorize', '--attempts', '2', '--wait', '0', user=None)

        assert result.exit_code == 0
        assert 'link button not pressed' in result.output
        assert 'granted-user' in result.output
        assert load_config() == {'host': '10.0.0.1', 'credential': 'granted-user'}
        mock_sleep.assert_called_once_with(0)

    @patch('commands.setup.time.sleep')
    def test_gives_up(self, mock_sleep, invoke, transport, isolated_config):
        transport.queue(LINK_BUTTON_ERROR)

        result = invoke('authorize', '--attempts', '1', user=None)

        assert result.exit_code == 1
        assert not isolated_config.exists()
        mock_sleep.assert_not_called()

    def test_no_save(self, invoke, transport, isolated_config):
        transport.queue([{'success': {'username': 'granted-user'}}])
        result = invoke('authorize', '--no-save', user=None)
        assert result.exit_code == 0
        assert not isolated_config.exists()


class TestSetupAndDiscover:
    """Test setup and discover commands."""

    def test_setup_reports_connection(self, invoke, transport):
        transport.queue({'config': {'name': 'Hall bridge'}})
        result = invoke('setup')
        assert result.exit_code == 0
        assert 'Connected to Hall bridge at 10.0.0.1' in result.output

    def test_setup_rejected_credential(self, invoke, transport):
        transport.queue([{'error': {'type': 1, 'description': 'unauthorized user'}}])
        result = invoke('setup')
        assert result.exit_code == 1
        assert 'unauthorized user' in result.output

    def test_setup_without_credential_skips_check(self, invoke, transport):
        result = invoke('setup', user=None)
        assert result.exit_code == 0
        assert 'not set' in result.output
        assert transport.requests == []

    @patch('commands.setup.discover')
    def test_discover(self, mock_discover, runner):
        mock_discover.return_value = ['192.168.1.10', '192.168.1.11']
        result = runner.invoke(cli, ['discover'])
        assert 'Found 2 Hue bridges' in result.output
        assert '192.168.1.11' in result.output

    @patch('commands.setup.discover')
    def test_discover_nothing(self, mock_discover, runner):
        mock_discover.return_value = []
        result = runner.invoke(cli, ['discover'])
        assert 'No bridges found' in result.output


class TestMorse:
    """Test morse translation and the morse command."""

    def test_translate(self):
        assert translate(' sos ') == ['...', '---', '...']

    def test_translate_drops_unknown_characters(self):
        assert translate('E!') == ['.']

    def test_schedule_for_single_dot(self):
        assert blink_schedule('E') == [(True, 1), (False, 1), (False, 2)]

    def test_schedule_word_gap(self):
        """A space adds four units after the three-unit letter gap."""
        assert blink_schedule('E E')[3] == (False, 4)

    @patch('commands.morse.time.sleep')
    def test_morse_command(self, mock_sleep, invoke, transport):
        transport.queue(SUCCESS, SUCCESS, SUCCESS, SUCCESS)

        result = invoke('morse', 'EE', '--light', '2', '--unit', '100')

        assert result.exit_code == 0
        assert [r[2] for r in transport.requests] == [
            {'on': True, 'transitiontime': 0},
            {'on': False, 'transitiontime': 0},
            {'on': True, 'transitiontime': 0},
            {'on': False, 'transitiontime': 0},
        ]
        assert all(r[1].endswith('/lights/2/state') for r in transport.requests)

    @patch('commands.morse.time.sleep')
    def test_morse_stops_on_error(self, mock_sleep, invoke, transport):
        transport.queue([{'error': {'type': 3, 'description': 'resource, /lights/9, not available'}}])

        result = invoke('morse', 'SOS', '--light', '9')

        assert result.exit_code == 1
        assert len(transport.requests) == 1
        assert 'not available' in result.output
