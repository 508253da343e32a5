"""
Tests for the application factory and configuration.
"""

import pytest

from gomoku_relay.app import create_app
from gomoku_relay.config import DEFAULT_PORT, get_local_ip, load_config
from gomoku_relay.game_server import GameServer


def test_create_app():
    """Test that the app factory creates a valid Flask app."""
    app, socketio = create_app()
    assert app is not None
    assert socketio is not None
    assert app.config['SECRET_KEY'] is not None
    assert isinstance(app.extensions['gomoku_relay'], GameServer)


def test_create_app_overrides(monkeypatch):
    monkeypatch.setenv('PORT', '5000')
    app, _ = create_app({'PORT': 6000, 'TESTING': True})
    assert app.config['PORT'] == 6000
    assert app.config['TESTING'] is True


class TestLoadConfig:
    """Test cases for load_config."""

    def test_defaults(self):
        config = load_config({})
        assert config['PORT'] == DEFAULT_PORT == 1983
        assert config['HOST'] == '0.0.0.0'
        assert config['LOG_LEVEL'] == 'INFO'
        assert config['DEBUG'] is False
        assert config['PING_TIMEOUT'] == 60
        assert config['PING_INTERVAL'] == 25

    def test_port_from_environment(self):
        assert load_config({'PORT': '8080'})['PORT'] == 8080

    def test_empty_port_uses_default(self):
        assert load_config({'PORT': ''})['PORT'] == DEFAULT_PORT

    def test_invalid_port(self):
        with pytest.raises(ValueError):
            load_config({'PORT': 'eighty'})

    def test_other_overrides(self):
        config = load_config({
            'HOST': '127.0.0.1',
            'LOG_LEVEL': 'debug',
            'SECRET_KEY': 's3cret',
            'DEBUG': 'true',
        })
        assert config['HOST'] == '127.0.0.1'
        assert config['LOG_LEVEL'] == 'DEBUG'
        assert config['SECRET_KEY'] == 's3cret'
        assert config['DEBUG'] is True

    def test_debug_false_values(self):
        assert load_config({'DEBUG': '0'})['DEBUG'] is False
        assert load_config({'DEBUG': 'no'})['DEBUG'] is False

    def test_defaults_not_mutated(self):
        load_config({'PORT': '1234'})
        assert load_config({})['PORT'] == DEFAULT_PORT


def test_get_local_ip():
    address = get_local_ip()
    assert isinstance(address, str)
    assert address == 'localhost' or address.count('.') == 3
