"""
Configuration defaults and environment overrides for the relay server.

Values end up in Flask's app.config; anything passed to create_app() wins
over the environment, which wins over the defaults below.
"""

import os
import socket

DEFAULT_PORT = 1983

DEFAULTS = {
    'SECRET_KEY': 'dev-key-change-in-production',
    'DEBUG': False,
    'HOST': '0.0.0.0',
    'PORT': DEFAULT_PORT,
    'LOG_LEVEL': 'INFO',
    'PING_TIMEOUT': 60,
    'PING_INTERVAL': 25,
    'MAX_HTTP_BUFFER_SIZE': 100_000_000,
}

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def load_config(environ=None):
    """Build the configuration dict from the defaults and the environment.

    Raises ValueError if PORT is set but is not an integer.
    """
    if environ is None:
        environ = os.environ

    config = dict(DEFAULTS)
    if environ.get('PORT'):
        try:
            config['PORT'] = int(environ['PORT'])
        except ValueError:
            raise ValueError(f"Invalid PORT '{environ['PORT']}' (must be an integer)")
    if environ.get('HOST'):
        config['HOST'] = environ['HOST']
    if environ.get('LOG_LEVEL'):
        config['LOG_LEVEL'] = environ['LOG_LEVEL'].upper()
    if environ.get('SECRET_KEY'):
        config['SECRET_KEY'] = environ['SECRET_KEY']
    if environ.get('DEBUG'):
        config['DEBUG'] = environ['DEBUG'].strip().lower() in _TRUE_VALUES
    return config


def get_local_ip():
    """Return this host's LAN IPv4 address, or 'localhost' if there is none.

    Only used to print a reachable URL at startup.  Connecting a UDP socket
    sends no packets; it just makes the OS pick the outbound interface.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(('10.255.255.255', 1))
        address = sock.getsockname()[0]
    except OSError:
        return 'localhost'
    finally:
        sock.close()

    if address.startswith('127.') or address == '0.0.0.0':
        return 'localhost'
    return address
