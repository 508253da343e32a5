"""
Shared fixtures for the relay tests.
"""

import pytest

from gomoku_relay.app import create_app
from gomoku_relay.game_server import GameServer


class RecordingTransport(object):
    """In-memory stand-in for SocketIOTransport.

    Keeps Socket.IO's room semantics (a sid is addressable on its own, a
    room reaches its subscribers) and records every delivered message per
    connection.
    """

    def __init__(self):
        self.rooms = {}  # room_id -> set of connection ids
        self.received = {}  # connection_id -> list of (event, data)

    def emit(self, event, data, to, skip=None):
        recipients = set(self.rooms.get(to, set()))
        if to not in self.rooms:
            recipients.add(to)
        recipients.discard(skip)
        for connection_id in recipients:
            self.received.setdefault(connection_id, []).append((event, data))

    def enter_room(self, connection_id, room_id):
        self.rooms.setdefault(room_id, set()).add(connection_id)

    def leave_room(self, connection_id, room_id):
        self.rooms.get(room_id, set()).discard(connection_id)

    def messages(self, connection_id, event=None):
        messages = self.received.get(connection_id, [])
        if event is None:
            return list(messages)
        return [data for name, data in messages if name == event]

    def clear(self):
        self.received = {}

    @property
    def total_messages(self):
        return sum(len(messages) for messages in self.received.values())


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def server(transport):
    return GameServer(transport)


@pytest.fixture
def app():
    """Create a test Flask application."""
    app, socketio = create_app({'TESTING': True})
    app.socketio = socketio  # Store socketio instance for testing
    return app


@pytest.fixture
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()
