"""
Tests for the RelayDispatcher and the Socket.IO transport adapter.
"""

from unittest.mock import MagicMock

from gomoku_relay.protocol import Event
from gomoku_relay.relay import SocketIOTransport


class TestRelayPayload:
    """Test cases for relaying game data."""

    def test_relay_from_connection_without_room(self, server, transport):
        assert server.relay.relay_payload("sid-nobody", {'move': 'h8'}) is False
        assert transport.total_messages == 0

    def test_relay_after_leaving(self, server, transport):
        room_id = server.create_room("sid-a", "Alice")
        server.join_room("sid-b", "Bob", room_id)
        server.leave_room("sid-a")
        transport.clear()

        assert server.relay.relay_payload("sid-a", {'move': 'h8'}) is False
        assert transport.total_messages == 0

    def test_relay_reaches_opponent_only(self, server, transport):
        room_id = server.create_room("sid-a", "Alice")
        server.join_room("sid-b", "Bob", room_id)
        other_room = server.create_room("sid-c", "Carol")
        transport.clear()

        payload = {'type': 'move', 'x': 7, 'y': 7, 'meta': [1, None, {'nested': True}]}
        assert server.relay.relay_payload("sid-b", payload) is True

        assert transport.messages("sid-a") == [('gameData', payload)]
        assert transport.messages("sid-b") == []
        assert transport.messages("sid-c") == []
        assert other_room != room_id

    def test_relay_forwards_any_payload_type(self, server, transport):
        room_id = server.create_room("sid-a", "Alice")
        server.join_room("sid-b", "Bob", room_id)
        transport.clear()

        for payload in ["raw text", 42, ["a", "b"], b"\x00\x01", None]:
            server.relay.relay_payload("sid-a", payload)

        relayed = transport.messages("sid-b", 'gameData')
        assert relayed == ["raw text", 42, ["a", "b"], b"\x00\x01", None]

    def test_relay_in_waiting_room_has_no_recipient(self, server, transport):
        server.create_room("sid-a", "Alice")
        transport.clear()

        assert server.relay.relay_payload("sid-a", {'move': 'h8'}) is True
        assert transport.total_messages == 0


class TestNotifications:
    """Test cases for the broadcast primitives."""

    def test_notify_one_is_private(self, server, transport):
        room_id = server.create_room("sid-a", "Alice")
        server.join_room("sid-b", "Bob", room_id)
        transport.clear()

        server.relay.notify_one("sid-a", Event.JOIN_ERROR, {'message': 'x'})

        assert transport.messages("sid-a") == [('joinError', {'message': 'x'})]
        assert transport.messages("sid-b") == []

    def test_notify_room_reaches_subscribers_only(self, server, transport):
        room_id = server.create_room("sid-a", "Alice")
        server.join_room("sid-b", "Bob", room_id)
        server.create_room("sid-c", "Carol")
        transport.clear()

        server.relay.notify_room(room_id, Event.PLAYER_LEFT, {'connectionId': 'x'})

        assert transport.messages("sid-a", 'playerLeft') == [{'connectionId': 'x'}]
        assert transport.messages("sid-b", 'playerLeft') == [{'connectionId': 'x'}]
        assert transport.messages("sid-c") == []


class TestSocketIOTransport:
    """Test cases for the flask_socketio adapter."""

    def setup_method(self):
        self.socketio = MagicMock()
        self.transport = SocketIOTransport(self.socketio)

    def test_emit(self):
        self.transport.emit('gameData', {'move': 'h8'}, to='room-1', skip='sid-a')
        self.socketio.emit.assert_called_once_with(
            'gameData', {'move': 'h8'}, room='room-1', skip_sid='sid-a', namespace='/')

    def test_enter_and_leave_room(self):
        self.transport.enter_room('sid-a', 'room-1')
        self.transport.leave_room('sid-a', 'room-1')
        self.socketio.server.enter_room.assert_called_once_with('sid-a', 'room-1', namespace='/')
        self.socketio.server.leave_room.assert_called_once_with('sid-a', 'room-1', namespace='/')
