"""
Message fan-out between the members of a room.

RelayDispatcher forwards opaque game payloads and delivers lifecycle events.
It never talks to Flask-SocketIO directly; it goes through a transport
object, which in production is SocketIOTransport and in tests a recorder.
"""

from typing import Any, Optional

from loguru import logger

from .connection_registry import ConnectionRegistry
from .protocol import Event


class SocketIOTransport(object):
    """Adapts a flask_socketio.SocketIO instance to the relay.

    Connections are addressed by their Socket.IO sid, and every sid is
    implicitly a room of its own, so sending to one connection and sending to
    a game room use the same emit call.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def emit(self, event: str, data: Any, to: str, skip: Optional[str] = None):
        self.socketio.emit(event, data, room=to, skip_sid=skip,
                           namespace=self.namespace)

    def enter_room(self, connection_id: str, room_id: str):
        self.socketio.server.enter_room(connection_id, room_id,
                                        namespace=self.namespace)

    def leave_room(self, connection_id: str, room_id: str):
        self.socketio.server.leave_room(connection_id, room_id,
                                        namespace=self.namespace)


class RelayDispatcher(object):
    """Routes payloads and notifications to room members."""

    def __init__(self, transport, connections: ConnectionRegistry):
        self.transport = transport
        self.connections = connections

    def subscribe(self, connection_id: str, room_id: str):
        self.transport.enter_room(connection_id, room_id)

    def unsubscribe(self, connection_id: str, room_id: str):
        self.transport.leave_room(connection_id, room_id)

    def notify_one(self, connection_id: str, event: Event, data: Any):
        """Send a private message that no other room member can see."""
        self.transport.emit(Event(event).value, data, to=connection_id)

    def notify_room(self, room_id: str, event: Event, data: Any,
                    skip: Optional[str] = None):
        """Send to every connection subscribed to the room, except `skip`."""
        self.transport.emit(Event(event).value, data, to=room_id, skip=skip)

    def relay_payload(self, connection_id: str, payload: Any) -> bool:
        """Forward a game payload verbatim to the sender's opponent.

        Returns False when the sender has no room, in which case nothing is
        sent.  The payload is never inspected.
        """
        with self.connections.lock:
            user = self.connections.lookup(connection_id)
            if user is None or not user.room_id:
                logger.debug(f"Dropping game data from {connection_id}: not in a room")
                return False

            self.notify_room(user.room_id, Event.GAME_DATA, payload, skip=connection_id)
        return True
