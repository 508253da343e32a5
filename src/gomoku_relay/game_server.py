from contextlib import contextmanager
from typing import Any, Optional

from loguru import logger

from .connection_registry import ConnectionRegistry
from .models import Color, Player, Room
from .protocol import Command, Event
from .relay import RelayDispatcher
from .room_directory import RoomDirectory


class UserInputError(Exception):
    """Base class for errors caused by a bad client request.

    These are reported to the requesting connection only and never affect
    other connections or the server process.
    """

    message = 'Invalid request'

    def __init__(self, room_id: Optional[str] = None):
        self.room_id = room_id
        super().__init__(self.message)


class RoomNotFound(UserInputError):
    """Raised when joining a room id that is not in the directory."""

    message = 'Room does not exist'


class RoomFull(UserInputError):
    """Raised when joining a room that already started or has two players."""

    message = 'Room is full'


class AlreadyInRoom(UserInputError):
    """Raised when a connection tries to join the room it is already in."""

    message = 'Already in this room'


class GameServer(object):
    """Represents the relay server state.

    The model here is:
    - There is a set of live connections, each holding at most one room
      membership (ConnectionRegistry).
    - There is a set of rooms, each with a unique string ID and at most two
      players (RoomDirectory).
    - A room goes Created (1 player) -> Active (2 players, started) ->
      Degraded (1 player, still started) or deleted once it has no players.
    - Game data is relayed between the members of a room without being
      interpreted.

    Every operation that touches both registries holds the directory lock
    and then the registry lock until its notifications have been sent, so
    members of a room see events in the order they were applied.

    """
    def __init__(self, transport):
        """Initialize the GameServer with empty registries."""
        self.rooms = RoomDirectory()
        self.connections = ConnectionRegistry()
        self.relay = RelayDispatcher(transport, self.connections)

    @contextmanager
    def _locked(self):
        with self.rooms.lock, self.connections.lock:
            yield

    def dispatch(self, connection_id: str, command: Command, data: Any = None):
        """Single entry point for everything a connection can do.

        `data` is the raw event payload.  Bad requests are answered with a
        joinError to the requester; nothing here raises for client input.
        Raises ValueError if `command` is not a Command value.

        """
        command = Command(command)
        if command is Command.CREATE_GAME:
            return self.create_room(connection_id, _field(data, 'username'))
        if command is Command.JOIN_GAME:
            try:
                return self.join_room(connection_id, _field(data, 'username'),
                                      _field(data, 'roomId'))
            except UserInputError as e:
                logger.info(f"Join by {connection_id} to room {e.room_id} rejected: {e}")
                self.relay.notify_one(connection_id, Event.JOIN_ERROR, {'message': str(e)})
                return None
        if command is Command.GAME_DATA:
            return self.relay.relay_payload(connection_id, data)
        if command is Command.LEAVE_GAME:
            return self.leave_room(connection_id)
        return self.handle_disconnect(connection_id)

    def create_room(self, connection_id: str, display_name: Optional[str]) -> str:
        """Create a room with the caller as its only (FIRST) player.

        Always succeeds and returns the new room id.  A caller that is still
        in another room leaves it first.

        """
        with self._locked():
            self._leave_current_room(connection_id)

            room_id = self.rooms.new_room_id()
            room = Room(id=room_id, players=[Player(connection_id, display_name, Color.FIRST)])
            self.rooms.create(room)
            self.connections.register(connection_id, display_name, room_id, Color.FIRST)
            self.relay.subscribe(connection_id, room_id)

            self.relay.notify_one(connection_id, Event.GAME_CREATED,
                                  {'roomId': room_id, 'color': int(Color.FIRST)})

        logger.info(f"{display_name} created game room {room_id}")
        return room_id

    def join_room(self, connection_id: str, display_name: Optional[str],
                  room_id: Optional[str]) -> Room:
        """Add the caller to a waiting room as the SECOND player and start it.

        - Raises RoomNotFound if the room doesn't exist.
        - Raises RoomFull if the room has two players or has already started.
        - Raises AlreadyInRoom if the caller created that room.

        On success the joiner gets gameJoined and then every member gets
        gameStarted with the full player list.

        """
        with self._locked():
            room = self.rooms.get(room_id)
            if room is None:
                raise RoomNotFound(room_id)
            if room.is_full or room.started:
                raise RoomFull(room_id)
            if room.find_player(connection_id) is not None:
                raise AlreadyInRoom(room_id)

            self._leave_current_room(connection_id)

            room.players.append(Player(connection_id, display_name, Color.SECOND))
            room.started = True
            self.connections.register(connection_id, display_name, room_id, Color.SECOND)
            self.relay.subscribe(connection_id, room_id)

            self.relay.notify_one(connection_id, Event.GAME_JOINED,
                                  {'roomId': room_id, 'color': int(Color.SECOND)})
            self.relay.notify_room(room_id, Event.GAME_STARTED, {
                'players': room.players_as_dicts(),
                'turn': int(room.turn),
            })

        logger.info(f"{display_name} joined game room {room_id}")
        return room

    def leave_room(self, connection_id: str) -> bool:
        """Voluntarily leave the current room.

        Returns False (and does nothing) if the connection isn't in a room.

        """
        with self._locked():
            return self._remove_member(connection_id, unsubscribe=True)

    def handle_disconnect(self, connection_id: str) -> bool:
        """Tear down the membership of a connection the transport lost.

        Same room bookkeeping as leave_room, but the connection is already
        gone: it is neither unsubscribed nor notified.

        """
        with self._locked():
            removed = self._remove_member(connection_id, unsubscribe=False)
        if not removed:
            logger.debug(f"Connection {connection_id} disconnected without a room")
        return removed

    def list_joinable(self):
        return self.rooms.list_joinable()

    def _leave_current_room(self, connection_id: str):
        user = self.connections.lookup(connection_id)
        if user is not None and user.room_id:
            self._remove_member(connection_id, unsubscribe=True)

    def _remove_member(self, connection_id: str, unsubscribe: bool) -> bool:
        """Shared teardown for leave and disconnect.  Caller holds both locks."""
        user = self.connections.lookup(connection_id)
        if user is None or not user.room_id:
            return False

        room_id = user.room_id
        room = self.rooms.get(room_id)
        self.connections.remove(connection_id)
        if unsubscribe:
            self.relay.unsubscribe(connection_id, room_id)

        if room is not None:
            room.remove_player(connection_id)
            if room.is_empty:
                self.rooms.delete(room_id)
                logger.info(f"Game room {room_id} is empty and was deleted")
            else:
                self.relay.notify_room(room_id, Event.PLAYER_LEFT, {
                    'connectionId': connection_id,
                    'displayName': user.display_name,
                }, skip=connection_id)

        action = 'left game room' if unsubscribe else 'disconnected from game room'
        logger.info(f"{user.display_name} {action} {room_id}")
        return True


def _field(data: Any, name: str):
    """Read a field from an event payload, treating non-dicts as empty."""
    if isinstance(data, dict):
        return data.get(name)
    return None
