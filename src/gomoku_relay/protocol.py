"""
Socket.IO event names understood and produced by the relay server.

Inbound events map one-to-one onto the commands GameServer.dispatch
accepts; the transport disconnect is modelled as a command as well so that
every state change goes through the same entry point.
"""

from enum import Enum


class Command(str, Enum):
    CREATE_GAME = 'createGame'
    JOIN_GAME = 'joinGame'
    GAME_DATA = 'gameData'
    LEAVE_GAME = 'leaveGame'
    DISCONNECT = 'disconnect'


class Event(str, Enum):
    GAME_CREATED = 'gameCreated'
    GAME_JOINED = 'gameJoined'
    JOIN_ERROR = 'joinError'
    GAME_STARTED = 'gameStarted'
    GAME_DATA = 'gameData'
    PLAYER_LEFT = 'playerLeft'
    ERROR = 'error'


# Events a client may send; 'disconnect' is raised by the transport itself
CLIENT_COMMANDS = (
    Command.CREATE_GAME,
    Command.JOIN_GAME,
    Command.GAME_DATA,
    Command.LEAVE_GAME,
)
