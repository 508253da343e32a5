"""Contains the basic data structures shared by the relay server.

Rooms and users are plain dataclasses; the registries in
connection_registry.py and room_directory.py own them, and game_server.py
mutates them.

"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional


class Color(IntEnum):
    """Stone color, fixed for the lifetime of a room membership.

    The integer values are what goes over the wire (1 = black, 2 = white).
    """
    FIRST = 1
    SECOND = 2


@dataclass
class Player(object):
    """Room-scoped view of a connected user.

    Attributes
    ----------
    connection_id : str
        Socket.IO session id of the player's connection
    display_name : str or None
        Name the player gave when creating or joining, None if omitted
    color : Color
        FIRST for the creator, SECOND for the joiner
    """
    connection_id: str
    display_name: Optional[str]
    color: Color

    def to_dict(self) -> Dict[str, Any]:
        return {
            'connectionId': self.connection_id,
            'displayName': self.display_name,
            'color': int(self.color),
        }


@dataclass
class User(object):
    """A connection that currently holds a room membership."""
    connection_id: str
    display_name: Optional[str]
    room_id: Optional[str]
    color: Color


@dataclass
class Room(object):
    """State of a single game room.

    Attributes
    ----------
    id : str
        Unique room identifier
    players : List[Player]
        Members in join order, at most `capacity` of them
    started : bool
        Set once the second player joins, never reset
    turn : Color
        Whose turn it is; relayed game data carries turn changes, so the
        server never updates this
    """
    capacity = 2

    id: str
    players: List[Player] = field(default_factory=list)
    started: bool = False
    turn: Color = Color.FIRST

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.capacity

    @property
    def is_empty(self) -> bool:
        return not self.players

    def find_player(self, connection_id: str) -> Optional[Player]:
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None

    def remove_player(self, connection_id: str) -> Optional[Player]:
        """Remove and return the player bound to the connection, if any."""
        player = self.find_player(connection_id)
        if player is not None:
            self.players = [p for p in self.players if p.connection_id != connection_id]
        return player

    def players_as_dicts(self) -> List[Dict[str, Any]]:
        return [player.to_dict() for player in self.players]

    def summary(self) -> Dict[str, Any]:
        """Directory listing entry for this room."""
        return {
            'id': self.id,
            'players': self.players_as_dicts(),
            'playerCount': len(self.players),
        }
