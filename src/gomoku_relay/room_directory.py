import copy
import random
import string
import threading
import time
from typing import Any, Dict, List, Optional

from .models import Room

ROOM_ID_PREFIX = 'game-'
ROOM_ID_SUFFIX_LENGTH = 9
_ROOM_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_room_id() -> str:
    """Return a new room id of the form game-<millis>-<9 base36 chars>.

    Unique in practice but neither checked against existing rooms nor
    unguessable.
    """
    suffix = ''.join(random.choices(_ROOM_ID_ALPHABET, k=ROOM_ID_SUFFIX_LENGTH))
    return f"{ROOM_ID_PREFIX}{int(time.time() * 1000)}-{suffix}"


class RoomDirectory(object):
    """Maps room ids to room state.

    Rooms are kept in insertion order, which is also the order of
    list_joinable().  The lock is re-entrant; GameServer acquires it before
    the ConnectionRegistry lock for compound operations.

    """
    def __init__(self):
        self.lock = threading.RLock()
        self._rooms: Dict[str, Room] = {}

    def new_room_id(self) -> str:
        return generate_room_id()

    def create(self, room: Room) -> str:
        """Insert a room keyed by its id and return the id."""
        with self.lock:
            self._rooms[room.id] = room
        return room.id

    def get(self, room_id: Optional[str]) -> Optional[Room]:
        """Return the room, or None for an unknown or non-string id."""
        if not isinstance(room_id, str):
            return None
        with self.lock:
            return self._rooms.get(room_id)

    def delete(self, room_id: str):
        """Remove a room.  Deleting an unknown id is a no-op."""
        with self.lock:
            self._rooms.pop(room_id, None)

    def list_joinable(self) -> List[Dict[str, Any]]:
        """Snapshot of every room that has not started yet.

        A started room stays out of the listing even after it drops back to
        one player.
        """
        with self.lock:
            return [copy.deepcopy(room.summary())
                    for room in self._rooms.values() if not room.started]

    def __contains__(self, room_id: str) -> bool:
        with self.lock:
            return room_id in self._rooms

    def __len__(self) -> int:
        with self.lock:
            return len(self._rooms)
