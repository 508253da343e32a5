import threading
from typing import Dict, Optional

from .models import Color, User


class ConnectionRegistry(object):
    """Tracks which live connections hold a room membership.

    The model here is:
    - A connection has a User record only between create/join and
      leave/disconnect.
    - A connection holds at most one membership, so registering again simply
      overwrites the previous record.

    The registry lock is re-entrant so that GameServer can hold it across a
    compound operation while still calling the methods below.

    """
    def __init__(self):
        self.lock = threading.RLock()
        self._users: Dict[str, User] = {}

    def register(self, connection_id: str, display_name: Optional[str],
                 room_id: Optional[str], color: Color) -> User:
        """Insert or overwrite the User record for a connection."""
        user = User(connection_id=connection_id, display_name=display_name,
                    room_id=room_id, color=color)
        with self.lock:
            self._users[connection_id] = user
        return user

    def lookup(self, connection_id: str) -> Optional[User]:
        with self.lock:
            return self._users.get(connection_id)

    def remove(self, connection_id: str):
        """Delete the record for a connection.  Removing an absent id is a no-op.

        """
        with self.lock:
            self._users.pop(connection_id, None)

    def __contains__(self, connection_id: str) -> bool:
        with self.lock:
            return connection_id in self._users

    def __len__(self) -> int:
        with self.lock:
            return len(self._users)
