#!/usr/bin/env python3
"""
Socket.IO compatible console client for the Gomoku relay server.

This client connects to the Flask-SocketIO server and lets you create, join
and play a game from the command line.  Moves are sent as opaque gameData
payloads; the server does not check them.

Usage:
    python socketio_client.py http://localhost:1983

Commands:
    list - List rooms waiting for a second player
    create - Create a new game
    join <room_id> - Join an existing game
    move <cell> - Send a move, e.g. "move h8"
    leave - Leave the current game
    exit - Exit the program
"""

import sys
from typing import Optional

import requests
import socketio


class GomokuSocketIOClient:
    """Socket.IO client for the Gomoku relay server."""

    def __init__(self, server_url: str, username: str):
        self.server_url = server_url.rstrip('/')
        self.username = username
        self.room_id: Optional[str] = None
        self.color: Optional[int] = None
        self.sio = socketio.Client()
        self.setup_socketio_handlers()

    def setup_socketio_handlers(self):
        """Set up Socket.IO event handlers."""

        @self.sio.on('gameCreated')
        def on_game_created(data):
            self.room_id = data['roomId']
            self.color = data['color']
            print(f"✓ Created room {self.room_id}, you play {self._color_name(self.color)}")

        @self.sio.on('gameJoined')
        def on_game_joined(data):
            self.room_id = data['roomId']
            self.color = data['color']
            print(f"✓ Joined room {self.room_id}, you play {self._color_name(self.color)}")

        @self.sio.on('joinError')
        def on_join_error(data):
            print(f"✗ Join failed: {data.get('message', 'Unknown error')}")

        @self.sio.on('gameStarted')
        def on_game_started(data):
            players = ', '.join(f"{p['displayName']} ({self._color_name(p['color'])})"
                                for p in data['players'])
            print(f"🎯 Game started: {players}; {self._color_name(data['turn'])} moves first")

        @self.sio.on('gameData')
        def on_game_data(data):
            print(f"📥 Opponent: {data}")

        @self.sio.on('playerLeft')
        def on_player_left(data):
            print(f"📴 {data.get('displayName', 'Opponent')} left the game")

        @self.sio.on('error')
        def on_error(data):
            print(f"❌ Server error: {data.get('message', 'Unknown error')}")

        @self.sio.on('connect')
        def on_connect():
            print("🔌 Socket.IO connected")

        @self.sio.on('disconnect')
        def on_disconnect():
            print("🔌 Socket.IO disconnected")

    @staticmethod
    def _color_name(color) -> str:
        return {1: 'black', 2: 'white'}.get(color, str(color))

    def connect(self) -> bool:
        try:
            self.sio.connect(self.server_url)
            return True
        except socketio.exceptions.ConnectionError as e:
            print(f"✗ Socket.IO connection failed: {e}")
            return False

    def list_rooms(self):
        response = requests.get(f"{self.server_url}/api/rooms", timeout=5)
        rooms = response.json()['rooms']
        if not rooms:
            print("No open rooms")
        for room in rooms:
            host = room['players'][0]['displayName'] if room['players'] else '?'
            print(f"  {room['id']}  host: {host}  players: {room['playerCount']}/2")

    def handle_command(self, line: str) -> bool:
        """Run one command.  Returns False when the user wants to exit."""
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command == 'exit':
            return False
        if command == 'list':
            self.list_rooms()
        elif command == 'create':
            self.sio.emit('createGame', {'username': self.username})
        elif command == 'join' and len(args) == 1:
            self.sio.emit('joinGame', {'username': self.username, 'roomId': args[0]})
        elif command == 'move' and len(args) == 1:
            self.sio.emit('gameData', {'move': args[0], 'color': self.color})
        elif command == 'leave':
            self.sio.emit('leaveGame')
            self.room_id = None
            self.color = None
            print("✓ Left the game")
        else:
            print("Commands: list, create, join <room_id>, move <cell>, leave, exit")
        return True

    def run(self):
        if not self.connect():
            return
        try:
            for line in sys.stdin:
                if not self.handle_command(line.strip()):
                    break
        finally:
            if self.sio.connected:
                self.sio.disconnect()


def main():
    if len(sys.argv) != 2:
        print("Usage: python socketio_client.py <server_url>")
        sys.exit(1)

    username = input("Username: ").strip()
    if not username:
        print("Username is required")
        sys.exit(1)

    GomokuSocketIOClient(sys.argv[1], username).run()


if __name__ == '__main__':
    main()
