"""
WebSocket event handlers for real-time game communication.

Every Socket.IO event is forwarded to GameServer.dispatch together with the
sender's sid; the handlers here only translate between Flask-SocketIO and
the relay's Command enum.
"""

from flask import request
from flask_socketio import emit
from loguru import logger

from .protocol import CLIENT_COMMANDS, Command, Event


def init_socketio_handlers(socketio, game_server):
    """Initialize WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle a new WebSocket connection.  No state until create/join."""
        logger.info(f"Connection {request.sid} established")

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle WebSocket disconnection."""
        game_server.dispatch(request.sid, Command.DISCONNECT)

    for command in CLIENT_COMMANDS:
        socketio.on_event(command.value, _make_handler(game_server, command))

    @socketio.on_error_default
    def handle_error(e):
        """Report an unexpected handler failure to the sender only."""
        logger.exception(f"Error handling event from {request.sid}: {e}")
        emit(Event.ERROR.value, {'message': f'Request failed: {str(e)}'})


def _make_handler(game_server, command):
    def handler(data=None):
        game_server.dispatch(request.sid, command, data)
    handler.__name__ = f"handle_{command.name.lower()}"
    return handler
