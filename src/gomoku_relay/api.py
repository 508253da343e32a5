"""
HTTP API routes for the relay server.

Only room discovery lives here; everything that changes state goes over
Socket.IO.
"""

from flask import Blueprint, current_app, jsonify

api_bp = Blueprint('api', __name__, url_prefix='/api')


def get_game_server():
    """Return the GameServer owned by the current application."""
    return current_app.extensions['gomoku_relay']


@api_bp.route('/rooms', methods=['GET'])
def list_rooms():
    """List rooms that are still waiting for a second player."""
    return jsonify({'rooms': get_game_server().list_joinable()}), 200
